"""Exceptions raised by fluxhelm. All derive from FluxHelmError."""


class FluxHelmError(Exception):
    """Base class for all fluxhelm errors."""


class ImageRefError(FluxHelmError, ValueError):
    """An image string is blank or not of the form ``[domain/]image[:tag]``."""


class ContainerNotFoundError(FluxHelmError, LookupError):
    """No image declaration with the requested container name."""

    def __init__(self, container: str, kind: str = "FluxHelmRelease"):
        self.container = container
        self.kind = kind
        super().__init__(f"did not find container {container} in {kind}")


class ImageLocationError(FluxHelmError):
    """A setter no longer matches the values it was read from."""


class ManifestError(FluxHelmError):
    """A manifest cannot be loaded, or a resource id does not exist."""
