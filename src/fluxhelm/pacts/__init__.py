"""Public contracts: the Workload interface and the types it speaks."""

from fluxhelm.pacts.errors import ContainerNotFoundError, FluxHelmError
from fluxhelm.pacts.types import Container, ImageSetter, ImageShape, Workload
from fluxhelm.core.image import ImageRef

__all__ = [
    "Container",
    "ImageRef",
    "ImageSetter",
    "ImageShape",
    "Workload",
    "FluxHelmError",
    "ContainerNotFoundError",
]
