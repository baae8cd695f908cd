"""FluxHelmRelease resources and their containers."""

from fluxhelm.core.constants import DEFAULT_NAMESPACE
from fluxhelm.core.image import ImageRef
from fluxhelm.core.interpret import apply_setter, find_containers
from fluxhelm.pacts.errors import ContainerNotFoundError
from fluxhelm.pacts.types import Container, Workload


def release_containers(values: dict) -> list[Container]:
    """List the containers declared in *values*, in visiting order."""
    found: list[Container] = []
    find_containers(values, lambda name, ref, _setter: found.append(Container(name, ref)))
    return found


def set_release_image(values: dict, container: str, ref: ImageRef,
                      kind: str = "FluxHelmRelease") -> None:
    """Rewrite the image of *container* in *values*, keeping its shape.

    Only the first declaration named *container* is rewritten. Raises
    ContainerNotFoundError (and leaves *values* untouched) when there is none.
    """
    found = False

    def _visit(name, _current, setter):
        nonlocal found
        if name == container and not found:
            apply_setter(values, setter, ref)
            found = True

    find_containers(values, _visit)
    if not found:
        raise ContainerNotFoundError(container, kind)


class FluxHelmRelease(Workload):
    """A HelmRelease manifest whose ``spec.values`` declares container images.

    The manifest dict is kept by reference: image updates are written into
    it, so dumping the original document list picks them up. Keys and values
    other than the image fields are never rewritten.
    """
    kind = "FluxHelmRelease"

    def __init__(self, doc: dict, source: str = ""):
        self.doc = doc
        self.source = source
        self.kind = doc.get("kind") or type(self).kind
        spec = doc.get("spec")
        if isinstance(spec, dict) and isinstance(spec.get("values"), dict):
            self.values = spec["values"]
        else:
            self.values = {}

    @property
    def namespace(self) -> str:
        return (self.doc.get("metadata") or {}).get("namespace") or DEFAULT_NAMESPACE

    @property
    def name(self) -> str:
        return (self.doc.get("metadata") or {}).get("name", "")

    @property
    def resource_id(self) -> str:
        """``<namespace>:<kind>/<name>``, kind lowercased."""
        return f"{self.namespace}:{self.kind.lower()}/{self.name}"

    def containers(self) -> list[Container]:
        return release_containers(self.values)

    def set_container_image(self, container: str, ref: ImageRef) -> None:
        set_release_image(self.values, container, ref, kind=self.kind)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.resource_id!r})"
