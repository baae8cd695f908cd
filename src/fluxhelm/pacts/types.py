"""Public data types: containers, image write-back instructions, the Workload contract."""

import enum
from dataclasses import dataclass

from fluxhelm.core.image import ImageRef


@dataclass(frozen=True)
class Container:
    """A container found in a workload: its name and current image."""
    name: str
    image: ImageRef


class ImageShape(enum.Enum):
    """How an image declaration is laid out in a values mapping."""
    FLAT_COMBINED = "flat-combined"  # image: repo:tag
    FLAT_SPLIT = "flat-split"  # image: repo + tag: tag
    NESTED_OBJECT = "nested-object"  # image: {repository: repo, tag: tag}


@dataclass(frozen=True)
class ImageSetter:
    """Where and how to write an image back into a values tree.

    *path* is the chain of keys from the root of the values tree to the
    mapping holding the ``image`` field: empty for an image declared directly
    under ``values``, one key for a per-container declaration.
    """
    path: tuple = ()
    shape: ImageShape = ImageShape.FLAT_COMBINED


class Workload:
    """Base class for deployable resources that expose containers."""
    kind: str = ""

    def containers(self) -> list[Container]:
        """Containers of this resource, in a stable order. Override in subclasses."""
        return []

    def set_container_image(self, container: str, ref: ImageRef) -> None:
        """Point *container* at *ref*. Override in subclasses."""
        raise NotImplementedError
