"""fluxhelm finds and updates container images in HelmRelease values.

Re-exports the public API. Callers can import directly from here or from
fluxhelm.pacts.
"""

from fluxhelm.pacts.errors import (
    FluxHelmError, ImageRefError, ContainerNotFoundError,
    ImageLocationError, ManifestError,
)
from fluxhelm.pacts.types import Container, ImageSetter, ImageShape, Workload
from fluxhelm.core.constants import RELEASE_CONTAINER_NAME, HELM_RELEASE_KINDS
from fluxhelm.core.image import ImageName, ImageRef, parse_ref, parse_name
from fluxhelm.core.values import key_string, sorted_keys
from fluxhelm.core.interpret import find_containers, apply_setter
from fluxhelm.core.release import (
    FluxHelmRelease, release_containers, set_release_image,
)
from fluxhelm.io.parsing import load_documents, parse_multidoc, parse_manifests

__all__ = [
    # Errors
    "FluxHelmError",
    "ImageRefError",
    "ContainerNotFoundError",
    "ImageLocationError",
    "ManifestError",
    # Types & base classes
    "Container",
    "ImageSetter",
    "ImageShape",
    "Workload",
    "FluxHelmRelease",
    # Image references
    "ImageName",
    "ImageRef",
    "parse_ref",
    "parse_name",
    # Values interpretation
    "RELEASE_CONTAINER_NAME",
    "HELM_RELEASE_KINDS",
    "key_string",
    "sorted_keys",
    "find_containers",
    "apply_setter",
    "release_containers",
    "set_release_image",
    # Manifest loading
    "load_documents",
    "parse_multidoc",
    "parse_manifests",
]
