"""Constants shared by the interpreter, the resource model and the CLI."""

# Container name for an image declared directly under `values` (no enclosing
# key). Callers use it as a dictionary key: do not change it.
RELEASE_CONTAINER_NAME = "chart-image"

# Custom resource kinds whose spec.values is interpreted for images
HELM_RELEASE_KINDS = ("FluxHelmRelease", "HelmRelease")

# Field names of the recognised image shapes
IMAGE_KEY = "image"
TAG_KEY = "tag"
REPOSITORY_KEY = "repository"

# Namespace used in resource ids when metadata.namespace is absent
DEFAULT_NAMESPACE = "default"

# Registry hosts that mean Docker Hub
DOCKER_HUB_HOST = "index.docker.io"
OLD_DOCKER_HUB_HOST = "docker.io"
