"""Container image references, parsed from and rendered as ``[domain/]image[:tag]``."""

import re
from dataclasses import dataclass, replace

from fluxhelm.core.constants import DOCKER_HUB_HOST, OLD_DOCKER_HUB_HOST
from fluxhelm.pacts.errors import ImageRefError

_DOMAIN_COMPONENT = r'(?:[a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9])'

# First path element that names a registry rather than a Docker Hub user
_DOMAIN_RE = re.compile(
    rf'^{_DOMAIN_COMPONENT}(?:\.{_DOMAIN_COMPONENT})*:[0-9]+$'   # host:port
    rf'|^{_DOMAIN_COMPONENT}(?:\.{_DOMAIN_COMPONENT})+$'         # dotted hostname
    r'|^localhost$'
)

_MALFORMED = "expected image name as either <image>:<tag> or just <image>"


@dataclass(frozen=True)
class ImageName:
    """Repository part of an image reference: registry domain + image path."""
    domain: str = ""
    image: str = ""

    def __str__(self) -> str:
        if not self.image:
            return ""
        if self.domain:
            return f"{self.domain}/{self.image}"
        return self.image

    def _is_docker_hub(self) -> bool:
        return self.domain in ("", OLD_DOCKER_HUB_HOST, DOCKER_HUB_HOST)

    @property
    def repository(self) -> str:
        """Repository path as a registry sees it.

        Docker Hub images without an organisation live under ``library/``;
        images on other registries keep their domain.
        """
        if self._is_docker_hub():
            if "/" not in self.image:
                return f"library/{self.image}"
            return self.image
        return f"{self.domain}/{self.image}"

    def canonical(self) -> "ImageName":
        """Return the fully-qualified name (Docker Hub domain filled in)."""
        if self._is_docker_hub():
            return ImageName(DOCKER_HUB_HOST, self.repository)
        return self


@dataclass(frozen=True)
class ImageRef:
    """An image name plus a free-form tag (empty when untagged)."""
    name: ImageName
    tag: str = ""

    def __str__(self) -> str:
        if not self.tag:
            return str(self.name)
        return f"{self.name}:{self.tag}"

    @property
    def domain(self) -> str:
        return self.name.domain

    @property
    def image(self) -> str:
        return self.name.image

    def with_new_tag(self, tag: str) -> "ImageRef":
        """Copy of this reference with *tag* in place of the current tag."""
        return replace(self, tag=tag)


def parse_ref(s: str) -> ImageRef:
    """Parse ``[domain/]image[:tag]`` into an ImageRef.

    A two-element path only has a domain when the first element looks like a
    host (``localhost``, dotted name or ``host:port``); with three or more
    elements the first one is always the domain. Raises ImageRefError on a
    blank or malformed string.
    """
    if not s:
        raise ImageRefError(f"blank image name: parsing {s!r}")
    if s.startswith("/") or s.endswith("/"):
        raise ImageRefError(f"{_MALFORMED}: parsing {s!r}")

    domain = ""
    elements = s.split("/")
    if len(elements) == 1:
        image = s
    elif len(elements) == 2:
        if _DOMAIN_RE.match(elements[0]):
            domain, image = elements
        else:
            image = s
    else:
        domain = elements[0]
        image = "/".join(elements[1:])

    tag = ""
    image_parts = image.split(":")
    if len(image_parts) == 2:
        image, tag = image_parts
        if not image or not tag:
            raise ImageRefError(f"{_MALFORMED}: parsing {s!r}")
    elif len(image_parts) > 2:
        raise ImageRefError(f"{_MALFORMED}: parsing {s!r}")
    return ImageRef(ImageName(domain, image), tag)


def parse_name(s: str) -> ImageName:
    """Parse an image name that must not carry a tag."""
    ref = parse_ref(s)
    if ref.tag:
        raise ImageRefError(f"expected image name without tag: parsing {s!r}")
    return ref.name
