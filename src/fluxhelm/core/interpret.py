"""Image-location interpreter: find image declarations in HelmRelease values.

Three shapes are recognised, either directly under ``values`` (the one image
of the release) or one level down under a key naming the container::

    image: repo/app:v1              # flat, combined

    image: repo/app                 # flat, split
    tag: v1

    image:                          # nested object
      repository: repo/app
      tag: v1

Anything else (wrong types, unparsable image strings, deeper nesting) is
ordinary chart configuration and is skipped without complaint.
"""

from collections.abc import Callable, Mapping, MutableMapping

from fluxhelm.core.constants import (
    IMAGE_KEY, REPOSITORY_KEY, RELEASE_CONTAINER_NAME, TAG_KEY,
)
from fluxhelm.core.image import ImageRef, parse_ref
from fluxhelm.core.values import key_string, sorted_keys
from fluxhelm.pacts.errors import ImageLocationError, ImageRefError
from fluxhelm.pacts.types import ImageSetter, ImageShape

Visitor = Callable[[str, ImageRef, ImageSetter], None]


def _try_parse(s: str) -> ImageRef | None:
    """Parse an image string, or None if it is not one."""
    try:
        return parse_ref(s)
    except ImageRefError:
        return None


def _interpret_mapping(mapping: Mapping, path: tuple) -> tuple[ImageRef, ImageSetter] | None:
    """Match *mapping* against the image shapes; None when nothing matches."""
    img = mapping.get(IMAGE_KEY)
    if isinstance(img, str):
        ref = _try_parse(img)
        if ref is None:
            return None
        tag = mapping.get(TAG_KEY)
        if isinstance(tag, str):
            return ref.with_new_tag(tag), ImageSetter(path, ImageShape.FLAT_SPLIT)
        return ref, ImageSetter(path, ImageShape.FLAT_COMBINED)
    if isinstance(img, Mapping):
        repo = img.get(REPOSITORY_KEY)
        tag = img.get(TAG_KEY)
        if isinstance(repo, str) and isinstance(tag, str):
            ref = _try_parse(f"{repo}:{tag}")
            if ref is not None:
                return ref, ImageSetter(path, ImageShape.NESTED_OBJECT)
    return None


def find_containers(values: Mapping, visit: Visitor) -> None:
    """Call ``visit(name, ref, setter)`` for each image declaration in *values*.

    Declarations are visited in sorted key order. An image directly under
    *values* is reported as RELEASE_CONTAINER_NAME and ends the scan; the
    per-container keys are then not looked at. Exceptions raised by *visit*
    propagate and stop the scan.
    """
    if not isinstance(values, Mapping):
        return

    found = _interpret_mapping(values, ())
    if found:
        visit(RELEASE_CONTAINER_NAME, *found)
        return

    for key in sorted_keys(values):
        sub = values[key]
        if not isinstance(sub, Mapping):
            continue
        found = _interpret_mapping(sub, (key,))
        if found:
            visit(key_string(key), *found)


def _resolve(values: MutableMapping, path: tuple) -> MutableMapping:
    """Follow *path* from the root of *values* to the mapping it names."""
    target = values
    for key in path:
        if not isinstance(target, MutableMapping) or key not in target:
            raise ImageLocationError(f"no values at {'.'.join(map(key_string, path))}")
        target = target[key]
    if not isinstance(target, MutableMapping):
        raise ImageLocationError(f"values at {'.'.join(map(key_string, path))} is not a mapping")
    return target


def apply_setter(values: MutableMapping, setter: ImageSetter, ref: ImageRef) -> None:
    """Write *ref* into *values* at the location and in the shape of *setter*."""
    target = _resolve(values, setter.path)
    img = target.get(IMAGE_KEY)
    where = ".".join(map(key_string, setter.path + (IMAGE_KEY,)))

    if setter.shape is ImageShape.NESTED_OBJECT:
        if not isinstance(img, MutableMapping):
            raise ImageLocationError(f"{where} is no longer a repository/tag object")
        img[REPOSITORY_KEY] = str(ref.name)
        img[TAG_KEY] = ref.tag
        return

    if not isinstance(img, str):
        raise ImageLocationError(f"{where} is no longer a string")
    if setter.shape is ImageShape.FLAT_SPLIT:
        target[IMAGE_KEY] = str(ref.name)
        target[TAG_KEY] = ref.tag
    else:
        target[IMAGE_KEY] = str(ref)
