"""Key handling for values trees from API and YAML origins.

Values read from the Kubernetes API are JSON objects (string keys only);
values read from a YAML file may use any scalar as a mapping key. The tree is
interpreted as it is, never rewritten: keys are only rendered as strings for
ordering and for naming containers.
"""

from collections.abc import Mapping


def key_string(key) -> str:
    """Render a mapping key as a string, spelling YAML scalars the YAML way."""
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def sorted_keys(values: Mapping) -> list:
    """Keys of *values* in lexicographic order of their string form."""
    return sorted(values, key=key_string)
