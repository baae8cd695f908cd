"""Output: container listings, manifest write-back, warnings."""

import sys

import yaml


def format_containers(releases: dict) -> list[str]:
    """One ``<resource-id>\\t<container>\\t<image>`` line per container, sorted by id."""
    lines = []
    for rid in sorted(releases):
        for c in releases[rid].containers():
            lines.append(f"{rid}\t{c.name}\t{c.image}")
    return lines


def write_manifests(path: str, docs: list) -> None:
    """Write a multi-document manifest file back, keeping key order."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump_all(docs, f, default_flow_style=False, sort_keys=False,
                           explicit_start=True)
    print(f"Wrote {path}", file=sys.stderr)


def emit_warnings(warnings: list[str]) -> None:
    """Print all warnings to stderr."""
    for w in warnings:
        print(f"⚠ {w}", file=sys.stderr)
