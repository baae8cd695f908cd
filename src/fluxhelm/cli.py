"""CLI entry point: argument parsing and orchestration."""

import argparse
import sys

from fluxhelm.core.image import parse_ref
from fluxhelm.io.config import load_config
from fluxhelm.io.output import emit_warnings, format_containers, write_manifests
from fluxhelm.io.parsing import parse_manifests
from fluxhelm.pacts.errors import ContainerNotFoundError, FluxHelmError, ManifestError


def _drop_excluded(releases: dict, config: dict, warnings: list[str]) -> None:
    """Remove releases listed under ``exclude`` in the config."""
    for rid in config["exclude"]:
        if releases.pop(rid, None) is not None:
            warnings.append(f"{rid} excluded by config, skipped")


def _cmd_list(releases: dict, warnings: list[str]) -> None:
    """Print every container of every release."""
    for rid in sorted(releases):
        if not releases[rid].containers():
            warnings.append(f"{rid} has no recognisable image in its values")
    for line in format_containers(releases):
        print(line)


def _cmd_set_image(args, releases: dict, files: dict) -> None:
    """Point one container of one release at a new image and write its file."""
    release = releases.get(args.resource)
    if release is None:
        raise ManifestError(f"resource '{args.resource}' not found")
    if args.image is not None:
        ref = parse_ref(args.image)
    else:
        current = next(
            (c for c in release.containers() if c.name == args.container), None)
        if current is None:
            raise ContainerNotFoundError(args.container, release.kind)
        ref = current.image.with_new_tag(args.tag)
    release.set_container_image(args.container, ref)
    print(f"{args.resource}: {args.container} -> {ref}", file=sys.stderr)
    write_manifests(release.source, files[release.source])


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fluxhelm",
        description="Find and update container images in HelmRelease values",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config", default="fluxhelm.yaml",
        help="Configuration file (default: fluxhelm.yaml, optional)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", parents=[common],
                            help="List the containers of every HelmRelease")
    p_list.add_argument("paths", nargs="+", help="Manifest files or directories")

    p_set = sub.add_parser("set-image", parents=[common],
                           help="Change the image of one container")
    p_set.add_argument("paths", nargs="+", help="Manifest files or directories")
    p_set.add_argument(
        "--resource", required=True,
        help="Resource id, e.g. maria:fluxhelmrelease/mariadb",
    )
    p_set.add_argument(
        "--container", required=True,
        help="Container name (chart-image for an image directly under values)",
    )
    new = p_set.add_mutually_exclusive_group(required=True)
    new.add_argument("--image", help="New image reference, e.g. repo/app:v2")
    new.add_argument("--tag", help="New tag for the current image")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = _build_parser().parse_args(argv)
    warnings: list[str] = []
    try:
        config = load_config(args.config)
        releases, files = parse_manifests(args.paths, tuple(config["kinds"]), warnings)
        _drop_excluded(releases, config, warnings)
        print(f"Parsed releases: {len(releases)}", file=sys.stderr)

        if args.command == "list":
            _cmd_list(releases, warnings)
        else:
            _cmd_set_image(args, releases, files)
    except FluxHelmError as exc:
        emit_warnings(warnings)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    emit_warnings(warnings)
