"""Manifest parsing: YAML loading, HelmRelease discovery, resource ids."""

from pathlib import Path

import yaml

from fluxhelm.core.constants import HELM_RELEASE_KINDS
from fluxhelm.core.release import FluxHelmRelease
from fluxhelm.pacts.errors import ManifestError

_MANIFEST_SUFFIXES = (".yaml", ".yml")


def load_documents(path: str) -> list:
    """Load every document of a (multi-document) YAML file.

    Empty and scalar documents are kept so the file can be written back whole.
    """
    try:
        with open(path, encoding="utf-8") as f:
            return list(yaml.safe_load_all(f))
    except yaml.YAMLError as exc:
        raise ManifestError(f"{path}: {exc.__class__.__name__}") from exc


def parse_multidoc(docs: list, source: str = "",
                   kinds=HELM_RELEASE_KINDS) -> dict[str, FluxHelmRelease]:
    """Build a FluxHelmRelease for each document of a HelmRelease kind, by resource id."""
    releases: dict[str, FluxHelmRelease] = {}
    for doc in docs:
        if not isinstance(doc, dict) or doc.get("kind") not in kinds:
            continue
        release = FluxHelmRelease(doc, source)
        if release.resource_id in releases:
            raise ManifestError(
                f"duplicate definition of '{release.resource_id}' (in {source or 'input'})")
        releases[release.resource_id] = release
    return releases


def _find_manifest_files(paths: list[str]) -> list[Path]:
    """Expand directories into the YAML files below them (sorted)."""
    files = []
    for p in paths:
        path = Path(p)
        if path.is_dir():
            files.extend(sorted(f for f in path.rglob("*")
                                if f.is_file() and f.suffix in _MANIFEST_SUFFIXES))
        elif path.is_file():
            files.append(path)
        else:
            raise ManifestError(f"{p}: no such file or directory")
    return files


def parse_manifests(paths: list[str], kinds=HELM_RELEASE_KINDS,
                    warnings: list[str] | None = None
                    ) -> tuple[dict[str, FluxHelmRelease], dict[str, list]]:
    """Load HelmReleases from files and directories.

    Returns (releases by resource id, documents by file path). The document
    lists are what the files must be written back from after an update.
    Files that are not valid YAML are skipped with a note in *warnings*.
    """
    releases: dict[str, FluxHelmRelease] = {}
    files: dict[str, list] = {}
    for yaml_file in _find_manifest_files(paths):
        try:
            docs = load_documents(str(yaml_file))
        except ManifestError as exc:
            if warnings is not None:
                warnings.append(
                    f"Skipping {yaml_file.name}: {exc.__cause__.__class__.__name__}")
            continue
        files[str(yaml_file)] = docs
        for rid, release in parse_multidoc(docs, str(yaml_file), kinds).items():
            if rid in releases:
                raise ManifestError(
                    f"duplicate definition of '{rid}' "
                    f"(in {releases[rid].source} and {yaml_file})")
            releases[rid] = release
    return releases, files
