"""Configuration file handling: load fluxhelm.yaml."""

import os
import sys

import yaml

from fluxhelm.core.constants import HELM_RELEASE_KINDS
from fluxhelm.pacts.errors import ManifestError


def _migrate_config(cfg: dict) -> bool:
    """Migrate legacy config keys. Returns True if migration happened."""
    migrated = False

    # releaseKinds -> kinds
    if "releaseKinds" in cfg:
        cfg.setdefault("kinds", cfg.pop("releaseKinds"))
        migrated = True

    return migrated


def load_config(path: str) -> dict:
    """Load fluxhelm.yaml or return the default config."""
    if os.path.exists(path):
        try:
            with open(path, encoding="utf-8") as f:
                cfg = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ManifestError(f"{path}: {exc.__class__.__name__}") from exc
        if not isinstance(cfg, dict):
            raise ManifestError(f"{path}: expected a mapping at top level")
    else:
        cfg = {}

    if _migrate_config(cfg):
        print("Config migrated to current key names in memory", file=sys.stderr)

    cfg.setdefault("kinds", list(HELM_RELEASE_KINDS))
    cfg.setdefault("exclude", [])
    return cfg
