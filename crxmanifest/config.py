"""Configuration loading for crxmanifest (.crxmanifest.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .loader import DEFAULT_MANIFEST_NAME

CONFIG_FILENAME = ".crxmanifest.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CrxManifestConfig:
    """Settings read from .crxmanifest.yml."""

    root: Path
    src_dir: Path
    manifest: str = DEFAULT_MANIFEST_NAME
    legacy_newtab_alias: bool = False

    @property
    def manifest_path(self) -> Path:
        return self.src_dir / self.manifest


def load_config(config_path: Path) -> CrxManifestConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CrxManifestConfig(root=root, src_dir=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    src_dir_str = _as_str(data.get("src_dir"))
    src_dir = (root / src_dir_str).resolve() if src_dir_str else root

    return CrxManifestConfig(
        root=root,
        src_dir=src_dir,
        manifest=_as_str(data.get("manifest")) or DEFAULT_MANIFEST_NAME,
        legacy_newtab_alias=_as_bool(data.get("legacy_newtab_alias")) or False,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value.strip() else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["CONFIG_FILENAME", "ConfigError", "CrxManifestConfig", "load_config"]
