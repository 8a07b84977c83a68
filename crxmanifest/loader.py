"""Read extension manifests from disk."""

from __future__ import annotations

import json
from pathlib import Path

from .logging import get_logger
from .models import ExtensionManifest

_LOGGER = get_logger("loader")

DEFAULT_MANIFEST_NAME = "manifest.json"


class ManifestError(RuntimeError):
    """Raised when a manifest file is missing or cannot be parsed."""


def find_manifest(src_dir: Path | str, name: str = DEFAULT_MANIFEST_NAME) -> Path:
    """Return the manifest path inside ``src_dir``."""
    path = Path(src_dir).expanduser() / name
    if not path.is_file():
        raise ManifestError(f"Manifest not found: {path}")
    return path.resolve()


def load_manifest(path: Path | str, name: str = DEFAULT_MANIFEST_NAME) -> ExtensionManifest:
    """Load a manifest from a file path or from a directory containing one."""
    manifest_path = Path(path).expanduser()
    if manifest_path.is_dir():
        manifest_path = find_manifest(manifest_path, name)
    elif not manifest_path.is_file():
        raise ManifestError(f"Manifest not found: {manifest_path}")

    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Failed to read {manifest_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Failed to parse {manifest_path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(f"{manifest_path.name} must contain a JSON object at the root")

    _LOGGER.debug("Loaded manifest from %s", manifest_path)
    return ExtensionManifest.from_dict(data)


__all__ = ["DEFAULT_MANIFEST_NAME", "ManifestError", "find_manifest", "load_manifest"]
