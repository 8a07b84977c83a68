"""Shared helpers for the manifest extractors."""

from __future__ import annotations

import os
from typing import Iterable, List, Optional


def absolute_source_dir(src_dir: str | os.PathLike[str]) -> str:
    """Return the source directory as a normalised absolute path string."""
    return os.path.abspath(os.fspath(src_dir))


def is_within(base: str, path: str) -> bool:
    """Return True when `path` names something strictly below `base`."""
    prefix = base if base.endswith(os.sep) else base + os.sep
    return path.startswith(prefix) and path != base


def resolve_path(src_dir: str | os.PathLike[str], relative: str) -> Optional[str]:
    """Resolve a manifest-relative path against the source directory.

    Extension paths are relative to the extension root even when written with
    a leading slash, so `/bg.js` resolves to `<src_dir>/bg.js`. Paths that
    normalise to somewhere outside the source directory (`../x.js`) resolve
    to ``None``.
    """
    base = absolute_source_dir(src_dir)
    relative = relative.replace("\\", "/").lstrip("/")
    resolved = os.path.normpath(os.path.join(base, relative))
    if not is_within(base, resolved):
        return None
    return resolved


def resolve_all(src_dir: str | os.PathLike[str], paths: Iterable[str]) -> List[str]:
    resolved = (resolve_path(src_dir, path) for path in paths)
    return [path for path in resolved if path is not None]


def unique_strings(values: Iterable[object]) -> List[str]:
    """Keep string values only, dropping repeats (first occurrence wins)."""
    seen: set[str] = set()
    result: List[str] = []
    for value in values:
        if not isinstance(value, str) or value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result
