"""Entry-point extraction and asset classification for extension manifests."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Mapping, Union

from .classifier import FileClassifier, categorize
from .entries import EntryExtractor
from .globbing import (
    FilesystemGlobExpander,
    GlobExpander,
    GlobExpansionError,
    InvalidGlobPatternError,
    SourceDirectoryNotFoundError,
)
from ..models import EntryMap, ExtensionManifest


def derive_entries(
    manifest: Union[ExtensionManifest, Mapping[str, Any]],
    src_dir: str | os.PathLike[str],
    *,
    legacy_newtab_alias: bool = False,
) -> EntryMap:
    """Shortcut for ``EntryExtractor().entries(manifest, src_dir)``."""
    return EntryExtractor(legacy_newtab_alias=legacy_newtab_alias).entries(manifest, src_dir)


def derive_files(
    manifest: Union[ExtensionManifest, Mapping[str, Any]],
    src_dir: str | os.PathLike[str],
) -> Dict[str, List[str]]:
    """Shortcut returning the classified buckets as a plain dict."""
    return FileClassifier().files(manifest, src_dir)


__all__ = [
    "EntryExtractor",
    "FileClassifier",
    "FilesystemGlobExpander",
    "GlobExpander",
    "GlobExpansionError",
    "InvalidGlobPatternError",
    "SourceDirectoryNotFoundError",
    "categorize",
    "derive_entries",
    "derive_files",
]
