"""Resolve manifest entry points to absolute file paths."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Mapping, Optional, Union

from .utils import resolve_all, resolve_path
from ..logging import get_logger
from ..models import EntryMap, ExtensionManifest

_LOGGER = get_logger("extractors.entries")

ManifestInput = Union[ExtensionManifest, Mapping[str, Any]]
SourceDir = Union[str, os.PathLike[str]]


class EntryExtractor:
    """Map each entry-point role of a manifest to its resolved path(s).

    Accessors never touch the filesystem and never raise for missing or
    malformed fields; an absent field simply yields ``None``.

    ``legacy_newtab_alias`` restores the historical behaviour of reporting the
    ``newtab`` override under the ``history`` key.
    """

    def __init__(self, *, legacy_newtab_alias: bool = False) -> None:
        self.legacy_newtab_alias = legacy_newtab_alias

    def entries(self, manifest: ManifestInput, src_dir: SourceDir) -> EntryMap:
        """Return the entry map for every role present in the manifest."""
        model = ExtensionManifest.coerce(manifest)
        candidates = (
            ("background", self.background_entry(model, src_dir)),
            ("content_scripts", self.content_script_entries(model, src_dir)),
            ("options_page", self.options_page_entry(model, src_dir)),
            ("options_ui", self.options_ui_entry(model, src_dir)),
            ("popup", self.popup_entry(model, src_dir)),
            ("override", self.override_entries(model, src_dir)),
            ("devtools", self.devtools_entry(model, src_dir)),
            (
                "web_accessible_resources",
                self.web_accessible_resource_entries(model, src_dir),
            ),
        )
        entries: EntryMap = {}
        for role, value in candidates:
            if value is None:
                continue
            entries[role] = value
            _LOGGER.debug("Resolved %s entry: %s", role, value)
        return entries

    def background_entry(self, manifest: ManifestInput, src_dir: SourceDir) -> Optional[str]:
        model = ExtensionManifest.coerce(manifest)
        if model.background is None or model.background.service_worker is None:
            return None
        return resolve_path(src_dir, model.background.service_worker)

    def content_script_entries(
        self, manifest: ManifestInput, src_dir: SourceDir
    ) -> Optional[List[str]]:
        """Flatten the `js` lists of every content script, in declaration order."""
        model = ExtensionManifest.coerce(manifest)
        scripts = [script for entry in model.content_scripts for script in entry.js]
        return resolve_all(src_dir, scripts) or None

    def options_page_entry(self, manifest: ManifestInput, src_dir: SourceDir) -> Optional[str]:
        model = ExtensionManifest.coerce(manifest)
        if model.options_page is None:
            return None
        return resolve_path(src_dir, model.options_page)

    def options_ui_entry(self, manifest: ManifestInput, src_dir: SourceDir) -> Optional[str]:
        model = ExtensionManifest.coerce(manifest)
        if model.options_ui is None or model.options_ui.page is None:
            return None
        return resolve_path(src_dir, model.options_ui.page)

    def popup_entry(self, manifest: ManifestInput, src_dir: SourceDir) -> Optional[str]:
        model = ExtensionManifest.coerce(manifest)
        if model.action is None or model.action.default_popup is None:
            return None
        return resolve_path(src_dir, model.action.default_popup)

    def override_entries(
        self, manifest: ManifestInput, src_dir: SourceDir
    ) -> Optional[Dict[str, str]]:
        """Resolve `chrome_url_overrides` into a mapping keyed by page name."""
        model = ExtensionManifest.coerce(manifest)
        if model.chrome_url_overrides is None:
            return None
        override: Dict[str, str] = {}
        for page, path in model.chrome_url_overrides.items():
            resolved = resolve_path(src_dir, path)
            if resolved is None:
                continue
            key = page
            if page == "newtab" and self.legacy_newtab_alias:
                key = "history"
            override[key] = resolved
        return override or None

    def devtools_entry(self, manifest: ManifestInput, src_dir: SourceDir) -> Optional[str]:
        model = ExtensionManifest.coerce(manifest)
        if model.devtools_page is None:
            return None
        return resolve_path(src_dir, model.devtools_page)

    def web_accessible_resource_entries(
        self, manifest: ManifestInput, src_dir: SourceDir
    ) -> Optional[List[str]]:
        """Flatten every `resources` list. Patterns are resolved verbatim, not expanded."""
        model = ExtensionManifest.coerce(manifest)
        resources = [
            resource
            for entry in model.web_accessible_resources
            for resource in entry.resources
        ]
        return resolve_all(src_dir, resources) or None


__all__ = ["EntryExtractor"]
