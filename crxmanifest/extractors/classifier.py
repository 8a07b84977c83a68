"""Classify manifest-referenced files into asset buckets for bundling."""

from __future__ import annotations

import os
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .globbing import FilesystemGlobExpander, GlobExpander, has_magic
from .utils import absolute_source_dir, resolve_path, unique_strings
from ..logging import get_logger
from ..models import ClassifiedFiles, ExtensionManifest

_LOGGER = get_logger("extractors.classifier")

ManifestInput = Union[ExtensionManifest, Mapping[str, Any]]

CATEGORY_JS = "js"
CATEGORY_CSS = "css"
CATEGORY_HTML = "html"
CATEGORY_IMG = "img"
CATEGORY_OTHERS = "others"

# Suffixes are matched case-sensitively, except images which are matched
# against the lowercased suffix.
EXTENSION_CATEGORIES: Dict[str, str] = {
    ".js": CATEGORY_JS,
    ".jsx": CATEGORY_JS,
    ".ts": CATEGORY_JS,
    ".tsx": CATEGORY_JS,
    ".css": CATEGORY_CSS,
    ".html": CATEGORY_HTML,
    ".htm": CATEGORY_HTML,
}

IMAGE_EXTENSIONS = frozenset(
    {
        ".jpg",
        ".jpeg",
        ".png",
        ".svg",
        ".tiff",
        ".tif",
        ".gif",
        ".webp",
        ".bmp",
        ".ico",
    }
)


def _suffix(path: str) -> str:
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    return "." + name.rsplit(".", 1)[1]


def categorize(path: str) -> str:
    """Return the bucket a web-accessible resource belongs to by its extension."""
    suffix = _suffix(path)
    category = EXTENSION_CATEGORIES.get(suffix)
    if category is not None:
        return category
    if suffix.lower() in IMAGE_EXTENSIONS:
        return CATEGORY_IMG
    return CATEGORY_OTHERS


class FileClassifier:
    """Bucket every file a manifest references into js/css/html/img/others.

    Glob patterns in ``web_accessible_resources`` are expanded through the
    injected ``expander``; the default one reads the real filesystem. Expansion
    errors propagate and abort the whole call.
    """

    def __init__(self, expander: Optional[GlobExpander] = None) -> None:
        self.expander: GlobExpander = expander or FilesystemGlobExpander()

    def classify(
        self, manifest: ManifestInput, src_dir: str | os.PathLike[str]
    ) -> ClassifiedFiles:
        """Return deduplicated absolute paths for each asset bucket."""
        model = ExtensionManifest.coerce(manifest)
        resources = self.resolve_resources(model, src_dir)

        by_category: Dict[str, List[str]] = {
            CATEGORY_JS: [],
            CATEGORY_CSS: [],
            CATEGORY_HTML: [],
            CATEGORY_IMG: [],
            CATEGORY_OTHERS: [],
        }
        for resource in resources:
            by_category[categorize(resource)].append(resource)

        js: List[Any] = list(by_category[CATEGORY_JS])
        if model.background is not None:
            js.append(model.background.service_worker)
        for script in model.content_scripts:
            js.extend(script.js)

        html: List[Any] = list(by_category[CATEGORY_HTML])
        html.append(model.options_page)
        if model.options_ui is not None:
            html.append(model.options_ui.page)
        html.append(model.devtools_page)
        if model.action is not None:
            html.append(model.action.default_popup)
        if model.chrome_url_overrides is not None:
            html.extend(path for _, path in model.chrome_url_overrides.items())

        css: List[Any] = list(by_category[CATEGORY_CSS])
        for script in model.content_scripts:
            css.extend(script.css)

        img: List[Any] = []
        if model.action is not None:
            img.extend(model.action.icon_paths())
        img.extend(by_category[CATEGORY_IMG])
        img.extend(model.icons.values())

        classified = ClassifiedFiles(
            js=self._finalize(js, src_dir),
            css=self._finalize(css, src_dir),
            html=self._finalize(html, src_dir),
            img=self._finalize(img, src_dir),
        )
        # A resource already claimed by another bucket through a manifest
        # field (e.g. an extensionless file listed under `icons`) stays there.
        claimed = {
            *classified.js,
            *classified.css,
            *classified.html,
            *classified.img,
        }
        classified.others = [
            path
            for path in self._finalize(by_category[CATEGORY_OTHERS], src_dir)
            if path not in claimed
        ]
        _LOGGER.debug(
            "Classified files: %s",
            {name: len(paths) for name, paths in classified.as_dict().items()},
        )
        return classified

    def resolve_resources(
        self, manifest: ManifestInput, src_dir: str | os.PathLike[str]
    ) -> List[str]:
        """Flatten web-accessible resources, expanding glob patterns.

        Literal entries pass through unchanged. Patterns contribute their
        matches relative to ``src_dir`` in the order the expander returns them.
        """
        model = ExtensionManifest.coerce(manifest)
        base_dir = absolute_source_dir(src_dir)
        resolved: List[str] = []
        for entry in model.web_accessible_resources:
            for resource in entry.resources:
                if has_magic(resource):
                    matches = self.expander.expand(resource, base_dir)
                    _LOGGER.debug("Expanded %s to %d file(s)", resource, len(matches))
                    resolved.extend(matches)
                else:
                    resolved.append(resource)
        return resolved

    @staticmethod
    def _finalize(values: Iterable[Any], src_dir: str | os.PathLike[str]) -> List[str]:
        # Dedupe after resolving so `a.js` and `./a.js` collapse to one path.
        # Paths escaping the source directory resolve to None and are dropped.
        strings = [value for value in values if isinstance(value, str) and value]
        return unique_strings(resolve_path(src_dir, value) for value in strings)

    def files(
        self, manifest: ManifestInput, src_dir: str | os.PathLike[str]
    ) -> Dict[str, List[str]]:
        """Return :meth:`classify` output as a plain dict keyed by bucket name."""
        return self.classify(manifest, src_dir).as_dict()


__all__ = [
    "CATEGORY_CSS",
    "CATEGORY_HTML",
    "CATEGORY_IMG",
    "CATEGORY_JS",
    "CATEGORY_OTHERS",
    "EXTENSION_CATEGORIES",
    "FileClassifier",
    "IMAGE_EXTENSIONS",
    "categorize",
]
