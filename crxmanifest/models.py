"""Data models for extension manifests and the paths derived from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

IconSet = Union[str, Mapping[str, str]]

# Value types found in an EntryMap: a single path, a list of paths, or the
# override mapping keyed by page name.
EntryValue = Union[str, List[str], Dict[str, str]]
EntryMap = Dict[str, EntryValue]


@dataclass(frozen=True)
class Background:
    """The `background` section. Only the MV3 service worker is modelled."""

    service_worker: Optional[str] = None


@dataclass(frozen=True)
class ContentScript:
    """One `content_scripts` entry."""

    js: Tuple[str, ...] = ()
    css: Tuple[str, ...] = ()


@dataclass(frozen=True)
class OptionsUI:
    page: Optional[str] = None


@dataclass(frozen=True)
class Action:
    """The `action` section (toolbar button)."""

    default_popup: Optional[str] = None
    default_icon: Optional[IconSet] = None

    def icon_paths(self) -> List[str]:
        """Return icon paths from either the string or the size-mapping form."""
        if self.default_icon is None:
            return []
        if isinstance(self.default_icon, str):
            return [self.default_icon]
        return list(self.default_icon.values())


@dataclass(frozen=True)
class UrlOverrides:
    """The `chrome_url_overrides` section."""

    bookmarks: Optional[str] = None
    history: Optional[str] = None
    newtab: Optional[str] = None

    def items(self) -> List[Tuple[str, str]]:
        """Return `(page, path)` pairs for the overrides that are set."""
        pairs = (
            ("bookmarks", self.bookmarks),
            ("history", self.history),
            ("newtab", self.newtab),
        )
        return [(name, value) for name, value in pairs if value is not None]


@dataclass(frozen=True)
class WebAccessibleResource:
    """One `web_accessible_resources` entry; resources may be glob patterns."""

    resources: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExtensionManifest:
    """Typed, read-only view of the manifest fields that reference files.

    Every field is optional. Fields that are missing, empty, or of the wrong
    type in the source document are represented as absent rather than raising.
    """

    background: Optional[Background] = None
    content_scripts: Tuple[ContentScript, ...] = ()
    options_page: Optional[str] = None
    options_ui: Optional[OptionsUI] = None
    action: Optional[Action] = None
    icons: Mapping[str, str] = field(default_factory=dict)
    chrome_url_overrides: Optional[UrlOverrides] = None
    devtools_page: Optional[str] = None
    web_accessible_resources: Tuple[WebAccessibleResource, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtensionManifest":
        """Build a manifest model from parsed JSON."""
        if not isinstance(data, Mapping):
            raise TypeError("manifest root must be a mapping")

        background = None
        background_data = _as_dict(data.get("background"))
        if background_data:
            background = Background(service_worker=_as_str(background_data.get("service_worker")))

        content_scripts = tuple(
            ContentScript(
                js=_as_str_tuple(item.get("js")),
                css=_as_str_tuple(item.get("css")),
            )
            for item in _as_dict_list(data.get("content_scripts"))
        )

        options_ui = None
        options_ui_data = _as_dict(data.get("options_ui"))
        if options_ui_data:
            options_ui = OptionsUI(page=_as_str(options_ui_data.get("page")))

        action = None
        action_data = _as_dict(data.get("action"))
        if action_data:
            action = Action(
                default_popup=_as_str(action_data.get("default_popup")),
                default_icon=_as_icon_set(action_data.get("default_icon")),
            )

        overrides = None
        overrides_data = _as_dict(data.get("chrome_url_overrides"))
        if overrides_data:
            overrides = UrlOverrides(
                bookmarks=_as_str(overrides_data.get("bookmarks")),
                history=_as_str(overrides_data.get("history")),
                newtab=_as_str(overrides_data.get("newtab")),
            )

        web_accessible_resources = tuple(
            WebAccessibleResource(resources=_as_str_tuple(item.get("resources")))
            for item in _as_dict_list(data.get("web_accessible_resources"))
        )

        return cls(
            background=background,
            content_scripts=content_scripts,
            options_page=_as_str(data.get("options_page")),
            options_ui=options_ui,
            action=action,
            icons=_as_str_mapping(data.get("icons")),
            chrome_url_overrides=overrides,
            devtools_page=_as_str(data.get("devtools_page")),
            web_accessible_resources=web_accessible_resources,
        )

    @classmethod
    def coerce(cls, value: Union["ExtensionManifest", Mapping[str, Any]]) -> "ExtensionManifest":
        """Accept either a model instance or a raw JSON mapping."""
        if isinstance(value, cls):
            return value
        return cls.from_dict(value)


@dataclass
class ClassifiedFiles:
    """Absolute paths referenced by a manifest, bucketed by asset type."""

    js: List[str] = field(default_factory=list)
    css: List[str] = field(default_factory=list)
    html: List[str] = field(default_factory=list)
    img: List[str] = field(default_factory=list)
    others: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, List[str]]:
        return {
            "js": list(self.js),
            "css": list(self.css),
            "html": list(self.html),
            "img": list(self.img),
            "others": list(self.others),
        }


def _as_dict(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_dict_list(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _as_str_tuple(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        return ()
    return tuple(item for item in value if isinstance(item, str) and item)


def _as_str_mapping(value: Any) -> Dict[str, str]:
    if not isinstance(value, Mapping):
        return {}
    return {str(key): item for key, item in value.items() if isinstance(item, str) and item}


def _as_icon_set(value: Any) -> Optional[IconSet]:
    if isinstance(value, str):
        return value or None
    mapping = _as_str_mapping(value)
    return mapping or None


__all__ = [
    "Action",
    "Background",
    "ClassifiedFiles",
    "ContentScript",
    "EntryMap",
    "EntryValue",
    "ExtensionManifest",
    "OptionsUI",
    "UrlOverrides",
    "WebAccessibleResource",
]
