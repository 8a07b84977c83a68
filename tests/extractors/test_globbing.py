"""Tests for glob pattern helpers."""

from __future__ import annotations

import logging

import pytest

from crxmanifest.extractors.globbing import (
    FilesystemGlobExpander,
    GlobExpansionError,
    InvalidGlobPatternError,
    expand_braces,
    has_magic,
    validate_pattern,
)


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("img/*.png", True),
        ("file?.js", True),
        ("icon[0-9].png", True),
        ("fonts/font.woff2", False),
        ("{a,b}.js", True),
        ("img/{a}.png", False),
        ("img/{a.png", False),
    ],
)
def test_has_magic(pattern: str, expected: bool) -> None:
    assert has_magic(pattern) is expected


@pytest.mark.parametrize("pattern", ["[abc].js", "[!a].js", "[]].js", "a]b*.js", "[!]x].js"])
def test_validate_pattern_accepts_closed_classes(pattern: str) -> None:
    validate_pattern(pattern)


@pytest.mark.parametrize("pattern", ["[abc.js", "img/[!.png", "*[]"])
def test_validate_pattern_rejects_unterminated_classes(pattern: str) -> None:
    with pytest.raises(InvalidGlobPatternError) as excinfo:
        validate_pattern(pattern)
    assert isinstance(excinfo.value, GlobExpansionError)
    assert excinfo.value.pattern == pattern


def test_filesystem_expander_returns_sorted_relative_paths(extension_builder) -> None:
    extension_builder.touch(["img/b.png", "img/a.png", "img/c.gif"])

    matches = FilesystemGlobExpander().expand("img/*.png", extension_builder.path())

    assert list(matches) == ["img/a.png", "img/b.png"]


def test_filesystem_expander_treats_leading_slash_as_root_relative(extension_builder) -> None:
    extension_builder.touch(["img/a.png"])

    matches = FilesystemGlobExpander().expand("/img/*.png", extension_builder.path())

    assert list(matches) == ["img/a.png"]


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("img/{a,b}.png", ["img/a.png", "img/b.png"]),
        ("{js,css}/main.{js,css}", ["js/main.js", "js/main.css", "css/main.js", "css/main.css"]),
        ("{a,{b,c}}.js", ["a.js", "b.js", "c.js"]),
        ("{a,a}.js", ["a.js"]),
        ("{x}/{a,b}", ["{x}/a", "{x}/b"]),
        ("plain.js", ["plain.js"]),
        ("open{a,b", ["open{a,b"]),
    ],
)
def test_expand_braces(pattern: str, expected: list) -> None:
    assert expand_braces(pattern) == expected


def test_filesystem_expander_expands_braces_without_duplicates(extension_builder) -> None:
    extension_builder.touch(["img/a.png", "img/b.gif", "img/c.png"])

    matches = FilesystemGlobExpander().expand("img/{*.png,a.*,b.gif}", extension_builder.path())

    assert list(matches) == ["img/a.png", "img/b.gif", "img/c.png"]


def test_filesystem_expander_validates_every_alternative(extension_builder) -> None:
    with pytest.raises(InvalidGlobPatternError):
        FilesystemGlobExpander().expand("{ok.js,bad[.js}", extension_builder.path())


def test_filesystem_expander_skips_matches_outside_base(extension_builder, tmp_path) -> None:
    (tmp_path / "outside.js").write_text("", encoding="utf-8")

    assert list(FilesystemGlobExpander().expand("../*.js", extension_builder.path())) == []


def test_filesystem_expander_logs_under_package_hierarchy(extension_builder, caplog, monkeypatch) -> None:
    extension_builder.touch(["a.js"])
    monkeypatch.setattr(logging.getLogger("crxmanifest"), "propagate", True)

    with caplog.at_level(logging.DEBUG, logger="crxmanifest"):
        FilesystemGlobExpander().expand("*.js", extension_builder.path())

    assert [record.name for record in caplog.records] == ["crxmanifest.extractors.globbing"]
