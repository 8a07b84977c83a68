"""Glob expansion for `web_accessible_resources` patterns."""

from __future__ import annotations

import glob
import os
from typing import List, Protocol, Sequence, Set, runtime_checkable

from .utils import is_within
from ..logging import get_logger

_LOGGER = get_logger("extractors.globbing")

_MAGIC_CHARS = frozenset("*?[")


class GlobExpansionError(RuntimeError):
    """Raised when a resource pattern cannot be expanded."""


class InvalidGlobPatternError(GlobExpansionError, ValueError):
    """Raised for patterns that cannot be compiled, e.g. an unclosed `[`."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid glob pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class SourceDirectoryNotFoundError(GlobExpansionError, FileNotFoundError):
    """Raised when the directory a pattern is expanded against does not exist."""

    def __init__(self, base_dir: str) -> None:
        super().__init__(f"Source directory not found: {base_dir}")
        self.base_dir = base_dir


@runtime_checkable
class GlobExpander(Protocol):
    """Expands a resource pattern into paths relative to a base directory."""

    def expand(self, pattern: str, base_dir: str) -> Sequence[str]:
        """Return matching file paths relative to `base_dir`.

        A pattern that matches nothing returns an empty sequence.
        """
        ...


def has_magic(pattern: str) -> bool:
    """Return True when the resource entry is a glob rather than a literal path.

    Brace groups count only when they list alternatives, so `{a}.js` is a
    literal while `{a,b}.js` is a pattern.
    """
    if any(char in _MAGIC_CHARS for char in pattern):
        return True
    return len(expand_braces(pattern)) > 1


def expand_braces(pattern: str) -> List[str]:
    """Expand `{a,b}` alternatives into separate patterns, left to right.

    Groups may nest. A group without a top-level comma, or an unclosed `{`,
    is kept literally. Duplicate expansions are dropped.
    """
    depth = 0
    start = -1
    for index, char in enumerate(pattern):
        if char == "{":
            if depth == 0:
                start = index
            depth += 1
        elif char == "}" and depth:
            depth -= 1
            if depth:
                continue
            options = _split_alternatives(pattern[start + 1 : index])
            if len(options) < 2:
                continue
            prefix, suffix = pattern[:start], pattern[index + 1 :]
            expanded: List[str] = []
            for option in options:
                for candidate in expand_braces(prefix + option + suffix):
                    if candidate not in expanded:
                        expanded.append(candidate)
            return expanded
    return [pattern]


def _split_alternatives(body: str) -> List[str]:
    options: List[str] = []
    depth = 0
    current: List[str] = []
    for char in body:
        if char == "{":
            depth += 1
        elif char == "}" and depth:
            depth -= 1
        elif char == "," and depth == 0:
            options.append("".join(current))
            current = []
            continue
        current.append(char)
    options.append("".join(current))
    return options


def validate_pattern(pattern: str) -> None:
    """Reject patterns with an unterminated character class."""
    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "[":
            end = index + 1
            # A leading '!' negates and a ']' right after the opening bracket
            # is a literal member of the class.
            if end < length and pattern[end] == "!":
                end += 1
            if end < length and pattern[end] == "]":
                end += 1
            while end < length and pattern[end] != "]":
                end += 1
            if end >= length:
                raise InvalidGlobPatternError(pattern, "unterminated character class")
            index = end
        index += 1


class FilesystemGlobExpander:
    """Expands patterns against the real filesystem using the `glob` module.

    Brace alternatives are expanded first and `**` spans directories. Only
    regular files inside the base directory are returned, as POSIX-style
    relative paths, deduplicated and sorted for a stable order.
    """

    def expand(self, pattern: str, base_dir: str) -> Sequence[str]:
        normalised = pattern.replace("\\", "/").lstrip("/")
        alternatives = expand_braces(normalised)
        for alternative in alternatives:
            validate_pattern(alternative)
        if not os.path.isdir(base_dir):
            raise SourceDirectoryNotFoundError(base_dir)

        base = os.path.abspath(base_dir)
        found: Set[str] = set()
        for alternative in alternatives:
            if any(char in _MAGIC_CHARS for char in alternative):
                candidates = glob.glob(alternative, root_dir=base, recursive=True)
            else:
                candidates = [alternative]
            for match in candidates:
                full_path = os.path.normpath(os.path.join(base, match))
                if not is_within(base, full_path) or not os.path.isfile(full_path):
                    continue
                found.add(os.path.relpath(full_path, base).replace(os.sep, "/"))

        matches = sorted(found)
        _LOGGER.debug("Pattern %s matched %d file(s) in %s", pattern, len(matches), base_dir)
        return matches


__all__ = [
    "FilesystemGlobExpander",
    "GlobExpander",
    "GlobExpansionError",
    "InvalidGlobPatternError",
    "SourceDirectoryNotFoundError",
    "expand_braces",
    "has_magic",
    "validate_pattern",
]
