"""Entry filtering: exclude entries from a walk by name or path."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import Protocol


class EntryFilter(Protocol):
    """Protocol for entry filtering.

    Keeps walker logic decoupled from matching strategy.
    """

    def should_exclude(self, relative_path: str, is_dir: bool) -> bool:
        """Return whether an entry should be dropped from the walk.

        Args:
            relative_path: Entry path relative to the walk root, ``/``-separated.
            is_dir: Whether the entry was classified as a directory.
        """
        ...


class PatternFilter:
    """Filter entries by fnmatch patterns against their base name."""

    def __init__(self, patterns: list[str] | None = None) -> None:
        self._patterns: list[str] = list(patterns) if patterns else []

    def should_exclude(self, relative_path: str, is_dir: bool) -> bool:
        """Return ``True`` when any configured pattern matches the base name."""
        name = relative_path.rsplit("/", 1)[-1]
        return any(fnmatch(name, pat) for pat in self._patterns)


class CompositeFilter:
    """Exclude an entry when any member filter excludes it."""

    def __init__(self, *filters: EntryFilter) -> None:
        self._filters: tuple[EntryFilter, ...] = filters

    def should_exclude(self, relative_path: str, is_dir: bool) -> bool:
        return any(f.should_exclude(relative_path, is_dir) for f in self._filters)
