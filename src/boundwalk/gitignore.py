"""Gitignore integration — exclude entries matched by .gitignore via pathspec."""

from __future__ import annotations

import logging
from pathlib import Path

from pathspec import GitIgnoreSpec

logger = logging.getLogger(__name__)


class GitIgnoreFilter:
    """Entry filter backed by a compiled gitignore spec.

    Directories are matched with a trailing ``/`` so directory-only
    patterns such as ``build/`` apply to them.
    """

    def __init__(self, spec: GitIgnoreSpec) -> None:
        self._spec = spec

    @classmethod
    def from_lines(cls, lines: list[str]) -> GitIgnoreFilter:
        return cls(GitIgnoreSpec.from_lines(lines))

    def should_exclude(self, relative_path: str, is_dir: bool) -> bool:
        candidate = f"{relative_path}/" if is_dir else relative_path
        return self._spec.match_file(candidate)


def load_gitignore_filter(root: Path) -> GitIgnoreFilter | None:
    """Load .gitignore patterns from *root* directory.

    Args:
        root: Directory containing the ``.gitignore`` file.

    Returns:
        A filter when a ``.gitignore`` exists and is readable,
        otherwise ``None``.
    """
    gitignore_path = Path(root) / ".gitignore"
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except OSError:
        logger.debug("Cannot read .gitignore: %s", gitignore_path)
        return None
    return GitIgnoreFilter.from_lines(lines)
