"""Symlink cycle guard: identities of directories entered through links."""

from __future__ import annotations

import logging
import os
from collections.abc import Hashable
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

DirectoryIdentity = Callable[[Path, os.stat_result], Hashable]
"""Produce a stable identity for a directory, or raise ``OSError``."""


def inode_identity(path: Path, st: os.stat_result) -> Hashable:
    """Identify a directory by ``(st_dev, st_ino)`` of its followed stat.

    Falls back to :func:`canonical_path_identity` when the platform reports
    no inode number.
    """
    if st.st_ino == 0:
        return canonical_path_identity(path, st)
    return (st.st_dev, st.st_ino)


def canonical_path_identity(path: Path, st: os.stat_result) -> Hashable:
    """Identify a directory by its fully resolved path.

    Raises:
        OSError: If the path cannot be resolved.
    """
    try:
        return Path(path).resolve(strict=True)
    except RuntimeError as exc:
        # Path.resolve reports symlink loops as RuntimeError on older Pythons.
        raise OSError(str(exc)) from exc


def platform_identity() -> DirectoryIdentity:
    """Return the identity function suited to the running platform."""
    if os.name == "posix":
        return inode_identity
    return canonical_path_identity


_PLATFORM_IDENTITY: DirectoryIdentity = platform_identity()


class VisitedSet:
    """Directories already entered through a followed symlink.

    Identities are only ever added; the set lives as long as one walk.
    """

    def __init__(self, identity: DirectoryIdentity | None = None) -> None:
        self._identity = identity or _PLATFORM_IDENTITY
        self._seen: set[Hashable] = set()

    def __len__(self) -> int:
        return len(self._seen)

    def check_and_mark_visited(self, path: Path, st: os.stat_result) -> bool:
        """Record a directory and report whether it was already recorded.

        Args:
            path: Path the directory was reached through.
            st: Link-following stat result of *path*.

        Returns:
            bool: ``True`` when the directory was seen before (a cycle).
            ``False`` when it is new, or when its identity cannot be
            computed; a possible second traversal is preferred over
            silently dropping part of the tree.
        """
        try:
            key = self._identity(path, st)
        except OSError as exc:
            logger.debug("Cannot identify directory %s: %s", path, exc)
            return False

        if key in self._seen:
            return True
        self._seen.add(key)
        return False
