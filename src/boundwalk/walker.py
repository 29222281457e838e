"""Bounded breadth-first directory walker using os.scandir with an explicit queue."""

from __future__ import annotations

import enum
import logging
import os
import stat
from collections import deque
from dataclasses import dataclass
from pathlib import Path

from boundwalk.config import DEPTH_LIMIT, WalkConfig
from boundwalk.errors import WalkError, WalkErrorKind
from boundwalk.filter import EntryFilter
from boundwalk.visited import VisitedSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, repr=False)
class WalkEntry:
    """A single filesystem entry discovered during a walk.

    Type flags come from a stat call that does not follow symlinks. When
    symlinks are followed, a link to a directory or file is reclassified
    as its target's type while ``is_symlink`` stays ``True``.

    Attributes:
        path: Path of the entry, joined onto the walk root as given.
        depth: Depth below the root (``0`` is the root's immediate children).
        is_dir: Whether the entry is treated as a directory.
        is_file: Whether the entry is treated as a regular file.
        is_symlink: Whether the entry itself is a symbolic link.
    """

    path: Path
    depth: int
    is_dir: bool
    is_file: bool
    is_symlink: bool

    @property
    def name(self) -> str:
        """Base name of the entry, safe to display."""
        return self.path.name

    def __repr__(self) -> str:
        # Full paths stay out of reprs so they do not end up in logs.
        return (
            f"WalkEntry(name={self.name!r}, depth={self.depth}, "
            f"is_dir={self.is_dir}, is_file={self.is_file}, "
            f"is_symlink={self.is_symlink})"
        )


class WalkState(enum.Enum):
    """Lifecycle of a walker."""

    ACTIVE = "active"
    EXHAUSTED = "exhausted"
    HALTED = "halted"


class DirWalker:
    """Iterate entries under a root directory in breadth-first order.

    Each ``next()`` call drains the entry buffer, reading one more queued
    directory whenever the buffer is empty. Both the directory queue and
    the number of entries read per directory are bounded by the config.

    With ``continue_on_error=False`` the first failure is raised as a
    :class:`~boundwalk.errors.WalkError` from ``next()``; every later call
    raises ``StopIteration``.
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        config: WalkConfig | None = None,
        entry_filter: EntryFilter | None = None,
    ) -> None:
        """Create a walker. No filesystem access happens here.

        Args:
            root: Directory to walk.
            config: Walk options. Defaults to ``WalkConfig()``.
            entry_filter: Optional exclude filter; excluded directories
                are not descended into.
        """
        self._root = Path(root)
        self._config = config or WalkConfig()
        self._entry_filter = entry_filter

        if self._config.max_queue_size == 0:
            logger.debug("max_queue_size is 0; no subdirectories will be traversed")
        if self._config.max_entries_per_dir == 0:
            logger.debug("max_entries_per_dir is 0; no entries will be read")

        # Queue items: (directory_path, depth attributed to its children)
        self._queue: deque[tuple[Path, int]] = deque([(self._root, 0)])
        self._buffer: deque[WalkEntry] = deque()
        self._visited: VisitedSet | None = (
            VisitedSet() if self._config.follow_symlinks else None
        )
        self._state = WalkState.ACTIVE

    @property
    def config(self) -> WalkConfig:
        return self._config

    @property
    def state(self) -> WalkState:
        return self._state

    @property
    def pending_directories(self) -> int:
        """Number of directories waiting to be read."""
        return len(self._queue)

    def __iter__(self) -> DirWalker:
        return self

    def __next__(self) -> WalkEntry:
        if self._state is not WalkState.ACTIVE:
            raise StopIteration

        if self._buffer:
            return self._buffer.popleft()

        while self._queue:
            dir_path, depth = self._queue.popleft()
            try:
                self._read_directory(dir_path, depth)
            except WalkError as exc:
                error = exc
            except OSError as exc:
                error = WalkError.from_os_error(exc)
            else:
                if self._buffer:
                    return self._buffer.popleft()
                continue

            if self._config.continue_on_error:
                # Entries read before the failure are still delivered.
                if self._buffer:
                    return self._buffer.popleft()
                continue
            self._halt()
            # Drop the chained OSError; only the category leaves the walker.
            error.__context__ = None
            error.__cause__ = None
            raise error

        self._state = WalkState.EXHAUSTED
        raise StopIteration

    def _halt(self) -> None:
        self._state = WalkState.HALTED
        self._queue.clear()
        self._buffer.clear()

    def _skip_or_raise(self, kind: WalkErrorKind) -> None:
        """Return to skip the failing entry, or raise when running strict."""
        if not self._config.continue_on_error:
            raise WalkError(kind)

    def _relative_path(self, path: Path) -> str:
        return path.relative_to(self._root).as_posix()

    def _read_directory(self, dir_path: Path, depth: int) -> None:
        """Read one directory into the entry buffer and the queue.

        Bounds enforced, in order: depth limit before any I/O, the
        per-directory entry limit while enumerating, depth overflow and
        queue size before enqueueing each subdirectory.

        Args:
            dir_path: Directory to read.
            depth: Depth attributed to the directory's children.

        Raises:
            WalkError: If the directory cannot be opened, or on any entry
                failure when ``continue_on_error`` is ``False``.
        """
        config = self._config
        if config.max_depth is not None and depth > config.max_depth:
            return

        try:
            scan = os.scandir(dir_path)
        except (OSError, ValueError) as exc:
            # ValueError: the path itself is unusable, e.g. an embedded NUL.
            logger.debug("Cannot read directory at depth %d: %s", depth, exc)
            raise WalkError(WalkErrorKind.READ_DIRECTORY) from None

        with scan:
            if self._visited is not None and depth == 0:
                self._mark_root(self._visited, dir_path)

            # Counts entries read from the OS, yielded or not, so directories
            # full of unyielded subdirectories are bounded too.
            entries_read = 0
            while True:
                if entries_read >= config.max_entries_per_dir and config.continue_on_error:
                    logger.debug(
                        "Entry limit (%d) reached for directory at depth %d",
                        config.max_entries_per_dir,
                        depth,
                    )
                    break

                try:
                    dir_entry = next(scan, None)
                except OSError as exc:
                    logger.debug("Cannot read directory entry at depth %d: %s", depth, exc)
                    self._skip_or_raise(WalkErrorKind.READ_DIRECTORY)
                    break
                if dir_entry is None:
                    break

                if entries_read >= config.max_entries_per_dir:
                    logger.debug(
                        "Entry limit (%d) exceeded for directory at depth %d",
                        config.max_entries_per_dir,
                        depth,
                    )
                    raise WalkError(WalkErrorKind.ENTRY_LIMIT_EXCEEDED)
                entries_read += 1

                try:
                    st = dir_entry.stat(follow_symlinks=False)
                except OSError as exc:
                    logger.debug("Cannot stat entry at depth %d: %s", depth, exc)
                    self._skip_or_raise(WalkErrorKind.ENTRY_METADATA)
                    continue

                entry = self._classify(Path(dir_entry.path), st, depth)
                if entry is None:
                    continue

                if entry.is_dir and not self._enqueue(entry.path, depth):
                    continue

                if not entry.is_dir or config.yield_directories:
                    self._buffer.append(entry)

    def _mark_root(self, visited: VisitedSet, dir_path: Path) -> None:
        try:
            root_st = os.stat(dir_path)
        except OSError as exc:
            logger.debug("Cannot stat walk root: %s", exc)
            return
        visited.check_and_mark_visited(dir_path, root_st)

    def _is_excluded(self, path: Path, is_dir: bool) -> bool:
        return self._entry_filter is not None and self._entry_filter.should_exclude(
            self._relative_path(path), is_dir
        )

    def _classify(self, path: Path, st: os.stat_result, depth: int) -> WalkEntry | None:
        """Build an entry from its non-following stat, resolving symlinks if enabled.

        Only directories entered through a followed link are recorded in
        the visited set, and only once the entry filter has kept them.

        Returns:
            WalkEntry | None: ``None`` when the entry is skipped (filtered
            out, broken link target or symlink cycle).
        """
        is_symlink = stat.S_ISLNK(st.st_mode)
        is_dir = stat.S_ISDIR(st.st_mode)
        is_file = stat.S_ISREG(st.st_mode)
        target: os.stat_result | None = None

        if is_symlink and self._visited is not None:
            try:
                target = os.stat(path)
            except OSError as exc:
                logger.debug("Symlink target unreadable at depth %d: %s", depth, exc)
                self._skip_or_raise(WalkErrorKind.ENTRY_METADATA)
                return None

            if stat.S_ISDIR(target.st_mode):
                is_dir, is_file = True, False
            elif stat.S_ISREG(target.st_mode):
                is_dir, is_file = False, True

        if self._is_excluded(path, is_dir):
            return None

        if is_dir and target is not None and self._visited is not None:
            if self._visited.check_and_mark_visited(path, target):
                logger.debug("Symlink cycle at depth %d, skipping %r", depth, path.name)
                self._skip_or_raise(WalkErrorKind.SYMLINK_CYCLE)
                return None

        return WalkEntry(
            path=path,
            depth=depth,
            is_dir=is_dir,
            is_file=is_file,
            is_symlink=is_symlink,
        )

    def _enqueue(self, path: Path, depth: int) -> bool:
        """Queue a subdirectory for descent when the depth limit allows it.

        Returns:
            bool: ``False`` when the entry must be dropped entirely (depth
            overflow in lenient mode), ``True`` otherwise.
        """
        config = self._config
        if depth >= DEPTH_LIMIT:
            logger.debug("Depth overflow at depth %d, skipping subdirectory", depth)
            self._skip_or_raise(WalkErrorKind.DEPTH_OVERFLOW)
            return False
        next_depth = depth + 1

        if config.max_depth is not None and next_depth > config.max_depth:
            return True

        if len(self._queue) >= config.max_queue_size:
            logger.debug(
                "Queue size limit (%d) reached, skipping subdirectory at depth %d",
                config.max_queue_size,
                next_depth,
            )
            self._skip_or_raise(WalkErrorKind.QUEUE_SIZE_EXCEEDED)
            return True

        self._queue.append((path, next_depth))
        return True


def walk(
    root: str | os.PathLike[str],
    config: WalkConfig | None = None,
    entry_filter: EntryFilter | None = None,
) -> DirWalker:
    """Walk *root* with default options unless *config* is given."""
    return DirWalker(root, config, entry_filter)


def walk_max_depth(root: str | os.PathLike[str], max_depth: int) -> DirWalker:
    """Walk *root* with defaults except for the depth limit."""
    return DirWalker(root, WalkConfig(max_depth=max_depth))
