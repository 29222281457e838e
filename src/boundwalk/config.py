"""Walker configuration and default bounds."""

from __future__ import annotations

import dataclasses
import sys
from dataclasses import dataclass
from typing import Any, Final

# 100,000 queued paths at a few hundred bytes each stays in the tens of MB.
DEFAULT_MAX_QUEUE_SIZE: Final[int] = 100_000

# Counts entries read from the OS for one directory, not entries yielded.
DEFAULT_MAX_ENTRIES_PER_DIR: Final[int] = 50_000

# Ceiling for the depth counter; computing a child depth past it is an overflow.
DEPTH_LIMIT: Final[int] = sys.maxsize


@dataclass(frozen=True, slots=True)
class WalkConfig:
    """Immutable traversal policy.

    Attributes:
        max_depth: Deepest depth at which entries are produced. ``None``
            means unlimited. Depth ``0`` is the root's immediate children.
        yield_directories: Whether directory entries are returned to the
            caller. Subdirectories are traversed either way.
        continue_on_error: ``True`` skips failing entries and directories
            silently. ``False`` surfaces the first failure and halts.
        max_queue_size: Most directories allowed to wait for a read at once.
        max_entries_per_dir: Most entries read from the OS for a single
            directory, whether or not they are yielded.
        follow_symlinks: Whether symlinks to directories are descended into.
    """

    max_depth: int | None = None
    yield_directories: bool = True
    continue_on_error: bool = True
    max_queue_size: int = DEFAULT_MAX_QUEUE_SIZE
    max_entries_per_dir: int = DEFAULT_MAX_ENTRIES_PER_DIR
    follow_symlinks: bool = False

    def __post_init__(self) -> None:
        if self.max_depth is not None:
            _require_count("max_depth", self.max_depth)
        _require_count("max_queue_size", self.max_queue_size)
        _require_count("max_entries_per_dir", self.max_entries_per_dir)

    def with_options(self, **changes: Any) -> WalkConfig:
        """Return a copy of this config with *changes* applied."""
        return dataclasses.replace(self, **changes)


def _require_count(name: str, value: object) -> None:
    """Validate a non-negative integer option.

    Raises:
        TypeError: If *value* is not an ``int`` (``bool`` is rejected).
        ValueError: If *value* is negative.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
