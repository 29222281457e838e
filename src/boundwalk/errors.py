"""Walk error taxonomy.

Errors carry a category and nothing else. Paths, OS error text and other
system details are logged at DEBUG level where the failure happens and are
never attached to the raised value.
"""

from __future__ import annotations

import enum
import logging

logger = logging.getLogger(__name__)


class WalkErrorKind(enum.Enum):
    """Closed set of failure categories a walk can report."""

    ENTRY_METADATA = "entry metadata read failed"
    READ_DIRECTORY = "directory read failed"
    IO = "io operation failed"
    DEPTH_OVERFLOW = "depth overflow"
    QUEUE_SIZE_EXCEEDED = "queue size limit exceeded"
    ENTRY_LIMIT_EXCEEDED = "entry limit per directory exceeded"
    SYMLINK_CYCLE = "symlink cycle detected"


class WalkError(Exception):
    """Failure surfaced by a walker running with ``continue_on_error=False``.

    Attributes:
        kind: Failure category.
    """

    def __init__(self, kind: WalkErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __repr__(self) -> str:
        return f"WalkError({self.kind.name})"

    @classmethod
    def from_os_error(cls, exc: OSError) -> WalkError:
        """Convert an uncategorized ``OSError`` into a generic IO error.

        The original exception is logged and then dropped.
        """
        logger.debug("io error: %s", exc)
        return cls(WalkErrorKind.IO)
