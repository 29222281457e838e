"""boundwalk — bounded, iterative breadth-first directory walker."""

from boundwalk.config import WalkConfig
from boundwalk.errors import WalkError, WalkErrorKind
from boundwalk.filter import CompositeFilter, EntryFilter, PatternFilter
from boundwalk.gitignore import GitIgnoreFilter, load_gitignore_filter
from boundwalk.walker import DirWalker, WalkEntry, WalkState, walk, walk_max_depth

__version__ = "0.1.0"

__all__ = [
    "CompositeFilter",
    "DirWalker",
    "EntryFilter",
    "GitIgnoreFilter",
    "PatternFilter",
    "WalkConfig",
    "WalkEntry",
    "WalkError",
    "WalkErrorKind",
    "WalkState",
    "load_gitignore_filter",
    "walk",
    "walk_max_depth",
]
