from __future__ import annotations
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class IgnoreMatcherProtocol(Protocol):
    """Decides whether a node (and its subtree) must be skipped."""

    def matches(self, relpath: str) -> bool:
        """Return True if the root-relative POSIX path matches any pattern."""
        ...

    def is_ignored(self, path: Path, root: Path) -> bool:
        """Normalize *path* against *root* and delegate to `matches`."""
        ...
