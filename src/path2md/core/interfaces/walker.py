from __future__ import annotations
from typing import List, Protocol, runtime_checkable

from path2md.core.models import WalkNode


@runtime_checkable
class NodeVisitorProtocol(Protocol):
    """Receives every surviving node of a walk, in walk order."""

    def visit(self, node: WalkNode) -> None:
        ...


@runtime_checkable
class WalkerProtocol(Protocol):
    """Abstract deterministic tree walker."""

    def walk(self, visitor: NodeVisitorProtocol | None = None) -> List[WalkNode]:
        """Visit Root and its surviving descendants depth-first, returning them in order."""
        ...
