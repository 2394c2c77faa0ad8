from __future__ import annotations

from typing import Protocol, runtime_checkable

from path2md.core.models import WalkNode


@runtime_checkable
class RendererProtocol(Protocol):
    """Turns walk nodes into lines appended to a text sink."""

    def visit(self, node: WalkNode) -> None:
        """Render *node* into the sink the renderer was built with."""
        ...


@runtime_checkable
class WriterProtocol(Protocol):
    """Minimal ordered text sink (stdout, StringIO, an open file...)."""

    def write(self, s: str) -> int: ...


__all__ = ['RendererProtocol', 'WriterProtocol']
