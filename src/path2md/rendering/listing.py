from __future__ import annotations

from pathlib import Path

from path2md.core.interfaces.render import RendererProtocol
from path2md.core.models import PathKind, WalkNode
from path2md.rendering.sink import LineSink
from path2md.utils.paths import relative_header


class ListingRenderer(RendererProtocol):
    """Emit the header path of every file, one per line, without bodies."""

    def __init__(self, sink: LineSink, *, root: Path) -> None:
        self._sink = sink
        self._root = Path(root)

    def visit(self, node: WalkNode) -> None:
        if node.kind is PathKind.FILE:
            self._sink.line(relative_header(self._root, node.path))
