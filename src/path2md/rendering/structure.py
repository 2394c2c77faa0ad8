from __future__ import annotations

"""
Tree diagram of the walked paths.

    .
    ├─a.txt
    ├─docs
    │ └─guide.md
    └─src
      └─main.py

Only names are drawn, file contents are never touched.
"""

from path2md.constants import (
    BRANCH_LAST,
    BRANCH_MID,
    CONTINUATION,
    CONTINUATION_BLANK,
    INDENT,
    ROOT_MARKER,
)
from path2md.core.interfaces.render import RendererProtocol
from path2md.core.models import WalkNode
from path2md.rendering.sink import LineSink


def structure_line(node: WalkNode) -> str:
    """Return the diagram line of *node* without the leading indent."""
    if node.is_root:
        return ROOT_MARKER
    rails = ''.join(CONTINUATION_BLANK if last else CONTINUATION for last in node.ancestors_last)
    branch = BRANCH_LAST if node.is_last else BRANCH_MID
    return f'{rails}{branch}{node.name}'


class StructureRenderer(RendererProtocol):
    def __init__(self, sink: LineSink, *, indent: str = INDENT) -> None:
        self._sink = sink
        self._indent = indent

    def visit(self, node: WalkNode) -> None:
        self._sink.line(self._indent + structure_line(node))
