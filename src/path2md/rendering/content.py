"""
Content blocks for walked files.

Each file produces:

    <header path>

        <line 1>
        <line 2>


Binary files get a two-line summary (format name with media type, then the
byte size) instead of their bytes. Directories produce nothing.

Text is read with universal newlines, so CRLF and a lone CR both end a
line. Each line is trimmed with `str.rstrip()`, which drops every Unicode
whitespace character at the end, including the ASCII separators
0x1C-0x1F.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from path2md.constants import INDENT
from path2md.core.interfaces.detector import FormatDetectorProtocol
from path2md.core.interfaces.render import RendererProtocol
from path2md.core.models import PathKind, RenderedFormat, WalkNode
from path2md.core.report import DumpReport
from path2md.errors import FileUnreadable, MetadataUnreadable
from path2md.io.format_detector import FormatDetector
from path2md.logging.helpers import get_logger, trace_io
from path2md.rendering.sink import LineSink
from path2md.utils.paths import relative_header


class ContentRenderer(RendererProtocol):
    def __init__(
        self,
        sink: LineSink,
        *,
        root: Path,
        detector: Optional[FormatDetectorProtocol] = None,
        indent: str = INDENT,
        report: Optional[DumpReport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._sink = sink
        self._root = Path(root)
        self._detector = detector or FormatDetector()
        self._indent = indent
        self._report = report
        self._log = logger or get_logger('render.content')

    def visit(self, node: WalkNode) -> None:
        if node.kind is not PathKind.FILE:
            return

        header = relative_header(self._root, node.path)
        fmt = self._detector.detect(node.path)

        self._sink.line(header)
        self._sink.blank()
        if fmt.is_text:
            size = self._write_text(node.path, fmt)
        else:
            size = self._write_binary(node.path, fmt)
        self._sink.blank(2)

        if self._report is not None:
            self._report.add_file(fmt, size)

    def _write_text(self, path: Path, fmt: RenderedFormat) -> int:
        """Stream the file line by line; returns the file size in bytes."""
        try:
            with open(path, 'r', encoding=fmt.encoding or 'utf-8', errors='replace', newline=None) as fh:
                for line in fh:
                    self._sink.line(self._indent + line.rstrip())
                size = os.fstat(fh.fileno()).st_size
        except OSError as exc:
            raise FileUnreadable(path, exc.strerror or str(exc)) from exc
        trace_io(self._log, 'text body written', path=str(path), bytes=size)
        return size

    def _write_binary(self, path: Path, fmt: RenderedFormat) -> int:
        try:
            size = os.stat(path).st_size
        except OSError as exc:
            raise MetadataUnreadable(path, exc.strerror) from exc
        self._sink.line(f'{self._indent}{fmt.name} ({fmt.media_type})')
        self._sink.line(f'{self._indent}... {size} bytes ...')
        return size
