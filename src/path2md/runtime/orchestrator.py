from __future__ import annotations

"""
Orchestrator: composes the walker and the renderers into the output modes.

Modes
-----
• full dump       – structure section (directory roots only) then one
                    content block per file, in walk order.
• structure only  – the structure section alone. A single-file root has no
                    structure, so this mode writes nothing for it.
• list only       – the header path of every file, one per line.

Errors propagate unchanged; whatever was written before the failure stays
written.
"""

import io
import logging
from pathlib import Path
from typing import Optional

from path2md.constants import STRUCTURE_HEADER
from path2md.core.interfaces.detector import FormatDetectorProtocol
from path2md.core.interfaces.render import WriterProtocol
from path2md.core.interfaces.walker import NodeVisitorProtocol
from path2md.core.models import DumpConfig, PathKind, WalkNode
from path2md.core.report import DumpReport, StageTimer
from path2md.discovery.ignore import IgnoreMatcher
from path2md.errors import ConfigError
from path2md.io.format_detector import FormatDetector
from path2md.io.walker import TreeWalker
from path2md.logging.helpers import get_logger
from path2md.rendering.content import ContentRenderer
from path2md.rendering.listing import ListingRenderer
from path2md.rendering.sink import LineSink
from path2md.rendering.structure import StructureRenderer
from path2md.utils.paths import resolved_location


class _Fanout:
    """Visitor that forwards each node to several renderers in order."""

    def __init__(self, *visitors: NodeVisitorProtocol) -> None:
        self._visitors = visitors

    def visit(self, node: WalkNode) -> None:
        for v in self._visitors:
            v.visit(node)


class _DirectoryCounter:
    def __init__(self, report: DumpReport) -> None:
        self._report = report

    def visit(self, node: WalkNode) -> None:
        if node.kind is PathKind.DIRECTORY:
            self._report.add_directory(node)


class Path2Md:
    """Render one root according to an immutable DumpConfig."""

    def __init__(
        self,
        config: DumpConfig,
        *,
        detector: Optional[FormatDetectorProtocol] = None,
        report: Optional[DumpReport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if config.structure_only and config.list_only:
            raise ConfigError(detail='structure_only and list_only are mutually exclusive')
        self._cfg = config
        self._root = Path(config.root)
        self._exclude = tuple(resolved_location(p) for p in config.exclude)
        if resolved_location(self._root) in self._exclude:
            raise ConfigError(self._root, 'the output file cannot be the dumped root')
        self._ignore = IgnoreMatcher(tuple(config.ignore or ()))
        self._detector = detector or FormatDetector()
        self._report = report or DumpReport()
        self._log = logger or get_logger('orchestrator')

    @property
    def config(self) -> DumpConfig:
        return self._cfg

    @property
    def report(self) -> DumpReport:
        return self._report

    @property
    def mode(self) -> str:
        if self._cfg.structure_only:
            return 'structure'
        if self._cfg.list_only:
            return 'list'
        return 'full'

    def write(self, writer: WriterProtocol) -> None:
        """Render the configured root into *writer*."""
        sink = LineSink(writer)
        walker = TreeWalker(self._root, self._ignore, exclude=self._exclude, logger=get_logger('walker'))
        self._report.mark_root(self._root, mode=self.mode)

        root_kind = walker.root_kind()
        self._log.debug('rendering %s (%s, mode=%s)', self._root, root_kind.value, self.mode)

        if self._cfg.list_only:
            self._write_listing(walker, sink)
        elif root_kind is PathKind.DIRECTORY:
            self._write_directory(walker, sink)
        elif self._cfg.structure_only:
            self._log.info('structure-only dump of single file %s: nothing to render', self._root)
        else:
            self._write_contents(walker, sink)

        sink.flush()
        self._report.finish()

    def _write_directory(self, walker: TreeWalker, sink: LineSink) -> None:
        sink.line(STRUCTURE_HEADER)
        sink.blank()
        structure = StructureRenderer(sink, indent=self._cfg.indent)
        with StageTimer(self._report, 'walk'):
            nodes = walker.walk(_Fanout(structure, _DirectoryCounter(self._report)))
        sink.blank(2)

        if self._cfg.structure_only:
            return

        content = self._content_renderer(sink)
        with StageTimer(self._report, 'content'):
            for node in nodes:
                content.visit(node)

    def _write_contents(self, walker: TreeWalker, sink: LineSink) -> None:
        content = self._content_renderer(sink)
        with StageTimer(self._report, 'content'):
            walker.walk(content)

    def _write_listing(self, walker: TreeWalker, sink: LineSink) -> None:
        with StageTimer(self._report, 'walk'):
            walker.walk(_Fanout(ListingRenderer(sink, root=self._root), _DirectoryCounter(self._report)))

    def _content_renderer(self, sink: LineSink) -> ContentRenderer:
        return ContentRenderer(
            sink,
            root=self._root,
            detector=self._detector,
            indent=self._cfg.indent,
            report=self._report,
        )


def render(config: DumpConfig, **kwargs) -> str:
    """Render *config* into a string (convenience wrapper over Path2Md.write)."""
    buf = io.StringIO()
    Path2Md(config, **kwargs).write(buf)
    return buf.getvalue()
