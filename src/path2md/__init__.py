from __future__ import annotations

from path2md.constants import INDENT, STRUCTURE_HEADER
from path2md.core.models import (
    ARBITRARY_BINARY,
    PLAIN_TEXT,
    DumpConfig,
    PathKind,
    RenderedFormat,
    WalkNode,
)
from path2md.core.report import DumpReport
from path2md.discovery.ignore import IgnoreMatcher
from path2md.errors import (
    ConfigError,
    DirectoryEntryUnreadable,
    DirectoryUnreadable,
    FileUnreadable,
    FormatDetectionFailed,
    MetadataUnreadable,
    OutputWriteFailed,
    Path2MdError,
    PathNotUnderRoot,
    UnsupportedPathType,
)
from path2md.io.classifier import classify_path
from path2md.io.format_detector import FormatDetector, detect_format
from path2md.io.walker import TreeWalker
from path2md.rendering.content import ContentRenderer
from path2md.rendering.structure import StructureRenderer
from path2md.runtime.orchestrator import Path2Md, render

__version__ = '0.3.0'

__all__ = [
    'INDENT',
    'STRUCTURE_HEADER',
    'ARBITRARY_BINARY',
    'PLAIN_TEXT',
    'DumpConfig',
    'DumpReport',
    'PathKind',
    'RenderedFormat',
    'WalkNode',
    'IgnoreMatcher',
    'classify_path',
    'FormatDetector',
    'detect_format',
    'TreeWalker',
    'ContentRenderer',
    'StructureRenderer',
    'Path2Md',
    'render',
    'Path2MdError',
    'ConfigError',
    'MetadataUnreadable',
    'UnsupportedPathType',
    'DirectoryUnreadable',
    'DirectoryEntryUnreadable',
    'FormatDetectionFailed',
    'FileUnreadable',
    'OutputWriteFailed',
    'PathNotUnderRoot',
]
