from __future__ import annotations

"""
Error taxonomy for path2md.

Every error is fatal for the whole run. Each layer raises its own error with
``raise ... from exc`` so the underlying ``OSError`` (or other cause) stays
reachable through ``__cause__``.
"""

from pathlib import Path
from typing import Optional


class Path2MdError(Exception):
    """Base class for every error surfaced by path2md."""

    message = 'path2md failure'

    def __init__(self, path: Optional[Path] = None, detail: Optional[str] = None) -> None:
        self.path = path
        self.detail = detail
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.path is not None:
            text = f'{text} "{self.path}"'
        if self.detail:
            text = f'{text}: {self.detail}'
        return text


class ConfigError(Path2MdError):
    message = 'Invalid configuration'


class MetadataUnreadable(Path2MdError):
    message = 'Failed to read metadata for'


class UnsupportedPathType(Path2MdError):
    message = 'Unsupported path type at'

    def __init__(self, path: Path, kind: str = 'unknown') -> None:
        self.kind = kind
        super().__init__(path, kind)


class DirectoryUnreadable(Path2MdError):
    message = 'Failed to read dir'


class DirectoryEntryUnreadable(Path2MdError):
    message = 'Failed to read dir entry in'


class FormatDetectionFailed(Path2MdError):
    message = 'Failed to detect file format of'


class FileUnreadable(Path2MdError):
    message = 'Failed to read'


class OutputWriteFailed(Path2MdError):
    message = 'Failed to write output'


class PathNotUnderRoot(Path2MdError):
    message = 'Path is not relative to root'

    def __init__(self, root: Path, path: Path) -> None:
        self.root = root
        super().__init__(path, f'root is "{root}"')


__all__ = [
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
