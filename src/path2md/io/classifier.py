from __future__ import annotations

"""
Path classification.

`classify_path` never follows symlinks: a link is reported as an
unsupported entry and the walk stops instead of silently diverging from the
tree the user sees.
"""

import os
import stat
from pathlib import Path

from path2md.core.models import PathKind
from path2md.errors import MetadataUnreadable, UnsupportedPathType

_MODE_LABELS = (
    (stat.S_ISLNK, 'symlink'),
    (stat.S_ISFIFO, 'fifo'),
    (stat.S_ISSOCK, 'socket'),
    (stat.S_ISCHR, 'character device'),
    (stat.S_ISBLK, 'block device'),
)


def describe_mode(mode: int) -> str:
    """Human label of a non-file, non-directory st_mode."""
    for test, label in _MODE_LABELS:
        if test(mode):
            return label
    return 'unknown'


def kind_of_mode(mode: int) -> PathKind:
    if stat.S_ISDIR(mode):
        return PathKind.DIRECTORY
    if stat.S_ISREG(mode):
        return PathKind.FILE
    return PathKind.UNSUPPORTED


def classify_path(path: Path) -> PathKind:
    """Return DIRECTORY or FILE for *path*; raise for anything else.

    Raises:
        MetadataUnreadable: lstat failed (missing path, permission denied...).
        UnsupportedPathType: symlink, fifo, socket or device.
    """
    try:
        st = os.lstat(path)
    except OSError as exc:
        raise MetadataUnreadable(Path(path), exc.strerror) from exc

    kind = kind_of_mode(st.st_mode)
    if kind is PathKind.UNSUPPORTED:
        raise UnsupportedPathType(Path(path), describe_mode(st.st_mode))
    return kind
