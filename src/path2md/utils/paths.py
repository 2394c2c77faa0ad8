# src/path2md/utils/paths.py
"""
paths – Small, centralized path helpers for path2md.

Provides:
  • to_relpath(root, path)        – root-relative POSIX path ('' for root)
  • display_name(path)            – final segment, or the path itself
  • relative_header(root, path)   – header text of a content block
  • resolved_location(path)       – absolute location used for exclusions
"""

from __future__ import annotations

from pathlib import Path

from path2md.errors import PathNotUnderRoot


def to_relpath(root: Path, path: Path) -> str:
    """Return *path* relative to *root* as a POSIX string.

    Both paths are compared as given (no resolve), the walker only ever
    builds children by joining onto *root*.
    """
    try:
        rel = Path(path).relative_to(Path(root))
    except ValueError as exc:
        raise PathNotUnderRoot(Path(root), Path(path)) from exc
    text = rel.as_posix()
    return '' if text == '.' else text


def display_name(path: Path) -> str:
    """Return the last segment of *path*, falling back to the full text ('/', '.', 'C:\\')."""
    p = Path(path)
    return p.name or str(p)


def relative_header(root: Path, path: Path) -> str:
    """Header for a content block: the relpath, or the root's own name when *path* is root."""
    rel = to_relpath(root, path)
    return rel or display_name(root)


def resolved_location(path: Path) -> Path:
    """Absolute location of *path* with its parent resolved.

    The final segment is kept as is, so a symlink compares by where it sits,
    not by its target.
    """
    path = Path(path)
    return path.parent.resolve() / path.name
