from __future__ import annotations

"""
Deterministic depth-first tree walker.

Within a directory, entries are pruned by the ignore rules and the explicit
exclusions (absolute paths such as the output file) first, then classified,
then sorted files first and directories last, each group lexicographically
by name. The ``is_last`` flag handed to the visitor is
computed on that pruned, sorted list only.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from path2md.core.interfaces.walker import NodeVisitorProtocol, WalkerProtocol
from path2md.core.models import PathKind, WalkNode
from path2md.discovery.ignore import IgnoreMatcher
from path2md.errors import DirectoryEntryUnreadable, DirectoryUnreadable
from path2md.io.classifier import classify_path
from path2md.logging.helpers import get_logger, trace_io
from path2md.utils.paths import resolved_location, to_relpath


def _sort_key(item: Tuple[Path, PathKind]) -> Tuple[bool, str]:
    path, kind = item
    return (kind is PathKind.DIRECTORY, path.name)


class TreeWalker(WalkerProtocol):
    def __init__(
        self,
        root: Path,
        ignore: Optional[IgnoreMatcher] = None,
        *,
        exclude: Iterable[Path] = (),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._root = Path(root)
        self._ignore = ignore or IgnoreMatcher()
        self._exclude = frozenset(resolved_location(p) for p in exclude)
        self._log = logger or get_logger('walker')

    @property
    def root(self) -> Path:
        return self._root

    def root_kind(self) -> PathKind:
        return classify_path(self._root)

    def walk(self, visitor: NodeVisitorProtocol | None = None) -> List[WalkNode]:
        """Visit the root and every surviving descendant, fail-fast on any error."""
        visited: List[WalkNode] = []
        root_node = WalkNode(path=self._root, relpath='', kind=self.root_kind())
        self._visit(root_node, visitor, visited)
        if root_node.kind is PathKind.DIRECTORY:
            self._descend(root_node, visitor, visited)
        return visited

    def _visit(self, node: WalkNode, visitor: NodeVisitorProtocol | None, visited: List[WalkNode]) -> None:
        trace_io(self._log, 'visit', path=node.relpath or '.', kind=node.kind.value, last=node.is_last)
        visited.append(node)
        if visitor is not None:
            visitor.visit(node)

    def _list_children(self, directory: Path) -> List[Path]:
        try:
            it = os.scandir(directory)
        except OSError as exc:
            raise DirectoryUnreadable(directory, exc.strerror) from exc

        children: List[Path] = []
        with it:
            while True:
                try:
                    entry = next(it)
                except StopIteration:
                    break
                except OSError as exc:
                    raise DirectoryEntryUnreadable(directory, exc.strerror) from exc
                children.append(directory / entry.name)
        return children

    def _descend(self, parent: WalkNode, visitor: NodeVisitorProtocol | None, visited: List[WalkNode]) -> None:
        survivors: List[Tuple[Path, PathKind]] = []
        for child in self._list_children(parent.path):
            if self._ignore.is_ignored(child, self._root):
                self._log.debug('ignored %s', to_relpath(self._root, child))
                continue
            if self._exclude and resolved_location(child) in self._exclude:
                self._log.debug('excluded %s', to_relpath(self._root, child))
                continue
            survivors.append((child, classify_path(child)))

        survivors.sort(key=_sort_key)

        ancestors = parent.ancestors_last + ((parent.is_last,) if not parent.is_root else ())
        last_index = len(survivors) - 1
        for idx, (child, kind) in enumerate(survivors):
            node = WalkNode(
                path=child,
                relpath=to_relpath(self._root, child),
                kind=kind,
                depth=parent.depth + 1,
                is_last=idx == last_index,
                ancestors_last=ancestors,
            )
            self._visit(node, visitor, visited)
            if kind is PathKind.DIRECTORY:
                self._descend(node, visitor, visited)
