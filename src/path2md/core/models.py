from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Tuple

from path2md.constants import INDENT


class PathKind(str, Enum):
    DIRECTORY = 'directory'
    FILE = 'file'
    UNSUPPORTED = 'unsupported'


@dataclass(frozen=True)
class WalkNode:
    """One visited filesystem entry, created per visit and never persisted."""
    path: Path
    relpath: str
    kind: PathKind
    depth: int = 0
    is_last: bool = True
    # is_last flags of every ancestor between the root and this node.
    ancestors_last: Tuple[bool, ...] = ()

    @property
    def is_root(self) -> bool:
        return self.depth == 0

    @property
    def name(self) -> str:
        return self.path.name or str(self.path)


@dataclass(frozen=True)
class RenderedFormat:
    name: str
    media_type: str
    is_text: bool = False
    encoding: str | None = None


PLAIN_TEXT = RenderedFormat('Plain Text', 'text/plain', is_text=True, encoding='utf-8')
ARBITRARY_BINARY = RenderedFormat('Arbitrary Binary Data', 'application/octet-stream')


@dataclass(frozen=True)
class DumpConfig:
    """Immutable options for one invocation, built once before the walk."""
    root: Path
    ignore: Tuple[str, ...] = field(default_factory=tuple)
    structure_only: bool = False
    list_only: bool = False
    indent: str = INDENT
    # Absolute paths kept out of the walk, e.g. the output file itself.
    exclude: Tuple[Path, ...] = field(default_factory=tuple)
