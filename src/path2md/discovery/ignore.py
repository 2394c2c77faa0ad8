from __future__ import annotations

"""
Glob-based exclusion rules.

Patterns are always matched against the path relative to the dump root, in
POSIX form (``src/app.py``), never against the absolute path. Matching uses
``fnmatch`` case-sensitive semantics, so ``*`` and ``?`` also cross ``/``:
``*.dat`` excludes ``bin.dat`` as well as ``sub/bin.dat``. Each pattern is
also tried against the final segment, which lets a bare name such as
``node_modules`` exclude that directory at any depth.

The predicate is pure and order independent: a path is ignored when it
matches any pattern.
"""

import fnmatch
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Tuple

from path2md.core.interfaces.matcher import IgnoreMatcherProtocol
from path2md.utils.paths import to_relpath


def normalize_patterns(patterns: Iterable[str] | None) -> Tuple[str, ...]:
    """Strip, drop blanks and deduplicate *patterns* keeping first-seen order."""
    cleaned = []
    for pat in patterns or ():
        pat = (pat or '').strip().replace('\\', '/')
        if pat.startswith('./'):
            pat = pat[2:]
        pat = pat.rstrip('/')
        if pat:
            cleaned.append(pat)
    return tuple(dict.fromkeys(cleaned).keys())


def split_pattern_list(values: Iterable[str] | None) -> list[str]:
    """Expand comma-delimited CLI values (``-i '*.log,build'``) into single patterns."""
    out: list[str] = []
    for raw in values or ():
        out.extend(part for part in raw.split(',') if part.strip())
    return out


@dataclass(frozen=True)
class IgnoreMatcher(IgnoreMatcherProtocol):
    """Compiled, immutable set of exclusion globs."""

    patterns: Tuple[str, ...] = ()
    _compiled: Tuple[re.Pattern[str], ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        pats = normalize_patterns(self.patterns)
        object.__setattr__(self, 'patterns', pats)
        object.__setattr__(self, '_compiled', tuple(re.compile(fnmatch.translate(p)) for p in pats))

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def matches(self, relpath: str) -> bool:
        if not relpath or not self._compiled:
            return False
        name = relpath.rsplit('/', 1)[-1]
        return any(rx.match(relpath) or rx.match(name) for rx in self._compiled)

    def is_ignored(self, path: Path, root: Path) -> bool:
        return self.matches(to_relpath(root, path))
