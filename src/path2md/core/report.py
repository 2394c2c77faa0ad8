from __future__ import annotations

"""
Runtime report for a single dump.

Counts what the walk visited and how much time each stage took. The CLI
prints it as JSON on stderr when --report is given.
"""

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from path2md.core.models import RenderedFormat, WalkNode


@dataclass
class DumpReport:
    started_at: float = field(default_factory=time.perf_counter)
    finished_at: float | None = None
    duration_s: float | None = None

    root: Optional[str] = None
    mode: Optional[str] = None

    directories: int = 0
    text_files: int = 0
    binary_files: int = 0
    bytes_total: int = 0
    formats: Dict[str, int] = field(default_factory=dict)

    time_by_stage: Dict[str, float] = field(
        default_factory=lambda: {
            "walk": 0.0,
            "content": 0.0,
        }
    )

    def mark_root(self, root: Path, *, mode: str) -> None:
        self.root = str(root)
        self.mode = mode

    def add_directory(self, node: WalkNode) -> None:
        if not node.is_root:
            self.directories += 1

    def add_file(self, fmt: RenderedFormat, size: int) -> None:
        if fmt.is_text:
            self.text_files += 1
        else:
            self.binary_files += 1
        self.bytes_total += size
        self.formats[fmt.name] = self.formats.get(fmt.name, 0) + 1

    def add_time(self, stage: str, seconds: float) -> None:
        self.time_by_stage[stage] = self.time_by_stage.get(stage, 0.0) + seconds

    def finish(self) -> None:
        self.finished_at = time.perf_counter()
        self.duration_s = self.finished_at - self.started_at

    def to_json(self, *, indent: int = 2) -> str:
        return json.dumps(
            {
                "root": self.root,
                "mode": self.mode,
                "duration_s": self.duration_s,
                "directories": self.directories,
                "text_files": self.text_files,
                "binary_files": self.binary_files,
                "bytes_total": self.bytes_total,
                "formats": self.formats,
                "time_by_stage": self.time_by_stage,
            },
            indent=indent,
        )


class StageTimer:
    def __init__(self, report: DumpReport, stage: str):
        self._report = report
        self._stage = stage
        self._t0: float | None = None

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._t0 is not None:
            self._report.add_time(self._stage, time.perf_counter() - self._t0)
        return False
