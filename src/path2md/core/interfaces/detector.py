from __future__ import annotations
from pathlib import Path
from typing import Protocol, runtime_checkable

from path2md.core.models import RenderedFormat


@runtime_checkable
class FormatDetectorProtocol(Protocol):
    """Content-sniffing text/binary classifier."""

    def detect(self, path: Path) -> RenderedFormat:
        ...
