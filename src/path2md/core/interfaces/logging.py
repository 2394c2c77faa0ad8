from __future__ import annotations

import logging
from typing import Optional, Protocol, TextIO, runtime_checkable


@runtime_checkable
class LoggerFactoryProtocol(Protocol):
    """Hands out 'path2md.*' loggers bound to one handler configuration."""

    def configure(self, *, stream: Optional[TextIO] = None) -> logging.Logger:
        """Apply level/format to the base logger, writing to *stream* (stderr by default)."""
        ...

    def get_logger(self, name: str) -> logging.Logger:
        ...
