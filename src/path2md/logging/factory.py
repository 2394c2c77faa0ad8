from __future__ import annotations

import logging
import os
from typing import Optional, TextIO

from path2md.core.interfaces.logging import LoggerFactoryProtocol
from path2md.logging.helpers import get_logger, setup_base_logger


class DefaultLoggerFactory(LoggerFactoryProtocol):
    """Logger factory driven by CLI flags and PATH2MD_* environment variables.

    Configuration is applied lazily on the first `get_logger` call, and again
    whenever `configure` is called with a new stream.
    """

    def __init__(self, *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
        self._json = bool(json_logs)
        self._level = int(level)
        self._stream: Optional[TextIO] = stream
        self._configured = False

    @classmethod
    def from_env(cls, *, json_logs: bool = False, verbose: bool = False, stream: Optional[TextIO] = None) -> 'DefaultLoggerFactory':
        """Merge explicit flags with PATH2MD_JSON_LOGS / PATH2MD_TRACE_IO."""
        json_logs = json_logs or os.getenv('PATH2MD_JSON_LOGS') == '1'
        # IO traces are emitted at debug level, so enabling them implies verbose.
        verbose = verbose or os.getenv('PATH2MD_TRACE_IO') == '1'
        return cls(json_logs=json_logs, level=logging.DEBUG if verbose else logging.INFO, stream=stream)

    @property
    def json_logs(self) -> bool:
        return self._json

    @property
    def level(self) -> int:
        return self._level

    def configure(self, *, stream: Optional[TextIO] = None) -> logging.Logger:
        if stream is not None:
            self._stream = stream
        self._configured = True
        return setup_base_logger(json_logs=self._json, level=self._level, stream=self._stream)

    def get_logger(self, name: str) -> logging.Logger:
        if not self._configured:
            self.configure()
        return get_logger(name)
