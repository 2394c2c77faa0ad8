from __future__ import annotations

from path2md.core.interfaces.render import WriterProtocol
from path2md.errors import OutputWriteFailed


class LineSink:
    """Line-oriented wrapper over any ordered text writer.

    Every write failure (broken pipe, full disk, closed stream) surfaces as
    OutputWriteFailed with the original exception as its cause.
    """

    def __init__(self, writer: WriterProtocol) -> None:
        self._writer = writer
        self.lines_written = 0

    def line(self, text: str = '') -> None:
        try:
            self._writer.write(text + '\n')
        except (OSError, ValueError) as exc:
            raise OutputWriteFailed(detail=str(exc)) from exc
        self.lines_written += 1

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self.line()

    def flush(self) -> None:
        flush = getattr(self._writer, 'flush', None)
        if flush is None:
            return
        try:
            flush()
        except (OSError, ValueError) as exc:
            raise OutputWriteFailed(detail=str(exc)) from exc
