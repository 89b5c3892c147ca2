"""Incremental line scanner with cork/uncork and pause/resume flow control.

Text chunks of any size are appended to a pending buffer and scanned for the
configured delimiter. Every complete line is either emitted through the
``line`` signal or, while corked, queued until the next flush. The text after
the last delimiter stays pending until more data arrives or ``end`` is called.

Signals (handlers are called synchronously, in registration order):

- ``line``: one argument, the emitted line
- ``done``: no arguments, raised by ``end``
- ``error``: one argument, a ``ScannerSignalError``
- ``drain``: no arguments, raised by ``uncork``

Writing while paused drops the chunk. Nothing is buffered for later.
"""

from __future__ import annotations

import codecs
from collections import deque
from dataclasses import dataclass
from enum import StrEnum
import re
from typing import TYPE_CHECKING, Any

from ...constants import Defaults
from ..logging.null_logger import NullLogger
from .exceptions import ScannerSignalError

if TYPE_CHECKING:
    from collections.abc import Callable

    from ...application.ports.services import LoggerPort
    from ...config import SheetStreamConfig


class ScannerState(StrEnum):
    IDLE = "idle"
    CORKED = "corked"
    PAUSED = "paused"


class ScannerSignal(StrEnum):
    LINE = "line"
    DONE = "done"
    ERROR = "error"
    DRAIN = "drain"


@dataclass(slots=True)
class LineScannerOptions:
    encoding: str = Defaults.ENCODING
    max_buffer_size: int = Defaults.MAX_BUFFER_SIZE
    max_line_count: int | None = None
    flush_line_count: int | None = None
    line_delimiter: str | re.Pattern[str] = Defaults.LINE_DELIMITER
    transform: Callable[[str], str] | None = None
    progress_callback: Callable[[int], None] | None = None
    logger: LoggerPort | None = None

    @classmethod
    def from_config(cls, config: SheetStreamConfig, **overrides: Any) -> LineScannerOptions:
        values: dict[str, Any] = {
            "encoding": config.encoding,
            "max_buffer_size": config.max_buffer_size,
            "max_line_count": config.max_line_count,
            "flush_line_count": config.flush_line_count,
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True, slots=True)
class ScannerStats:
    current_buffer_size: int
    line_count: int
    queued_lines: int
    corked: bool


class LineScanner:
    pass

    def __init__(self, options: LineScannerOptions | None = None) -> None:
        super().__init__()
        self.options = options or LineScannerOptions()
        self._logger: LoggerPort = self.options.logger or NullLogger()
        self._delimiter = _compile_delimiter(self.options.line_delimiter)
        self._encoding = self.options.encoding
        self._decoder = codecs.getincrementaldecoder(self._encoding)()
        self._pending = ""
        self._queue: deque[tuple[str, str]] = deque()
        self._line_count = 0
        self._state = ScannerState.IDLE
        self._resume_state = ScannerState.IDLE
        self._limit_signalled = False
        self._last_delimiter = ""
        self._handlers: dict[ScannerSignal, list[Callable[..., object]]] = {
            signal: [] for signal in ScannerSignal
        }

    def on(self, signal: str, handler: Callable[..., object]) -> LineScanner:
        self._handlers[ScannerSignal(signal)].append(handler)
        return self

    def off(self, signal: str, handler: Callable[..., object]) -> LineScanner:
        handlers = self._handlers[ScannerSignal(signal)]
        if handler in handlers:
            handlers.remove(handler)
        return self

    @property
    def state(self) -> ScannerState:
        return self._state

    @property
    def corked(self) -> bool:
        if self._state is ScannerState.PAUSED:
            return self._resume_state is ScannerState.CORKED
        return self._state is ScannerState.CORKED

    @property
    def paused(self) -> bool:
        return self._state is ScannerState.PAUSED

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def buffer_length(self) -> int:
        return len(self._pending)

    @property
    def line_count(self) -> int:
        return self._line_count

    @property
    def queue_length(self) -> int:
        return len(self._queue)

    @property
    def last_delimiter(self) -> str:
        """Delimiter text that ended the line being dispatched.

        Empty for the unterminated fragment emitted by ``end``.
        """
        return self._last_delimiter

    def write(self, chunk: str | bytes) -> bool:
        if self.paused:
            self.log(f"Dropped {len(chunk)} chars/bytes while paused")
            return False
        text = self._decode(chunk)
        if text is None:
            return False
        self._pending += text
        flush_line_count = self.options.flush_line_count
        for line, delimiter in self._scan():
            if self.corked:
                self._queue.append((line, delimiter))
                continue
            self._emit(line, delimiter)
            if flush_line_count is not None and self._line_count >= flush_line_count:
                self.flush()
        if len(self._pending) > self.options.max_buffer_size:
            self.log(
                f"Pending buffer {len(self._pending)} exceeds "
                f"{self.options.max_buffer_size}; forcing flush"
            )
            self.flush()
        return not self.corked

    def cork(self) -> None:
        if self._state is ScannerState.PAUSED:
            self._resume_state = ScannerState.CORKED
        else:
            self._state = ScannerState.CORKED

    def uncork(self) -> None:
        if self._state is ScannerState.PAUSED:
            self._resume_state = ScannerState.IDLE
        else:
            self._state = ScannerState.IDLE
        self.flush()
        self._dispatch(ScannerSignal.DRAIN)

    def flush(self) -> None:
        if not self._queue:
            return
        lines = list(self._queue)
        self._queue.clear()
        self.log(f"Flushing {len(lines)} queued line(s)")
        for line, delimiter in lines:
            self._emit(line, delimiter)

    def end(self, callback: Callable[[], object] | None = None) -> None:
        self._pending += self._decoder.decode(b"", final=True)
        self._decoder.reset()
        if self._pending:
            line = self._pending
            self._pending = ""
            self._emit(line, transform=False)
        self._dispatch(ScannerSignal.DONE)
        if callback is not None:
            callback()

    def pause(self) -> None:
        if self._state is not ScannerState.PAUSED:
            self._resume_state = self._state
            self._state = ScannerState.PAUSED

    def resume(self) -> None:
        if self._state is ScannerState.PAUSED:
            self._state = self._resume_state
            self._resume_state = ScannerState.IDLE
        if self._pending:
            pending = self._pending
            self._pending = ""
            self.write(pending)
        self.flush()

    def set_default_encoding(self, encoding: str) -> None:
        try:
            self._pending += self._decoder.decode(b"", final=True)
        except UnicodeDecodeError as e:
            self.emit_error(
                f"Incomplete {self._encoding} sequence dropped on encoding switch: {e}"
            )
        self._decoder = codecs.getincrementaldecoder(encoding)()
        self._encoding = encoding

    def emit_error(self, message: str) -> None:
        error = ScannerSignalError(message)
        if not self._handlers[ScannerSignal.ERROR]:
            self._logger.warning(f"[LineScanner] {message}")
            return
        self._dispatch(ScannerSignal.ERROR, error)

    def log(self, message: str) -> None:
        self._logger.debug(f"[LineScanner] {message}")

    def get_stats(self) -> ScannerStats:
        return ScannerStats(
            current_buffer_size=len(self._pending),
            line_count=self._line_count,
            queued_lines=len(self._queue),
            corked=self.corked,
        )

    def _decode(self, chunk: str | bytes) -> str | None:
        if isinstance(chunk, str):
            return chunk
        try:
            return self._decoder.decode(bytes(chunk))
        except UnicodeDecodeError as e:
            self._decoder.reset()
            self.emit_error(f"Cannot decode chunk as {self._encoding}: {e}")
            return None

    def _scan(self) -> list[tuple[str, str]]:
        buffer = self._pending
        lines: list[tuple[str, str]] = []
        position = 0
        for match in self._delimiter.finditer(buffer):
            if match.end() == match.start():
                continue
            lines.append((buffer[position : match.start()], match.group()))
            position = match.end()
        if position:
            self._pending = buffer[position:]
        return lines

    def _emit(
        self, line: str, delimiter: str = "", *, transform: bool = True
    ) -> None:
        max_line_count = self.options.max_line_count
        if max_line_count is not None and self._line_count >= max_line_count:
            if not self._limit_signalled:
                self._limit_signalled = True
                self.emit_error(
                    f"Line limit of {max_line_count} reached; discarding further lines"
                )
            return
        if transform and self.options.transform is not None:
            line = self.options.transform(line)
        self._line_count += 1
        self._last_delimiter = delimiter
        self._dispatch(ScannerSignal.LINE, line)
        if self.options.progress_callback is not None:
            self.options.progress_callback(self._line_count)

    def _dispatch(self, signal: ScannerSignal, *args: object) -> None:
        for handler in list(self._handlers[signal]):
            handler(*args)


def _compile_delimiter(delimiter: str | re.Pattern[str]) -> re.Pattern[str]:
    if isinstance(delimiter, re.Pattern):
        return delimiter
    return re.compile(delimiter)
