"""
Log sink abstractions and concrete implementations.

Sinks receive a line that is already formatted; they never filter and never
retry. Failures are raised as ``SinkWriteError`` for the dispatcher to collect.
"""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from . import eventlog
from .exceptions import EventSourceNotFound, SinkWriteError
from .formatters import ConsoleFormatter
from .types import LogRecord

# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks."""

    name: str = "sink"

    @abstractmethod
    def emit(self, line: str, record: LogRecord) -> None:
        """Deliver one formatted line."""
        ...

    def close(self) -> None:
        """Release resources. Sinks here hold none between writes."""


class FileSink(BaseSink):
    """Append-only UTF-8 flat file, one line per record.

    The file is opened per write so no handle outlives a call. Appends from
    threads in this process are serialised per path; other processes writing
    the same file must coordinate themselves.
    """

    name = "file"

    _locks: Dict[Path, threading.Lock] = {}
    _locks_guard = threading.Lock()

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _lock(self) -> threading.Lock:
        key = self._path.absolute()
        with self._locks_guard:
            return self._locks.setdefault(key, threading.Lock())

    def emit(self, line: str, record: LogRecord) -> None:
        try:
            with self._lock():
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with open(self._path, "a", encoding="utf-8") as fh:
                    fh.write(line + "\n")
        except (OSError, ValueError) as exc:
            # ValueError covers UnicodeEncodeError from lone surrogates
            raise SinkWriteError(sink=self.name, target=str(self._path), reason=str(exc)) from exc


class EventLogSink(BaseSink):
    """Windows Event Log writer.

    The record's ``source``/``log_name`` override the sink defaults. The source
    must already be registered (see ``rfclog.registration``); it is never
    created here.
    """

    name = "eventlog"

    def __init__(self, source: str, log_name: str = "Application"):
        self._source = source
        self._log_name = log_name

    def emit(self, line: str, record: LogRecord) -> None:
        source = record.source or self._source
        log_name = record.log_name or self._log_name
        try:
            if not eventlog.source_exists(source):
                raise EventSourceNotFound(source=source, log_name=log_name)
            eventlog.report_event(source, record.event_id, record.entry_type, [line])
        except SinkWriteError:
            raise
        except Exception as exc:
            # pywin32 raises pywintypes.error, which is not an OSError subclass
            raise SinkWriteError(sink=self.name, target=source, reason=str(exc)) from exc


class ConsoleSink(BaseSink):
    """Interactive echo of formatted lines (stderr by default)."""

    name = "console"

    def __init__(self, stream: Optional[Any] = None, *, color: Optional[bool] = None):
        self._stream = stream
        self._color = color

    @property
    def stream(self) -> Any:
        return self._stream or sys.stderr

    def emit(self, line: str, record: LogRecord) -> None:
        stream = self.stream
        if stream is None:
            # pythonw.exe and services run without a console
            return
        use_color = self._color
        if use_color is None:
            use_color = bool(getattr(stream, "isatty", lambda: False)())
        stream.write(ConsoleFormatter.format(line, record.severity, use_color=use_color) + "\n")
        stream.flush()
