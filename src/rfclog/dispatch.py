"""
Severity filtering and multi-sink dispatch.

Flow per call: build LogRecord -> format -> threshold check -> fan out to the
sinks of the configured LogTarget -> optional console echo. Nothing is
queued; a call returns once every sink has been attempted.
"""

from __future__ import annotations

import inspect
from typing import Any, List, Optional

from .config import Settings
from .config.logger import LoggerSettings
from .diagnostics import configure_from_settings, get_logger
from .exceptions import DispatchError, SinkWriteError
from .formatters import SyslogFormatter
from .sinks import BaseSink, ConsoleSink, EventLogSink, FileSink
from .types import (
    DEFAULT_EVENT_ID,
    NIL_VALUE,
    EntryType,
    LogRecord,
    LogTarget,
    Severity,
    StructuredData,
)

_INTERNAL_MODULES = ("rfclog", "logging", "structlog")


def infer_caller(skip_modules: tuple[str, ...] = _INTERNAL_MODULES) -> str:
    """Name of the first routine on the stack outside rfclog.

    Module-level callers report the last component of their module name.
    """
    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        while frame is not None:
            module = frame.f_globals.get("__name__", "")
            if module.split(".", 1)[0] not in skip_modules:
                name = frame.f_code.co_name
                if name == "<module>":
                    return "main" if module == "__main__" else module.rsplit(".", 1)[-1]
                return name
            frame = frame.f_back
    finally:
        del frame
    return NIL_VALUE


def passes_threshold(severity: Severity | int, threshold: Severity | int) -> bool:
    """Lower codes are more severe, so a record passes when ``severity <= threshold``."""
    return int(severity) <= int(threshold)


class SyslogLogger:
    """Formats records and routes them to the configured sinks.

    Args:
        settings: immutable logger configuration
        formatter: override the SyslogFormatter built from ``settings``
        file_sink / event_log_sink / console_sink: override the default sinks
    """

    def __init__(
        self,
        settings: Optional[LoggerSettings] = None,
        *,
        formatter: Optional[SyslogFormatter] = None,
        file_sink: Optional[BaseSink] = None,
        event_log_sink: Optional[BaseSink] = None,
        console_sink: Optional[BaseSink] = None,
    ) -> None:
        self._settings = settings or LoggerSettings()
        self._formatter = formatter or SyslogFormatter(
            hostname=self._settings.hostname,
            strict_timestamps=self._settings.strict_timestamps,
        )
        self._console = console_sink or ConsoleSink()
        self._sinks = self._build_sinks(self._settings.log_target, file_sink, event_log_sink)

    def _build_sinks(
        self,
        target: LogTarget,
        file_sink: Optional[BaseSink],
        event_log_sink: Optional[BaseSink],
    ) -> List[BaseSink]:
        sinks: List[BaseSink] = []
        if target.includes_file:
            sinks.append(file_sink or FileSink(self._settings.log_file))
        if target.includes_event_log:
            sinks.append(
                event_log_sink or EventLogSink(self._settings.event_source, self._settings.event_log_name)
            )
        return sinks

    @classmethod
    def from_settings(cls, settings: Settings) -> "SyslogLogger":
        """Build from the composite settings, applying its diagnostics section too."""
        configure_from_settings(settings.diagnostics)
        return cls(settings.logger)

    @property
    def settings(self) -> LoggerSettings:
        return self._settings

    @property
    def sinks(self) -> tuple[BaseSink, ...]:
        return tuple(self._sinks)

    def should_log(self, severity: Severity | int) -> bool:
        return passes_threshold(Severity.parse(severity), self._settings.log_level)

    def log(
        self,
        message: str,
        *,
        severity: Severity | int | str,
        facility: Optional[int] = None,
        structured_data: StructuredData = None,
        proc_id: Optional[str] = None,
        msg_id: Optional[str] = None,
        log_name: Optional[str] = None,
        source: Optional[str] = None,
        event_id: int = DEFAULT_EVENT_ID,
        entry_type: EntryType | str = EntryType.INFORMATION,
        verbose: Optional[bool] = None,
        tag: Optional[str] = None,
    ) -> bool:
        """
        Format ``message`` and deliver it.

        Returns True when the record passed the threshold and every target
        sink accepted it, False when the threshold filtered it out. Sink
        failures are raised after all sinks were attempted: a lone failure as
        the SinkWriteError itself, several as one DispatchError.
        """
        record = LogRecord(
            message=str(message),
            severity=severity,
            facility=self._settings.facility if facility is None else facility,
            structured_data=structured_data,
            proc_id=proc_id or NIL_VALUE,
            msg_id=msg_id or NIL_VALUE,
            tag=tag or infer_caller(),
            log_name=log_name or self._settings.event_log_name,
            source=source or self._settings.event_source,
            event_id=event_id,
            entry_type=entry_type,
        )
        line = self._formatter.format(record, self._settings.log_format)

        passed = passes_threshold(record.severity, self._settings.log_level)
        failures: List[SinkWriteError] = []
        if passed:
            failures = self._fan_out(line, record)
        else:
            get_logger(__name__).debug(
                "record filtered",
                severity=record.severity.name,
                threshold=self._settings.log_level.name,
            )

        echo = self._settings.verbose if verbose is None else verbose
        if echo:
            self._echo(line, record)

        if len(failures) == 1:
            raise failures[0]
        if failures:
            raise DispatchError(failures=failures)
        return passed

    def _fan_out(self, line: str, record: LogRecord) -> List[SinkWriteError]:
        failures: List[SinkWriteError] = []
        for sink in self._sinks:
            try:
                sink.emit(line, record)
            except SinkWriteError as exc:
                failures.append(exc)
            except Exception as exc:
                failures.append(SinkWriteError(sink=sink.name, target="-", reason=str(exc)))
        for exc in failures:
            get_logger(__name__).warning("sink write failed", sink=exc.sink, target=exc.target, reason=exc.reason)
        return failures

    def _echo(self, line: str, record: LogRecord) -> None:
        try:
            self._console.emit(line, record)
        except Exception as exc:
            # the echo never fails the call
            get_logger(__name__).warning("console echo failed", reason=str(exc))

    # Severity shortcuts

    def emergency(self, message: str, **kwargs: Any) -> bool:
        return self._shortcut(Severity.EMERGENCY, message, kwargs)

    def alert(self, message: str, **kwargs: Any) -> bool:
        return self._shortcut(Severity.ALERT, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> bool:
        return self._shortcut(Severity.CRITICAL, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> bool:
        return self._shortcut(Severity.ERROR, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> bool:
        return self._shortcut(Severity.WARNING, message, kwargs)

    def notice(self, message: str, **kwargs: Any) -> bool:
        return self._shortcut(Severity.NOTICE, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> bool:
        return self._shortcut(Severity.INFORMATIONAL, message, kwargs)

    def debug(self, message: str, **kwargs: Any) -> bool:
        return self._shortcut(Severity.DEBUG, message, kwargs)

    def _shortcut(self, severity: Severity, message: str, kwargs: dict[str, Any]) -> bool:
        return self.log(message, severity=severity, **kwargs)
