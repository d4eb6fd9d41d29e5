"""
rfclog: syslog-formatted logging to flat files and the Windows Event Log.

Messages are rendered as RFC 3164 or RFC 5424 lines, gated by a severity
threshold (lower code = more severe) and fanned out to the configured
targets, with an optional console echo that ignores the threshold.

Usage:
    from rfclog import LoggerSettings, Severity, SyslogLogger

    logger = SyslogLogger(LoggerSettings(log_file="app.log"))
    logger.log("disk full", severity=Severity.ERROR)
"""

from .config import LoggerSettings
from .dispatch import SyslogLogger
from .exceptions import (
    DispatchError,
    EventLogUnavailable,
    EventSourceNotFound,
    NotElevatedError,
    RegistrationFailed,
    RfcLogError,
    SinkWriteError,
    SourceAlreadyRegistered,
)
from .formatters import SyslogFormatter, format_record
from .handler import SyslogHandler
from .registration import register_event_source
from .types import EntryType, Facility, LogFormat, LogRecord, LogTarget, Severity

__all__ = [
    "DispatchError",
    "EntryType",
    "EventLogUnavailable",
    "EventSourceNotFound",
    "Facility",
    "LogFormat",
    "LogRecord",
    "LogTarget",
    "LoggerSettings",
    "NotElevatedError",
    "RegistrationFailed",
    "RfcLogError",
    "Severity",
    "SinkWriteError",
    "SourceAlreadyRegistered",
    "SyslogFormatter",
    "SyslogHandler",
    "SyslogLogger",
    "format_record",
    "register_event_source",
]
