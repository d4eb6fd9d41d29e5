"""
Syslog message formatters.

Both layouts start with the priority token ``<facility*8+severity>``:

    RFC3164: <PRI>Mmm dd hh:mm:ss HOSTNAME TAG:MESSAGE
    RFC5424: <PRI>1 TIMESTAMP HOSTNAME APP-NAME PROCID MSGID [SD]...[SD] MESSAGE

Timestamps keep the 12-hour ``hh`` clock (no AM/PM marker) that existing
consumers of these logs parse. ``strict=True`` switches RFC5424 timestamps to
the 24-hour form the RFC requires.
"""

from __future__ import annotations

import re
import socket
from datetime import datetime
from typing import Callable, Dict, Optional

from .types import NIL_VALUE, LogFormat, LogRecord, Severity

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_NEWLINES = re.compile(r"[\r\n]+")
SYSLOG_VERSION = "1"


def fold_newlines(text: str) -> str:
    """Collapse CR/LF runs so one record never spans more than one line."""
    return _NEWLINES.sub("\\\\n", text)


def _header_field(value: Optional[str]) -> str:
    if not value:
        return NIL_VALUE
    return fold_newlines(value).replace(" ", "_")


def _hour12(now: datetime) -> str:
    return f"{now.hour % 12 or 12:02d}"


def _utc_offset(now: datetime) -> str:
    offset = now.utcoffset()
    if offset is None:
        return ""
    minutes = int(offset.total_seconds() // 60)
    sign = "+" if minutes >= 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def rfc3164_timestamp(now: datetime) -> str:
    """``Mmm dd hh:mm:ss`` with English month names regardless of locale."""
    return f"{_MONTHS[now.month - 1]} {now.day:02d} {_hour12(now)}:{now.minute:02d}:{now.second:02d}"


def rfc5424_timestamp(now: datetime, *, strict: bool = False) -> str:
    hour = f"{now.hour:02d}" if strict else _hour12(now)
    return (
        f"{now.year:04d}-{now.month:02d}-{now.day:02d}"
        f"T{hour}:{now.minute:02d}:{now.second:02d}{_utc_offset(now)}"
    )


def render_structured_data(elements: tuple[str, ...]) -> str:
    """Wrap every element in its own bracket pair, no separator."""
    return "".join(f"[{element}]" for element in elements)


class SyslogFormatter:
    """Builds a complete syslog line from a LogRecord.

    Structured-data elements are copied verbatim into their brackets with one
    exception: CR/LF runs are folded to a literal ``\\n`` like everywhere else
    in the line, so a record always stays on one line.

    Args:
        hostname: HOSTNAME field; defaults to ``socket.gethostname()``
        clock: zero-argument callable returning the current local time
        strict_timestamps: RFC5424 24-hour timestamps instead of the legacy form
    """

    def __init__(
        self,
        *,
        hostname: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
        strict_timestamps: bool = False,
    ) -> None:
        self._hostname = hostname
        self._clock = clock or (lambda: datetime.now().astimezone())
        self._strict = strict_timestamps
        self._layouts: Dict[LogFormat, Callable[[LogRecord, datetime, str], str]] = {
            LogFormat.RFC3164: self._rfc3164,
            LogFormat.RFC5424: self._rfc5424,
        }

    @property
    def hostname(self) -> str:
        return self._hostname or socket.gethostname()

    def format(self, record: LogRecord, fmt: LogFormat) -> str:
        layout = self._layouts[LogFormat(fmt)]
        return layout(record, self._clock(), _header_field(self.hostname))

    def _rfc3164(self, record: LogRecord, now: datetime, host: str) -> str:
        return (
            f"<{record.priority}>{rfc3164_timestamp(now)} {host} "
            f"{_header_field(record.tag)}:{fold_newlines(record.message)}"
        )

    def _rfc5424(self, record: LogRecord, now: datetime, host: str) -> str:
        return " ".join(
            [
                f"<{record.priority}>{SYSLOG_VERSION}",
                rfc5424_timestamp(now, strict=self._strict),
                host,
                _header_field(record.tag),
                _header_field(record.proc_id),
                _header_field(record.msg_id),
                render_structured_data(tuple(fold_newlines(sd) for sd in record.structured_data)),
                fold_newlines(record.message),
            ]
        )


def format_record(
    record: LogRecord,
    fmt: LogFormat,
    *,
    now: Optional[datetime] = None,
    hostname: Optional[str] = None,
    strict_timestamps: bool = False,
) -> str:
    """One-shot helper around SyslogFormatter."""
    clock = (lambda: now) if now is not None else None
    formatter = SyslogFormatter(hostname=hostname, clock=clock, strict_timestamps=strict_timestamps)
    return formatter.format(record, fmt)


# =============================================================================
# Console Formatter
# =============================================================================


class ConsoleFormatter:
    """Colours an already formatted syslog line for an interactive terminal."""

    _RESET = "\x1b[0m"
    _SEVERITY_COLORS = {
        Severity.EMERGENCY: "\x1b[1;31m",
        Severity.ALERT: "\x1b[1;31m",
        Severity.CRITICAL: "\x1b[1;31m",
        Severity.ERROR: "\x1b[31m",
        Severity.WARNING: "\x1b[33m",
        Severity.NOTICE: "\x1b[32m",
        Severity.INFORMATIONAL: "\x1b[32m",
        Severity.DEBUG: "\x1b[36m",
    }

    @classmethod
    def format(cls, line: str, severity: Severity, *, use_color: bool = True) -> str:
        if not use_color:
            return line
        return f"{cls._SEVERITY_COLORS[Severity(severity)]}{line}{cls._RESET}"
