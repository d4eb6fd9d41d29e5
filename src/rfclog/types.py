from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Iterable, Optional, Tuple, Union

from .exceptions import InvalidFacility, InvalidSeverity

FACILITY_MIN = 0
FACILITY_MAX = 23
DEFAULT_FACILITY = 16
DEFAULT_EVENT_ID = 999
NIL_VALUE = "-"


class Severity(IntEnum):
    """Syslog severity (RFC 5424 section 6.2.1).

    Lower value means MORE severe: EMERGENCY is 0 and DEBUG is 7. A threshold
    of ``DEBUG`` therefore admits everything, ``EMERGENCY`` only emergencies.
    """

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        """Coerce an int, numeric string or (case-insensitive) name into a Severity."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise InvalidSeverity(severity=value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidSeverity(severity=value) from None
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.parse(int(text))
            name = _SEVERITY_ALIASES.get(text.lower(), text.upper())
            try:
                return cls[name]
            except KeyError:
                raise InvalidSeverity(severity=value) from None
        raise InvalidSeverity(severity=value)


_SEVERITY_ALIASES = {
    "emerg": "EMERGENCY",
    "panic": "EMERGENCY",
    "crit": "CRITICAL",
    "err": "ERROR",
    "warn": "WARNING",
    "info": "INFORMATIONAL",
    "information": "INFORMATIONAL",
}


class Facility(IntEnum):
    """Syslog facility codes (RFC 5424 section 6.2.1)."""

    KERN = 0
    USER = 1
    MAIL = 2
    DAEMON = 3
    AUTH = 4
    SYSLOG = 5
    LPR = 6
    NEWS = 7
    UUCP = 8
    CRON = 9
    AUTHPRIV = 10
    FTP = 11
    NTP = 12
    AUDIT = 13
    ALERT = 14
    CLOCK = 15
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23


class LogFormat(str, Enum):
    RFC3164 = "RFC3164"
    RFC5424 = "RFC5424"


class LogTarget(str, Enum):
    FLAT_FILE = "FlatFile"
    EVENT_VIEWER = "EventViewer"
    BOTH = "Both"

    @property
    def includes_file(self) -> bool:
        return self in (LogTarget.FLAT_FILE, LogTarget.BOTH)

    @property
    def includes_event_log(self) -> bool:
        return self in (LogTarget.EVENT_VIEWER, LogTarget.BOTH)


class EntryType(str, Enum):
    """Windows Event Log entry classification, independent of syslog severity."""

    ERROR = "Error"
    INFORMATION = "Information"
    FAILURE_AUDIT = "FailureAudit"
    SUCCESS_AUDIT = "SuccessAudit"
    WARNING = "Warning"


StructuredData = Union[str, Iterable[str], None]


def validate_facility(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFacility(facility=value)
    if not FACILITY_MIN <= value <= FACILITY_MAX:
        raise InvalidFacility(facility=value)
    return int(value)


def normalize_structured_data(value: StructuredData) -> Tuple[str, ...]:
    """Always return a tuple of SD elements; a lone string is one element."""
    if value is None:
        return (NIL_VALUE,)
    if isinstance(value, str):
        return (value,)
    elements = tuple(str(item) for item in value)
    return elements or (NIL_VALUE,)


@dataclass(frozen=True)
class LogRecord:
    """A single log call's fields. Built per call and never stored."""

    message: str
    severity: Severity
    facility: int = DEFAULT_FACILITY
    structured_data: Tuple[str, ...] = (NIL_VALUE,)
    proc_id: str = NIL_VALUE
    msg_id: str = NIL_VALUE
    tag: str = NIL_VALUE
    log_name: Optional[str] = None
    source: Optional[str] = None
    event_id: int = DEFAULT_EVENT_ID
    entry_type: EntryType = EntryType.INFORMATION

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity.parse(self.severity))
        object.__setattr__(self, "facility", validate_facility(self.facility))
        object.__setattr__(self, "structured_data", normalize_structured_data(self.structured_data))
        object.__setattr__(self, "entry_type", EntryType(self.entry_type))

    @property
    def priority(self) -> int:
        return self.facility * 8 + int(self.severity)
