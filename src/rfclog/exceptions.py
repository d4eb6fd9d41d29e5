"""
rfclog exception hierarchy.

Errors are split along three axes: input validation, sink delivery and
event-source registration. Every error carries a stable ``code`` and a
``details`` mapping so callers can branch on them without parsing messages.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


class RfcLogError(Exception):
    """Base class for every error raised by rfclog."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


# ================================
# Validation Error
# ================================


class ValidationError(RfcLogError):
    """Caller supplied a value outside the syslog domain."""

    pass


class InvalidFacility(ValidationError):
    def __init__(self, *, facility: Any) -> None:
        super().__init__(
            f"Invalid syslog facility {facility!r}: expected an integer in 0..23",
            code="INVALID_FACILITY",
            details={"facility": facility},
        )


class InvalidSeverity(ValidationError):
    def __init__(self, *, severity: Any) -> None:
        super().__init__(
            f"Invalid syslog severity {severity!r}: expected 0..7 or a severity name",
            code="INVALID_SEVERITY",
            details={"severity": severity},
        )


# ================================
# Sink Error
# Delivery failures on the logging path
# ================================


class SinkError(RfcLogError):
    """A sink could not deliver a formatted line."""

    pass


class SinkWriteError(SinkError):
    """Write to a single sink failed.

    ``target`` is the file path or event source the sink was writing to.
    """

    def __init__(
        self,
        *,
        sink: str,
        target: str,
        reason: str,
        code: str = "SINK_WRITE_FAILED",
    ) -> None:
        super().__init__(
            f"{sink} sink failed writing to '{target}': {reason}",
            code=code,
            details={"sink": sink, "target": target, "reason": reason},
        )
        self.sink = sink
        self.target = target
        self.reason = reason


class EventLogUnavailable(SinkWriteError):
    """The Windows Event Log API cannot be reached from this host."""

    def __init__(self, *, reason: str) -> None:
        super().__init__(
            sink="eventlog",
            target="-",
            reason=reason,
            code="EVENT_LOG_UNAVAILABLE",
        )


class EventSourceNotFound(SinkWriteError):
    """The event source is not registered; run ``rfclog-register-source`` first."""

    def __init__(self, *, source: str, log_name: str) -> None:
        super().__init__(
            sink="eventlog",
            target=source,
            reason=f"event source '{source}' is not registered (log '{log_name}')",
            code="EVENT_SOURCE_NOT_FOUND",
        )
        self.details["log_name"] = log_name


class DispatchError(SinkError):
    """More than one sink failed for the same record."""

    def __init__(self, *, failures: Sequence[SinkWriteError]) -> None:
        self.failures = list(failures)
        summary = "; ".join(str(f) for f in self.failures)
        super().__init__(
            f"{len(self.failures)} sinks failed: {summary}",
            code="DISPATCH_FAILED",
            details={"failures": [f.details for f in self.failures]},
        )


# ================================
# Registration Error
# Administrative event-source registration; each kind has its own exit code
# ================================


class RegistrationError(RfcLogError):
    exit_code: int = 1


class NotElevatedError(RegistrationError):
    exit_code = 3

    def __init__(self, *, source: str) -> None:
        super().__init__(
            f"Registering event source '{source}' requires administrator privileges",
            code="NOT_ELEVATED",
            details={"source": source},
        )


class SourceAlreadyRegistered(RegistrationError):
    exit_code = 4

    def __init__(self, *, source: str) -> None:
        super().__init__(
            f"Event source '{source}' is already registered",
            code="SOURCE_ALREADY_REGISTERED",
            details={"source": source},
        )


class RegistrationFailed(RegistrationError):
    """The Event Log API rejected the registry lookup or the registration."""

    exit_code = 5

    def __init__(self, *, source: str, reason: str) -> None:
        super().__init__(
            f"Registering event source '{source}' failed: {reason}",
            code="REGISTRATION_FAILED",
            details={"source": source, "reason": reason},
        )
