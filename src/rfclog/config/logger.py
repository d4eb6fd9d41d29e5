"""
Logger Configuration.

Process-wide settings read by every log call. Built once at startup and never
mutated afterwards; components receive the instance explicitly.
"""

from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import InvalidSeverity
from ..types import (
    DEFAULT_FACILITY,
    FACILITY_MAX,
    FACILITY_MIN,
    LogFormat,
    LogTarget,
    Severity,
)


class LoggerSettings(BaseSettings):
    """
    Syslog logger settings.
    Prefix: RFCLOG_
    """

    model_config = SettingsConfigDict(
        env_prefix="RFCLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    facility: int = Field(
        default=DEFAULT_FACILITY,
        ge=FACILITY_MIN,
        le=FACILITY_MAX,
        description="Default syslog facility (16 = local0)",
    )
    log_level: Severity = Field(
        default=Severity.DEBUG,
        description="Least severe severity still delivered to sinks (7 = everything)",
    )
    log_file: str = Field(default="logs/rfclog.log", description="Flat file path (FlatFile/Both targets)")
    log_target: LogTarget = Field(default=LogTarget.FLAT_FILE, description="FlatFile, EventViewer or Both")
    log_format: LogFormat = Field(default=LogFormat.RFC5424, description="RFC3164 or RFC5424")
    event_source: str = Field(default="rfclog", description="Event Log source name (EventViewer/Both targets)")
    event_log_name: str = Field(default="Application", description="Event Log name (EventViewer/Both targets)")
    hostname: Optional[str] = Field(default=None, description="Override for the HOSTNAME header field")
    verbose: bool = Field(default=False, description="Echo every formatted line to stderr")
    strict_timestamps: bool = Field(
        default=False,
        description="Render RFC5424 timestamps with a 24-hour clock instead of the legacy 12-hour form",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_severity(cls, value: Any) -> Severity:
        try:
            return Severity.parse(value)
        except InvalidSeverity as exc:
            raise ValueError(str(exc)) from exc
