"""
rfclog Configuration Module.

Nested settings, one class per concern, each with its own environment prefix:

    RFCLOG_*        logger settings (facility, threshold, target, format, ...)
    RFCLOG_DIAG_*   rfclog's own diagnostics output

Usage:
    from rfclog.config import settings

    settings.logger.log_level
    settings.diagnostics.format

The ``settings`` singleton is a convenience for applications; library
components always take a ``LoggerSettings`` instance explicitly.
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .diagnostics import DiagnosticsFormat, DiagnosticsLevel, DiagnosticsSettings
from .logger import LoggerSettings


class Settings(BaseSettings):
    """Composite settings aggregating the logger and diagnostics domains."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def logger(self) -> LoggerSettings:
        return LoggerSettings()

    @cached_property
    def diagnostics(self) -> DiagnosticsSettings:
        return DiagnosticsSettings()


settings = Settings()

__all__ = [
    "DiagnosticsFormat",
    "DiagnosticsLevel",
    "DiagnosticsSettings",
    "LoggerSettings",
    "Settings",
    "settings",
]
