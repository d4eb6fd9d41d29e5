"""
rfclog's own operational logging.

Records dropped by the threshold and sink failures are reported here through
structlog, never through the syslog sinks themselves. The pipeline is kept
private to rfclog (``structlog.wrap_logger``) so an application's own
``structlog.configure`` call is left untouched.
Library: structlog + orjson for JSON rendering.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

import orjson
import structlog
from structlog.typing import EventDict, WrappedLogger

from .config.diagnostics import DiagnosticsFormat, DiagnosticsLevel, DiagnosticsSettings

# =============================================================================
# Global State
# =============================================================================

_pipeline: dict[str, Any] = {}


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger bound to the current diagnostics pipeline."""
    if not _pipeline:
        configure_diagnostics()
    stream = _pipeline["stream"] or sys.stderr
    # no console at all under pythonw.exe
    sink = structlog.PrintLogger(file=stream) if stream is not None else structlog.ReturnLogger()
    return structlog.wrap_logger(
        sink,
        processors=_pipeline["processors"],
        wrapper_class=_pipeline["wrapper_class"],
        _name=name or "rfclog",
    )


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["logger"] = event_dict.pop("_name", "rfclog")
    return event_dict


# =============================================================================
# Configuration Logic
# =============================================================================


def configure_diagnostics(
    *,
    level: DiagnosticsLevel | str = DiagnosticsLevel.WARNING,
    fmt: DiagnosticsFormat | str = DiagnosticsFormat.CONSOLE,
    stream: TextIO | None = None,
) -> None:
    """
    Configure the diagnostics pipeline.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: "console" (human readable) or "json"
        stream: Output stream (default: stderr)
    """
    level_name = DiagnosticsLevel(str(getattr(level, "value", level)).upper()).value
    log_format = DiagnosticsFormat(getattr(fmt, "value", fmt))

    if log_format is DiagnosticsFormat.JSON:
        renderer: Any = structlog.processors.JSONRenderer(serializer=orjson_dumps)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    _pipeline.update(
        processors=[
            structlog.stdlib.add_log_level,
            add_timestamp,
            add_logger_name,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level_name)),
        stream=stream,
    )


def configure_from_settings(diagnostics: DiagnosticsSettings) -> None:
    configure_diagnostics(level=diagnostics.level, fmt=diagnostics.format)
