"""
Bridge from the standard library ``logging`` module into rfclog.
"""

import logging
import os

from .dispatch import SyslogLogger
from .types import Severity

_LEVEL_TO_SEVERITY = (
    (logging.CRITICAL, Severity.CRITICAL),
    (logging.ERROR, Severity.ERROR),
    (logging.WARNING, Severity.WARNING),
    (logging.INFO, Severity.INFORMATIONAL),
)


def severity_for_level(levelno: int) -> Severity:
    """Map a stdlib level number onto the nearest syslog severity (custom levels round down)."""
    for threshold, severity in _LEVEL_TO_SEVERITY:
        if levelno >= threshold:
            return severity
    return Severity.DEBUG


class SyslogHandler(logging.Handler):
    """
    Forward stdlib log records to a SyslogLogger.

    The emitting function becomes the TAG/APP-NAME, the process id the PROCID
    and the logger name the MSGID. Sink failures are routed through
    ``Handler.handleError`` like any other handler failure.
    """

    def __init__(self, logger: SyslogLogger, level: int = logging.NOTSET):
        super().__init__(level)
        self.syslog = logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.syslog.log(
                self.format(record),
                severity=severity_for_level(record.levelno),
                proc_id=str(record.process or os.getpid()),
                msg_id=record.name,
                tag=record.funcName or record.module,
            )
        except Exception:
            self.handleError(record)
