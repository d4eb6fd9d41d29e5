"""
Event-source registration.

A privileged, one-time administrative step that is kept apart from the logging
path: ``SyslogLogger`` never registers sources on its own. Each failure kind
maps to its own process exit code so provisioning scripts can tell them apart.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from . import eventlog
from .diagnostics import get_logger
from .exceptions import (
    EventLogUnavailable,
    NotElevatedError,
    RegistrationError,
    RegistrationFailed,
    SourceAlreadyRegistered,
)

EXIT_OK = 0
EXIT_UNAVAILABLE = 1


def register_event_source(source: str, log_name: str = "Application") -> None:
    """
    Register ``source`` under ``log_name``.

    Raises:
        NotElevatedError: caller is not an administrator; nothing is created
        SourceAlreadyRegistered: ``source`` exists under any log
        RegistrationFailed: registry lookup or registration call failed
        EventLogUnavailable: no Windows Event Log on this host
    """
    if not eventlog.is_elevated():
        raise NotElevatedError(source=source)
    try:
        exists = eventlog.source_exists(source)
        if not exists:
            eventlog.add_source(source, log_name)
    except EventLogUnavailable:
        raise
    except Exception as exc:
        # OSError from winreg, pywintypes.error from pywin32
        raise RegistrationFailed(source=source, reason=str(exc)) from exc
    if exists:
        raise SourceAlreadyRegistered(source=source)
    get_logger(__name__).info("event source registered", source=source, log_name=log_name)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rfclog-register-source",
        description="Register a Windows Event Log source for rfclog (requires administrator rights).",
    )
    parser.add_argument("source", help="Event source name")
    parser.add_argument("--log-name", default="Application", help="Event log to register under (default: Application)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        register_event_source(args.source, args.log_name)
    except RegistrationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    except EventLogUnavailable as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_UNAVAILABLE
    print(f"Registered event source '{args.source}' in log '{args.log_name}'.")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
