"""
Windows Event Log adapter.

Thin wrapper over pywin32 (``win32evtlog``, ``win32evtlogutil``,
``win32com.shell``) and the stdlib ``winreg`` module. Imports are resolved
lazily so the rest of rfclog stays importable on hosts without an Event Log;
any call made there raises ``EventLogUnavailable``.
"""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Sequence

from .exceptions import EventLogUnavailable
from .types import EntryType

EVENTLOG_REGISTRY_ROOT = r"SYSTEM\CurrentControlSet\Services\EventLog"


def _import(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except ImportError as exc:
        raise EventLogUnavailable(reason=f"{name} is not importable on this host ({exc})") from exc


def _event_type(entry_type: EntryType) -> int:
    win32evtlog = _import("win32evtlog")
    return {
        EntryType.ERROR: win32evtlog.EVENTLOG_ERROR_TYPE,
        EntryType.WARNING: win32evtlog.EVENTLOG_WARNING_TYPE,
        EntryType.INFORMATION: win32evtlog.EVENTLOG_INFORMATION_TYPE,
        EntryType.SUCCESS_AUDIT: win32evtlog.EVENTLOG_AUDIT_SUCCESS,
        EntryType.FAILURE_AUDIT: win32evtlog.EVENTLOG_AUDIT_FAILURE,
    }[EntryType(entry_type)]


def source_exists(source: str) -> bool:
    """True when ``source`` is registered under any event log."""
    winreg = _import("winreg")
    with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, EVENTLOG_REGISTRY_ROOT) as root:
        index = 0
        while True:
            try:
                log_name = winreg.EnumKey(root, index)
            except OSError:
                return False
            try:
                with winreg.OpenKey(root, rf"{log_name}\{source}"):
                    return True
            except OSError:
                index += 1


def report_event(source: str, event_id: int, entry_type: EntryType, strings: Sequence[str]) -> None:
    win32evtlogutil = _import("win32evtlogutil")
    win32evtlogutil.ReportEvent(
        source,
        event_id,
        eventCategory=0,
        eventType=_event_type(entry_type),
        strings=list(strings),
    )


def add_source(source: str, log_name: str = "Application") -> None:
    win32evtlogutil = _import("win32evtlogutil")
    win32evtlogutil.AddSourceToRegistry(source, eventLogType=log_name)


def is_elevated() -> bool:
    shell = _import("win32com.shell.shell")
    return bool(shell.IsUserAnAdmin())
