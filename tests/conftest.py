from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone
from typing import List, Tuple

import pytest

from rfclog.config import LoggerSettings
from rfclog.diagnostics import configure_diagnostics
from rfclog.exceptions import SinkWriteError
from rfclog.formatters import SyslogFormatter
from rfclog.sinks import BaseSink
from rfclog.types import LogRecord

FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone(timedelta(hours=2)))


class RecordingSink(BaseSink):
    """Keeps every emitted line in memory."""

    name = "recording"

    def __init__(self) -> None:
        self.emitted: List[Tuple[str, LogRecord]] = []

    @property
    def lines(self) -> List[str]:
        return [line for line, _ in self.emitted]

    def emit(self, line: str, record: LogRecord) -> None:
        self.emitted.append((line, record))


class FailingSink(BaseSink):
    """Raises SinkWriteError on every write."""

    def __init__(self, name: str = "failing") -> None:
        self.name = name
        self.attempts = 0

    def emit(self, line: str, record: LogRecord) -> None:
        self.attempts += 1
        raise SinkWriteError(sink=self.name, target="nowhere", reason="forced failure")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep RFCLOG_* variables and any .env file out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("RFCLOG_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    configure_diagnostics(stream=io.StringIO())
    yield
    configure_diagnostics()


@pytest.fixture
def formatter() -> SyslogFormatter:
    return SyslogFormatter(hostname="host01", clock=lambda: FIXED_NOW)


@pytest.fixture
def settings_factory(tmp_path):
    def _make(**overrides) -> LoggerSettings:
        values = {"log_file": str(tmp_path / "logs" / "app.log"), "hostname": "host01"}
        values.update(overrides)
        return LoggerSettings(**values)

    return _make


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def console_stream() -> io.StringIO:
    return io.StringIO()
