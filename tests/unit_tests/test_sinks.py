"""
File, Event Log and console sinks.
"""

from __future__ import annotations

import io
import sys
import threading

import pytest

from rfclog import eventlog
from rfclog.exceptions import EventLogUnavailable, EventSourceNotFound, SinkWriteError
from rfclog.sinks import ConsoleSink, EventLogSink, FileSink
from rfclog.types import EntryType, LogRecord, Severity


def _record(**overrides) -> LogRecord:
    values = {"message": "m", "severity": Severity.ERROR, "tag": "t"}
    values.update(overrides)
    return LogRecord(**values)


class TestFileSink:
    def test_appends_newline_terminated_lines(self, tmp_path) -> None:
        path = tmp_path / "nested" / "app.log"
        sink = FileSink(path)
        sink.emit("first", _record())
        sink.emit("second", _record())
        assert path.read_text(encoding="utf-8") == "first\nsecond\n"

    def test_never_truncates_existing_content(self, tmp_path) -> None:
        path = tmp_path / "app.log"
        path.write_text("existing\n", encoding="utf-8")
        FileSink(path).emit("new", _record())
        assert path.read_text(encoding="utf-8") == "existing\nnew\n"

    def test_writes_utf8(self, tmp_path) -> None:
        path = tmp_path / "app.log"
        FileSink(path).emit("Größe überschritten ✓ 磁盘已满", _record())
        assert path.read_bytes().decode("utf-8") == "Größe überschritten ✓ 磁盘已满\n"

    def test_os_errors_become_sink_write_errors(self, tmp_path) -> None:
        with pytest.raises(SinkWriteError) as exc_info:
            FileSink(tmp_path).emit("m", _record())
        assert exc_info.value.sink == "file"
        assert exc_info.value.code == "SINK_WRITE_FAILED"

    def test_unencodable_text_becomes_sink_write_error(self, tmp_path) -> None:
        with pytest.raises(SinkWriteError) as exc_info:
            FileSink(tmp_path / "app.log").emit("bad \udcff name", _record())
        assert exc_info.value.sink == "file"

    def test_concurrent_appends_do_not_interleave(self, tmp_path) -> None:
        path = tmp_path / "app.log"
        line = "x" * 2000

        def writer() -> None:
            sink = FileSink(path)
            for _ in range(25):
                sink.emit(line, _record())

        threads = [threading.Thread(target=writer) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 100
        assert all(entry == line for entry in lines)


class TestEventLogSink:
    @pytest.fixture
    def reported(self, monkeypatch):
        calls = []
        monkeypatch.setattr(eventlog, "source_exists", lambda source: source in {"rfclog", "other"})
        monkeypatch.setattr(
            eventlog,
            "report_event",
            lambda source, event_id, entry_type, strings: calls.append((source, event_id, entry_type, list(strings))),
        )
        return calls

    def test_reports_line_with_event_id_and_entry_type(self, reported) -> None:
        sink = EventLogSink("rfclog")
        sink.emit("<131>line", _record(event_id=1234, entry_type=EntryType.ERROR))
        assert reported == [("rfclog", 1234, EntryType.ERROR, ["<131>line"])]

    def test_record_source_overrides_default(self, reported) -> None:
        EventLogSink("rfclog").emit("line", _record(source="other"))
        assert reported[0][0] == "other"

    def test_unregistered_source_is_not_created(self, reported, monkeypatch) -> None:
        created = []
        monkeypatch.setattr(eventlog, "add_source", lambda *args: created.append(args))
        with pytest.raises(EventSourceNotFound) as exc_info:
            EventLogSink("missing", "Application").emit("line", _record())
        assert exc_info.value.code == "EVENT_SOURCE_NOT_FOUND"
        assert exc_info.value.details["log_name"] == "Application"
        assert reported == [] and created == []

    def test_api_failures_are_wrapped(self, monkeypatch) -> None:
        def boom(*args):
            raise RuntimeError("access denied")

        monkeypatch.setattr(eventlog, "source_exists", lambda source: True)
        monkeypatch.setattr(eventlog, "report_event", boom)
        with pytest.raises(SinkWriteError, match="access denied") as exc_info:
            EventLogSink("rfclog").emit("line", _record())
        assert exc_info.value.sink == "eventlog"

    def test_registry_lookup_failures_are_wrapped(self, monkeypatch) -> None:
        def denied(source):
            raise OSError(5, "Access is denied")

        monkeypatch.setattr(eventlog, "source_exists", denied)
        with pytest.raises(SinkWriteError, match="Access is denied") as exc_info:
            EventLogSink("rfclog").emit("line", _record())
        assert exc_info.value.sink == "eventlog"
        assert exc_info.value.target == "rfclog"

    @pytest.mark.skipif(sys.platform == "win32", reason="Event Log exists on Windows")
    def test_unavailable_off_windows(self) -> None:
        with pytest.raises(EventLogUnavailable):
            EventLogSink("rfclog").emit("line", _record())


class TestConsoleSink:
    def test_plain_output_on_non_tty(self) -> None:
        stream = io.StringIO()
        ConsoleSink(stream).emit("<131>line", _record())
        assert stream.getvalue() == "<131>line\n"

    def test_forced_colour(self) -> None:
        stream = io.StringIO()
        ConsoleSink(stream, color=True).emit("<131>line", _record())
        assert stream.getvalue() == "\x1b[31m<131>line\x1b[0m\n"

    def test_defaults_to_stderr(self, capsys) -> None:
        ConsoleSink().emit("<131>line", _record())
        assert capsys.readouterr().err == "<131>line\n"

    def test_no_console_writes_nothing(self, monkeypatch) -> None:
        monkeypatch.setattr(sys, "stderr", None)
        ConsoleSink().emit("<131>line", _record())
