"""
Severity model, variants and LogRecord construction.
"""

from __future__ import annotations

import pytest

from rfclog.exceptions import InvalidFacility, InvalidSeverity
from rfclog.types import (
    EntryType,
    Facility,
    LogRecord,
    LogTarget,
    Severity,
    normalize_structured_data,
)


class TestSeverity:
    def test_values_are_fixed(self) -> None:
        """Codes run from EMERGENCY=0 to DEBUG=7"""
        assert [s.value for s in Severity] == list(range(8))
        assert Severity.EMERGENCY == 0
        assert Severity.ERROR == 3
        assert Severity.DEBUG == 7

    def test_lower_code_is_more_severe(self) -> None:
        assert Severity.EMERGENCY < Severity.ERROR < Severity.DEBUG

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (3, Severity.ERROR),
            ("3", Severity.ERROR),
            ("error", Severity.ERROR),
            ("ERROR", Severity.ERROR),
            ("err", Severity.ERROR),
            ("warn", Severity.WARNING),
            ("info", Severity.INFORMATIONAL),
            (Severity.NOTICE, Severity.NOTICE),
        ],
    )
    def test_parse_accepts_codes_and_names(self, raw, expected) -> None:
        assert Severity.parse(raw) is expected

    @pytest.mark.parametrize("raw", [8, -1, "verbose", True, 3.0, None])
    def test_parse_rejects_unknown_values(self, raw) -> None:
        with pytest.raises(InvalidSeverity):
            Severity.parse(raw)


class TestLogTarget:
    def test_fan_out_sets(self) -> None:
        assert LogTarget.FLAT_FILE.includes_file and not LogTarget.FLAT_FILE.includes_event_log
        assert LogTarget.EVENT_VIEWER.includes_event_log and not LogTarget.EVENT_VIEWER.includes_file
        assert LogTarget.BOTH.includes_file and LogTarget.BOTH.includes_event_log

    def test_values_match_configuration_strings(self) -> None:
        assert LogTarget("FlatFile") is LogTarget.FLAT_FILE
        assert LogTarget("EventViewer") is LogTarget.EVENT_VIEWER
        assert LogTarget("Both") is LogTarget.BOTH


class TestStructuredDataNormalisation:
    def test_none_becomes_nil_element(self) -> None:
        assert normalize_structured_data(None) == ("-",)

    def test_empty_sequence_becomes_nil_element(self) -> None:
        assert normalize_structured_data([]) == ("-",)

    def test_single_string_is_one_element(self) -> None:
        """A lone string must not be split into characters"""
        assert normalize_structured_data("a='1'") == ("a='1'",)

    def test_order_is_preserved(self) -> None:
        assert normalize_structured_data(["b", "a", "c"]) == ("b", "a", "c")


class TestLogRecord:
    @pytest.mark.parametrize("facility", range(24))
    @pytest.mark.parametrize("severity", list(Severity))
    def test_priority_is_facility_times_eight_plus_severity(self, facility, severity) -> None:
        record = LogRecord(message="m", severity=severity, facility=facility)
        assert record.priority == facility * 8 + severity.value

    def test_defaults(self) -> None:
        record = LogRecord(message="m", severity=Severity.INFORMATIONAL)
        assert record.facility == 16
        assert record.structured_data == ("-",)
        assert record.proc_id == "-"
        assert record.msg_id == "-"
        assert record.event_id == 999
        assert record.entry_type is EntryType.INFORMATION

    def test_accepts_facility_enum_and_entry_type_string(self) -> None:
        record = LogRecord(message="m", severity=1, facility=Facility.MAIL, entry_type="Warning")
        assert record.priority == 17
        assert record.entry_type is EntryType.WARNING

    @pytest.mark.parametrize("facility", [-1, 24, "16", None])
    def test_invalid_facility_raises(self, facility) -> None:
        with pytest.raises(InvalidFacility) as exc_info:
            LogRecord(message="m", severity=Severity.DEBUG, facility=facility)
        assert exc_info.value.code == "INVALID_FACILITY"

    def test_record_is_immutable(self) -> None:
        record = LogRecord(message="m", severity=Severity.DEBUG)
        with pytest.raises(AttributeError):
            record.message = "changed"  # type: ignore[misc]
