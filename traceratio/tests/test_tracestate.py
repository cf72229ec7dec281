"""Tests for reading and writing the sampling rate in the trace state."""

import pytest
from opentelemetry.trace import TraceState

from traceratio.sampling.tracestate import format_rate, read_rate, write_rate


class TestReadRate:
    """read_rate() only accepts a bare numeric value under the key."""

    def test_reads_bare_rate(self):
        assert read_rate(TraceState([("dd", "0.25")])) == 0.25

    def test_custom_key(self):
        state = TraceState([("dd", "0.9"), ("acme", "0.1")])
        assert read_rate(state, key="acme") == 0.1

    def test_none_trace_state(self):
        assert read_rate(None) is None

    def test_missing_key(self):
        assert read_rate(TraceState([("vendor", "abc")])) is None

    def test_empty_value(self):
        # OTel refuses empty values, any mapping works here
        assert read_rate({"dd": ""}) is None

    @pytest.mark.parametrize(
        "value",
        ["abc", "1.0|other", "s:1|o:rum", "nan", "inf", "-inf", "1e999", "1_0", "0x1", "0.5.1"],
    )
    def test_malformed_values_are_absent(self, value):
        assert read_rate(TraceState([("dd", value)])) is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("1", 1.0),
            ("0", 0.0),
            ("+0.5", 0.5),
            (".5", 0.5),
            ("5.", 5.0),
            ("1e-05", 1e-05),
            ("2.5E-1", 0.25),
        ],
    )
    def test_numeric_literals(self, value, expected):
        assert read_rate(TraceState([("dd", value)])) == expected


class TestWriteRate:
    """write_rate() copies the trace state."""

    def test_adds_key_in_front(self):
        original = TraceState([("vendor", "x")])
        updated = write_rate(original, 0.37)

        assert updated.get("dd") == "0.37"
        assert updated.to_header() == "dd=0.37,vendor=x"
        # Original is untouched
        assert "dd" not in original
        assert original.to_header() == "vendor=x"

    def test_updates_existing_key(self):
        original = TraceState([("a", "1"), ("dd", "0.9")])
        updated = write_rate(original, 0.5)

        assert updated.to_header() == "dd=0.5,a=1"
        assert original.get("dd") == "0.9"

    def test_none_is_empty(self):
        assert write_rate(None, 1.0).to_header() == "dd=1.0"

    def test_custom_key(self):
        assert write_rate(TraceState(), 0.1, key="acme").get("acme") == "0.1"

    def test_round_trip(self):
        assert read_rate(write_rate(TraceState(), 0.123456789)) == 0.123456789


def test_format_rate_is_canonical():
    assert format_rate(0.37) == "0.37"
    assert format_rate(1) == "1.0"
    assert format_rate(0.0) == "0.0"
    assert format_rate(1e-05) == "1e-05"
