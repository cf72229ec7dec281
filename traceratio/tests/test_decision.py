"""Tests for the trace-id threshold decision."""

import pytest
from opentelemetry.sdk.trace.sampling import Decision

from traceratio.errors import ValidationError
from traceratio.sampling.decision import (
    TRACE_ID_LIMIT,
    decide,
    get_bound_for_rate,
    low_order_bits,
    make_decision,
)

# 17 high hex digits that must never influence the decision
HIGH_DIGITS = "4bf92f3577b34da6a"
LOW_ONE = HIGH_DIGITS + "000000000000001"
LOW_MAX = HIGH_DIGITS + "f" * 15

SAMPLE_TRACE_IDS = [
    0,
    1,
    0x0AF7651916CD43DD8448EB211C80319C,
    0x4BF92F3577B34DA6A3CE929D0E0E4736,
    0xFFFFFFFFFFFFFFFF0000000000000000,
    (1 << 59),
    (1 << 60) - 2,
    (1 << 128) - 2,
]


class TestLowOrderBits:
    def test_int_is_masked_to_60_bits(self):
        assert low_order_bits((0xABC << 60) | 5) == 5
        assert TRACE_ID_LIMIT == 1152921504606846975

    def test_hex_string_uses_last_15_digits(self):
        assert low_order_bits(LOW_ONE) == 1
        assert low_order_bits(LOW_MAX) == TRACE_ID_LIMIT

    def test_string_and_int_agree(self):
        for trace_id in SAMPLE_TRACE_IDS:
            assert low_order_bits(format(trace_id, "032x")) == low_order_bits(trace_id)

    def test_short_string_is_zero_padded(self):
        assert low_order_bits("1") == 1
        assert low_order_bits("ff") == 255
        assert low_order_bits("ff") == low_order_bits("0" * 30 + "ff")

    @pytest.mark.parametrize("trace_id", ["", "xyz", "0x1f", " 1f", "1" * 33, -1, 1.5, None, True])
    def test_invalid_trace_ids(self, trace_id):
        with pytest.raises(ValidationError):
            low_order_bits(trace_id)


class TestBound:
    def test_boundaries(self):
        assert get_bound_for_rate(0.0) == 0
        assert get_bound_for_rate(1.0) == TRACE_ID_LIMIT

    def test_half(self):
        assert get_bound_for_rate(0.5) == 576460752303423488

    def test_monotonic(self):
        rates = [0.0, 1e-12, 0.001, 0.1, 0.25, 0.3, 0.5, 0.75, 0.999999, 1.0]
        bounds = [get_bound_for_rate(r) for r in rates]
        assert bounds == sorted(bounds)


class TestMakeDecision:
    def test_scenario_low_one_sampled(self):
        assert make_decision(LOW_ONE, 0.5) == Decision.RECORD_AND_SAMPLE

    def test_scenario_low_max_dropped(self):
        assert make_decision(LOW_MAX, 0.5) == Decision.DROP

    def test_zero_rate_always_drops(self):
        for trace_id in SAMPLE_TRACE_IDS + [LOW_ONE, LOW_MAX]:
            assert make_decision(trace_id, 0.0) == Decision.DROP

    def test_full_rate_samples_all_but_max(self):
        for trace_id in SAMPLE_TRACE_IDS + [LOW_ONE]:
            assert make_decision(trace_id, 1.0) == Decision.RECORD_AND_SAMPLE
        assert make_decision(LOW_MAX, 1.0) == Decision.DROP
        assert make_decision(TRACE_ID_LIMIT, 1.0) == Decision.DROP

    def test_deterministic(self):
        for trace_id in SAMPLE_TRACE_IDS:
            first = make_decision(trace_id, 0.3)
            for _ in range(10):
                assert make_decision(trace_id, 0.3) == first

    def test_nested_sample_sets(self):
        rates = [0.0, 0.05, 0.2, 0.5, 0.8, 1.0]
        trace_ids = SAMPLE_TRACE_IDS + [i * 0x0123456789ABCDE for i in range(64)]
        for trace_id in trace_ids:
            sampled = [make_decision(trace_id, r) == Decision.RECORD_AND_SAMPLE for r in rates]
            # Once sampled at some rate, sampled at every higher rate
            assert sampled == sorted(sampled)

    def test_threshold_edge(self):
        bound = get_bound_for_rate(0.25)
        assert make_decision(bound - 1, 0.25) == Decision.RECORD_AND_SAMPLE
        assert make_decision(bound, 0.25) == Decision.DROP

    def test_decide_uses_precomputed_bound(self):
        bound = get_bound_for_rate(0.25)
        assert decide(bound - 1, bound) == make_decision(bound - 1, 0.25)
        assert decide(bound, bound) == Decision.DROP
        assert decide(HIGH_DIGITS + "0" * 15, 0) == Decision.DROP
