"""Deterministic trace-id threshold test.

The low-order 60 bits of the trace id are the randomness source. Every
service sees the same trace id, so for a given rate they all reach the same
decision without talking to each other. 60 bits (rather than 64) keeps
decisions identical to samplers running on runtimes that only have signed
63-bit integers; changing the width changes decisions observed downstream.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Union

from opentelemetry.sdk.trace.sampling import Decision

from traceratio.errors import ValidationError
from traceratio.utils.helpers import parse_trace_id

TRACE_ID_BITS = 60
TRACE_ID_LIMIT = (1 << TRACE_ID_BITS) - 1
# Hex digits covering the low-order bits of a string trace id
TRACE_ID_HEX_DIGITS = TRACE_ID_BITS // 4

TraceId = Union[int, str]


def low_order_bits(trace_id: TraceId) -> int:
    """
    Extract the low-order 60 bits of a trace id.

    Args:
        trace_id: OTel int trace id, or a hex string of up to 32 digits.
            Strings shorter than 15 digits are treated as zero-padded.

    Returns:
        Unsigned integer in [0, TRACE_ID_LIMIT]

    Raises:
        ValidationError: If the trace id is negative or not valid hex
    """
    if isinstance(trace_id, str):
        trace_id = parse_trace_id(trace_id)
    elif isinstance(trace_id, bool) or not isinstance(trace_id, int):
        raise ValidationError(
            "trace id must be an int or a hex string",
            details={"type": type(trace_id).__name__},
        )
    if trace_id < 0:
        raise ValidationError("trace id must not be negative", details={"trace_id": trace_id})
    return trace_id & TRACE_ID_LIMIT


def get_bound_for_rate(rate: float) -> int:
    """
    Threshold below which a trace is sampled: ``round(rate * TRACE_ID_LIMIT)``.

    The product is computed exactly, halves rounded away from zero, so that
    rate 1.0 yields exactly TRACE_ID_LIMIT and the bound never decreases as
    the rate grows.
    """
    return math.floor(Fraction(rate) * TRACE_ID_LIMIT + Fraction(1, 2))


def is_sampled(trace_id: TraceId, bound: int) -> bool:
    return low_order_bits(trace_id) < bound


def decide(trace_id: TraceId, bound: int) -> Decision:
    """Decision for a trace id against a precomputed threshold."""
    if is_sampled(trace_id, bound):
        return Decision.RECORD_AND_SAMPLE
    return Decision.DROP


def make_decision(trace_id: TraceId, rate: float) -> Decision:
    """
    Decide whether a trace is sampled at ``rate``.

    Args:
        trace_id: Trace id as int or hex string
        rate: Effective sampling probability in [0.0, 1.0]

    Returns:
        Decision.RECORD_AND_SAMPLE if the low-order bits fall under the
        threshold, Decision.DROP otherwise
    """
    return decide(trace_id, get_bound_for_rate(rate))
