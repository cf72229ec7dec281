"""Consistent, trace-id based sampling with rate propagation."""

from traceratio.sampling.decision import (
    TRACE_ID_BITS,
    TRACE_ID_LIMIT,
    decide,
    get_bound_for_rate,
    low_order_bits,
    make_decision,
)
from traceratio.sampling.reconcile import RateReconciliation, reconcile_rate
from traceratio.sampling.sampler import (
    SAMPLE_RATE_KEY,
    ConsistentRateSampler,
    validate_probability,
)
from traceratio.sampling.tracestate import (
    TRACESTATE_KEY,
    format_rate,
    read_rate,
    write_rate,
)

__all__ = [
    "TRACE_ID_BITS",
    "TRACE_ID_LIMIT",
    "decide",
    "get_bound_for_rate",
    "low_order_bits",
    "make_decision",
    "RateReconciliation",
    "reconcile_rate",
    "SAMPLE_RATE_KEY",
    "ConsistentRateSampler",
    "validate_probability",
    "TRACESTATE_KEY",
    "format_rate",
    "read_rate",
    "write_rate",
]
