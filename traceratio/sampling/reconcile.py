"""Reuse-or-mint reconciliation of the trace-wide sampling rate.

The first sampler to see a trace writes its rate into the trace state;
every descendant reads it back and samples at that rate instead of its own.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from opentelemetry.trace import TraceState

from traceratio.sampling.tracestate import TRACESTATE_KEY, read_rate, write_rate


class RateReconciliation(NamedTuple):
    """Effective rate for one sampling call and the trace state to hand on."""

    rate: float
    trace_state: TraceState
    inherited: bool


def reconcile_rate(
    trace_state: Optional[TraceState],
    configured_rate: float,
    key: str = TRACESTATE_KEY,
) -> RateReconciliation:
    """
    Pick the effective rate for a span.

    Args:
        trace_state: Parent trace state, None or empty for a root span
        configured_rate: This sampler's own probability
        key: Trace state key holding the rate

    Returns:
        The inherited rate with the trace state unchanged when the parent
        carries a usable rate, otherwise the configured rate with a copy of
        the trace state that records it
    """
    if trace_state is None:
        trace_state = TraceState()

    inherited = read_rate(trace_state, key)
    if inherited is not None and 0.0 <= inherited <= 1.0:
        return RateReconciliation(inherited, trace_state, True)

    return RateReconciliation(
        configured_rate,
        write_rate(trace_state, configured_rate, key),
        False,
    )
