"""Read and write the sampling rate carried in the W3C trace state.

The rate lives under a single vendor key (``dd``). Values written by other
vendors may pack several ``|``-separated sub-fields under that key; those are
never read back as a bare rate.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from opentelemetry.trace import TraceState

TRACESTATE_KEY = "dd"
COMPOUND_DELIMITER = "|"

# Plain decimal literal: optional sign, digits with optional fraction, optional exponent.
_NUMERIC_LITERAL_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def format_rate(rate: float) -> str:
    """Canonical string form of a rate, e.g. ``0.37`` or ``1e-05``."""
    return repr(float(rate))


def read_rate(trace_state: Optional[TraceState], key: str = TRACESTATE_KEY) -> Optional[float]:
    """
    Read a previously chosen sampling rate from a trace state.

    Args:
        trace_state: Incoming trace state, may be None
        key: Trace state key holding the rate

    Returns:
        The parsed rate, or None if the entry is absent, empty, compound,
        or not a numeric literal
    """
    if not trace_state:
        return None

    value = trace_state.get(key)
    if not value or COMPOUND_DELIMITER in value:
        return None
    if not _NUMERIC_LITERAL_RE.match(value):
        return None

    rate = float(value)
    # Exponents can still overflow to inf
    if not math.isfinite(rate):
        return None
    return rate


def write_rate(
    trace_state: Optional[TraceState],
    rate: float,
    key: str = TRACESTATE_KEY,
) -> TraceState:
    """
    Return a new trace state carrying ``rate`` under ``key``.

    The input is left untouched. An existing entry is updated and moved to
    the front, a missing one is prepended, as W3C requires for the entry
    most recently written by this vendor.

    Args:
        trace_state: Trace state to copy, None is treated as empty
        rate: Sampling rate to record
        key: Trace state key holding the rate

    Returns:
        The updated trace state
    """
    if trace_state is None:
        trace_state = TraceState()

    value = format_rate(rate)
    if key in trace_state:
        return trace_state.update(key, value)
    return trace_state.add(key, value)
