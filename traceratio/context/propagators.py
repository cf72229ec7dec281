"""W3C trace context propagation using OpenTelemetry's standard propagator."""

from __future__ import annotations

from typing import Dict, Optional

from opentelemetry.context import Context
from opentelemetry.trace import TraceState
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from traceratio.sampling.tracestate import TRACESTATE_KEY, read_rate

# Use OTel's W3C Trace Context propagator
_propagator = TraceContextTextMapPropagator()


def inject(carrier: Dict[str, str], context: Optional[Context] = None) -> None:
    """
    Inject traceparent and tracestate headers into carrier.

    If context is not provided, uses current context.
    """
    _propagator.inject(carrier, context=context)


def extract(carrier: Dict[str, str]) -> Context:
    """
    Extract trace context from carrier.

    Returns OTel context that can be passed as ``context=`` to start_span().
    """
    return _propagator.extract(carrier)


def parse_tracestate(header_value: Optional[str]) -> TraceState:
    """
    Parse a tracestate header into an OTel TraceState.

    Invalid members are discarded by OTel; an empty header gives an empty state.
    """
    if not header_value:
        return TraceState()
    return TraceState.from_header([header_value])


def format_tracestate(trace_state: Optional[TraceState]) -> str:
    """Format a TraceState as a tracestate header value (W3C: key1=value1,key2=value2)."""
    if not trace_state:
        return ""
    return trace_state.to_header()


def extract_tracestate(headers: Dict[str, str]) -> Optional[str]:
    """
    Extract tracestate header value (case-insensitive).

    Returns the raw tracestate string.
    """
    for key, value in headers.items():
        if key.lower() == "tracestate":
            return value
    return None


def extract_sample_rate(headers: Dict[str, str], key: str = TRACESTATE_KEY) -> Optional[float]:
    """Sampling rate carried by incoming headers, or None if there is none usable."""
    return read_rate(parse_tracestate(extract_tracestate(headers)), key)
