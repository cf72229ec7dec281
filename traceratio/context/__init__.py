"""Context propagation utilities for traceratio."""

from traceratio.context.propagators import (
    extract,
    extract_sample_rate,
    extract_tracestate,
    format_tracestate,
    inject,
    parse_tracestate,
)

__all__ = [
    "inject",
    "extract",
    "parse_tracestate",
    "format_tracestate",
    "extract_tracestate",
    "extract_sample_rate",
]
