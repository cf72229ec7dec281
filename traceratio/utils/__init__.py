"""Utility functions for traceratio."""

from traceratio.utils.helpers import (
    get_duration_ns,
    format_trace_id,
    format_span_id,
    parse_trace_id,
)

__all__ = [
    "get_duration_ns",
    "format_trace_id",
    "format_span_id",
    "parse_trace_id",
]
