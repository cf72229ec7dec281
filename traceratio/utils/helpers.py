"""Helper functions for OpenTelemetry id and timing conversions."""

from __future__ import annotations

import re
from typing import Optional

from opentelemetry.sdk.trace import ReadableSpan

from traceratio.errors import ValidationError

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")

# W3C trace ids are 128 bits
MAX_TRACE_ID_HEX_DIGITS = 32


def get_duration_ns(span: ReadableSpan) -> Optional[int]:
    """
    Get span duration in nanoseconds.

    Args:
        span: Ended OpenTelemetry span

    Returns:
        Duration in nanoseconds, or None if span hasn't ended
    """
    if span.end_time is None or span.start_time is None:
        return None
    return span.end_time - span.start_time


def format_trace_id(trace_id: int) -> str:
    """
    Format OTel trace_id (int) to hex string.

    Args:
        trace_id: OTel trace_id as int

    Returns:
        32-character hex string
    """
    return format(trace_id, '032x')


def format_span_id(span_id: int) -> str:
    """
    Format OTel span_id (int) to hex string.

    Args:
        span_id: OTel span_id as int

    Returns:
        16-character hex string
    """
    return format(span_id, '016x')


def parse_trace_id(hex_string: str) -> int:
    """
    Parse hex string trace_id to OTel int.

    Shorter strings are read as if zero-padded on the left, so "1" and
    "00000000000000000000000000000001" name the same trace.

    Args:
        hex_string: Up to 32 hex digits, no prefix

    Returns:
        OTel trace_id as int

    Raises:
        ValidationError: If the string is empty, not hex, or longer than 32 digits
    """
    if not hex_string or not _HEX_RE.match(hex_string):
        raise ValidationError(
            "trace id must be a non-empty hexadecimal string",
            details={"trace_id": hex_string},
        )
    if len(hex_string) > MAX_TRACE_ID_HEX_DIGITS:
        raise ValidationError(
            f"trace id must have at most {MAX_TRACE_ID_HEX_DIGITS} hex digits",
            details={"trace_id": hex_string},
        )
    return int(hex_string, 16)
