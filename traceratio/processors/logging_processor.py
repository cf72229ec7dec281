"""Span processor that logs spans when they end."""

from __future__ import annotations

import logging
from typing import Optional

from opentelemetry.sdk.trace import ReadableSpan, SpanProcessor

from traceratio.sampling import SAMPLE_RATE_KEY, TRACESTATE_KEY
from traceratio.utils.helpers import format_span_id, format_trace_id, get_duration_ns


class LoggingSpanProcessor(SpanProcessor):
    """Logs span summary on end, including the rate it was sampled at."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger("traceratio.traces")

    def on_end(self, span: ReadableSpan) -> None:
        context = span.get_span_context()
        attrs = dict(span.attributes or {})
        self.logger.info(
            "[trace] name=%s trace_id=%s span_id=%s sampled=%s sample_rate=%s dd=%s duration_ns=%s",
            span.name,
            format_trace_id(context.trace_id),
            format_span_id(context.span_id),
            context.trace_flags.sampled,
            attrs.get(SAMPLE_RATE_KEY),
            context.trace_state.get(TRACESTATE_KEY),
            get_duration_ns(span),
        )

    def shutdown(self) -> None:
        return None

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return True
