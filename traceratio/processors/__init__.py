"""Span processors."""

from traceratio.processors.logging_processor import LoggingSpanProcessor

__all__ = [
    "LoggingSpanProcessor",
]
