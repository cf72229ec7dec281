"""Console export for developer visibility."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor


def create_console_processor(stream: Optional[TextIO] = None) -> SimpleSpanProcessor:
    """Processor that prints each sampled span to stdout (or provided stream)."""
    return SimpleSpanProcessor(ConsoleSpanExporter(out=stream or sys.stdout))
