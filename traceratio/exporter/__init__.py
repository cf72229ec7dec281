"""Span processors for delivering sampled spans to backends."""

from traceratio.exporter.console_exporter import create_console_processor
from traceratio.exporter.otlp_exporter import create_otlp_processor

__all__ = ["create_console_processor", "create_otlp_processor"]
