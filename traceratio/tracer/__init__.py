"""Tracer provider components for traceratio."""

from traceratio.tracer.provider import TracerProvider

__all__ = [
    "TracerProvider",
]
