"""traceratio error hierarchy and exceptions."""

from __future__ import annotations


class TraceRatioError(Exception):
    """Base exception for all traceratio errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(TraceRatioError, ValueError):
    """Raised when a sampler or SDK configuration value is invalid.

    Also a ``ValueError`` so callers written against OpenTelemetry's own
    ratio samplers keep catching it.
    """
    pass


class ValidationError(TraceRatioError, ValueError):
    """Raised when a trace id handed to the decision helpers is malformed."""
    pass
