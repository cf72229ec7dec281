"""traceratio: consistent trace-id ratio sampling for OpenTelemetry.

Traces are sampled by their trace id at a rate that the first service
writes into the W3C trace state and every downstream service reuses.

Quick start::

    import traceratio

    traceratio.init(sample_rate=0.1, service_name="checkout")
    tracer = traceratio.get_tracer(__name__)
    with tracer.start_as_current_span("handle-request"):
        ...
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

from opentelemetry import trace as otel_trace_api

from traceratio import config
from traceratio.errors import ConfigurationError, TraceRatioError, ValidationError
from traceratio.exporter import create_console_processor, create_otlp_processor
from traceratio.processors import LoggingSpanProcessor
from traceratio.sampling import SAMPLE_RATE_KEY, TRACESTATE_KEY, ConsistentRateSampler
from traceratio.tracer import TracerProvider

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

_provider: Optional[TracerProvider] = None
_lock = threading.Lock()


def _build_overrides(
    sample_rate: Optional[float],
    service_name: Optional[str],
    enable_console_exporter: Optional[bool],
) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if sample_rate is not None:
        overrides.setdefault("tracing", {})["sample_rate"] = sample_rate
    if service_name is not None:
        overrides.setdefault("tracing", {})["service_name"] = service_name
    if enable_console_exporter is not None:
        overrides.setdefault("exporters", {})["enable_console"] = enable_console_exporter
    return overrides


def init(
    sample_rate: Optional[float] = None,
    config_file: Optional[str] = None,
    service_name: Optional[str] = None,
    enable_console_exporter: Optional[bool] = None,
    set_global: bool = False,
) -> TracerProvider:
    """
    Initialize tracing with a ConsistentRateSampler.

    Explicit arguments override environment variables, which override the
    config file. Calling init() again returns the existing provider.

    Args:
        sample_rate: Probability for traces that start in this process
        config_file: Path to a TOML config file
        service_name: service.name resource attribute
        enable_console_exporter: Print sampled spans to stdout
        set_global: Also install the provider as OpenTelemetry's global provider

    Returns:
        The active TracerProvider

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    global _provider
    with _lock:
        if _provider is not None:
            logger.warning("traceratio.init() called more than once; returning the existing provider")
            return _provider

        cfg = config.load_config(
            config_file=config_file,
            overrides=_build_overrides(sample_rate, service_name, enable_console_exporter),
        )
        if cfg.logging.debug:
            logging.getLogger("traceratio").setLevel(logging.DEBUG)

        resource = {}
        if cfg.tracing.service_name:
            resource["service.name"] = cfg.tracing.service_name

        provider = TracerProvider(sample_rate=cfg.tracing.sample_rate, resource=resource)
        if cfg.logging.enable_span_logging:
            provider.add_span_processor(LoggingSpanProcessor())
        if cfg.exporters.enable_console:
            provider.add_span_processor(create_console_processor())
        if cfg.tracing.use_otlp:
            provider.add_span_processor(
                create_otlp_processor(endpoint=cfg.tracing.endpoint, api_key=cfg.tracing.api_key)
            )

        if set_global:
            otel_trace_api.set_tracer_provider(provider._otel_tracer_provider)

        logger.info("Tracing initialized with %s", provider.sampler.get_description())
        _provider = provider
        return provider


def get_tracer_provider() -> Optional[TracerProvider]:
    """Get the active provider, or None before init()."""
    return _provider


def get_tracer(name: str = "traceratio") -> otel_trace_api.Tracer:
    """Get a tracer from the active provider, initializing with defaults if needed."""
    provider = _provider or init()
    return provider.get_tracer(name)


def stop_tracing() -> None:
    """Flush and shut down the active provider so init() can run again."""
    global _provider
    with _lock:
        provider, _provider = _provider, None
    if provider is not None:
        provider.force_flush()
        provider.shutdown()


__all__ = [
    "__version__",
    "init",
    "get_tracer",
    "get_tracer_provider",
    "stop_tracing",
    "ConsistentRateSampler",
    "TracerProvider",
    "LoggingSpanProcessor",
    "SAMPLE_RATE_KEY",
    "TRACESTATE_KEY",
    "TraceRatioError",
    "ConfigurationError",
    "ValidationError",
]
