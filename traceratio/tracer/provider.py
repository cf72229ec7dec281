"""TracerProvider wiring ConsistentRateSampler into the OpenTelemetry SDK."""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional

from opentelemetry.sdk.resources import Resource as OTelResource
from opentelemetry.sdk.trace import SpanProcessor as OTelSpanProcessor
from opentelemetry.sdk.trace import TracerProvider as OTelTracerProvider
from opentelemetry.trace import Tracer as OTelTracer

from traceratio.sampling import ConsistentRateSampler

logger = logging.getLogger(__name__)


class TracerProvider:
    """
    TracerProvider using OpenTelemetry SDK.

    OTel samplers are fixed at provider creation time, so the sampler is
    built here from the configured rate and never swapped afterwards.
    """

    def __init__(
        self,
        sample_rate: float = 1.0,
        resource: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize TracerProvider with OpenTelemetry.

        Args:
            sample_rate: Probability used for traces that start here
            resource: Resource attributes dictionary (converted to OTel Resource)

        Raises:
            ConfigurationError: If sample_rate is outside [0.0, 1.0]
        """
        self._sampler = ConsistentRateSampler(sample_rate)
        self.resource = resource or {}
        self._otel_provider = OTelTracerProvider(
            sampler=self._sampler,
            resource=OTelResource.create(self.resource),
        )

        self._tracers: Dict[str, OTelTracer] = {}
        self._lock = threading.Lock()

    @property
    def sampler(self) -> ConsistentRateSampler:
        return self._sampler

    def get_tracer(self, name: str) -> OTelTracer:
        """
        Get a tracer by name.

        Args:
            name: Instrumentation scope name

        Returns:
            OpenTelemetry Tracer whose spans go through this provider's sampler
        """
        with self._lock:
            tracer = self._tracers.get(name)
            if tracer is None:
                tracer = self._otel_provider.get_tracer(name)
                self._tracers[name] = tracer
            return tracer

    def add_span_processor(self, processor: OTelSpanProcessor) -> None:
        self._otel_provider.add_span_processor(processor)

    def force_flush(self, timeout: Optional[float] = None) -> bool:
        """Force flush all processors."""
        timeout_millis = int(timeout * 1000) if timeout is not None else 30000
        return self._otel_provider.force_flush(timeout_millis=timeout_millis)

    def shutdown(self) -> None:
        """Shutdown the provider and all processors."""
        logger.debug("Shutting down tracer provider (%s)", self._sampler.get_description())
        self._otel_provider.shutdown()

    @property
    def _otel_tracer_provider(self) -> OTelTracerProvider:
        """Get the underlying OpenTelemetry TracerProvider."""
        return self._otel_provider
