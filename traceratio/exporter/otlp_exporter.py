"""OTLP export using the OpenTelemetry OTLP HTTP exporter."""

from __future__ import annotations

from typing import Dict, Optional

from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def create_otlp_processor(
    endpoint: Optional[str] = None,
    api_key: Optional[str] = None,
    timeout: float = 10.0,
    headers: Optional[Dict[str, str]] = None,
) -> BatchSpanProcessor:
    """
    Build a batching processor that ships sampled spans over OTLP HTTP.

    Args:
        endpoint: OTLP endpoint URL (defaults to OTel default)
        api_key: Optional API key sent as a bearer token
        timeout: Request timeout in seconds
        headers: Optional additional headers

    Returns:
        Span processor to add to a TracerProvider
    """
    export_headers = dict(headers) if headers else {}
    if api_key:
        export_headers["Authorization"] = f"Bearer {api_key}"

    exporter = OTLPSpanExporter(
        endpoint=endpoint,
        timeout=timeout,
        headers=export_headers or None,
    )
    return BatchSpanProcessor(exporter)
