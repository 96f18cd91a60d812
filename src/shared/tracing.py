"""Tracing/observability setup utilities.

Spans are exported over OTLP/gRPC when ENABLE_OTEL=true. When it is not set
the global no-op tracer stays in place, so ``handler_span`` is always safe to
use.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import SpanKind

from src.shared.metrics import otel_enabled, otlp_endpoint

logger = logging.getLogger(__name__)

TRACER_NAME = "roi_calculator.handlers"

_TRACING_CONFIGURED = False


def configure_tracing(service_name: str) -> None:
    """Install an OTLP-exporting tracer provider (once per process)."""

    global _TRACING_CONFIGURED
    if _TRACING_CONFIGURED:
        return

    if not otel_enabled():
        logger.debug("Tracing disabled (ENABLE_OTEL not set to true)")
        _TRACING_CONFIGURED = True
        return

    resolved_name = os.getenv("OTEL_SERVICE_NAME") or service_name
    provider = TracerProvider(resource=Resource.create({"service.name": resolved_name}))
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint(), insecure=True))
    )
    trace.set_tracer_provider(provider)
    _TRACING_CONFIGURED = True


def handler_span(operation: str, **attrs: Any):
    """Create a span for a handler operation.

    Args:
        operation: Name of the handler operation (e.g., "calculate", "submit")
        **attrs: Additional span attributes

    Returns:
        Context manager for the span
    """
    tracer = trace.get_tracer(TRACER_NAME)
    attributes: Dict[str, Any] = {"handler.operation": operation, **attrs}
    return tracer.start_as_current_span(
        name=f"handler.{operation}",
        kind=SpanKind.INTERNAL,
        attributes=attributes,
    )
