"""OpenTelemetry metrics for the ROI calculator.

Counters:
- roi_calculations_total: calculations served, by scenario
- roi_submissions_total: accepted lead submissions, by recommended tier
- errors_total: errors by type

Metrics are exported to the OTLP endpoint when ENABLE_OTEL=true; otherwise
every increment helper is a no-op.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

logger = logging.getLogger(__name__)

METER_NAME = "roi_calculator"

_METRICS_CONFIGURED = False
_meter: Optional[metrics.Meter] = None
_calculations_counter = None
_submissions_counter = None
_errors_counter = None


def otel_enabled() -> bool:
    """Return True when ENABLE_OTEL is set to ``true``."""
    return os.getenv("ENABLE_OTEL", "").lower() == "true"


def otlp_endpoint(default: str = "http://localhost:4317") -> str:
    """Return the OTLP endpoint with a scheme and no trailing slash."""
    endpoint = os.getenv("OTLP_ENDPOINT") or os.getenv(
        "OTEL_EXPORTER_OTLP_ENDPOINT", default
    )
    endpoint = endpoint.rstrip("/")
    if not endpoint.startswith(("http://", "https://")):
        endpoint = f"http://{endpoint}"
    return endpoint


def configure_metrics() -> None:
    """Configure OpenTelemetry metrics with an OTLP exporter."""
    global _METRICS_CONFIGURED, _meter, _calculations_counter, _submissions_counter, _errors_counter

    if _METRICS_CONFIGURED:
        return

    if not otel_enabled():
        logger.debug("Metrics disabled (ENABLE_OTEL not set to true)")
        _METRICS_CONFIGURED = True
        return

    try:
        endpoint = otlp_endpoint()
        logger.info(f"Configuring metrics export to OTLP endpoint: {endpoint}")

        exporter = OTLPMetricExporter(endpoint=endpoint, insecure=True)
        reader = PeriodicExportingMetricReader(exporter, export_interval_millis=5000)
        provider = MeterProvider(metric_readers=[reader])
        metrics.set_meter_provider(provider)

        _meter = metrics.get_meter(METER_NAME)

        _calculations_counter = _meter.create_counter(
            name="roi_calculations_total",
            description="Total number of ROI calculations served",
            unit="1",
        )

        _submissions_counter = _meter.create_counter(
            name="roi_submissions_total",
            description="Total number of ROI lead submissions accepted",
            unit="1",
        )

        _errors_counter = _meter.create_counter(
            name="errors_total",
            description="Total number of errors by type",
            unit="1",
        )

        logger.info("OpenTelemetry metrics configured successfully")
        _METRICS_CONFIGURED = True

    except Exception as e:
        logger.warning(f"Failed to configure metrics: {e}")
        _METRICS_CONFIGURED = True


def increment_calculations(scenario: str) -> None:
    """
    Increment the calculations counter.

    Args:
        scenario: Scenario the calculation ran under
    """
    if _calculations_counter:
        _calculations_counter.add(1, {"scenario": scenario})


def increment_submissions(recommended_tier: Optional[str]) -> None:
    """
    Increment the submissions counter.

    Args:
        recommended_tier: Tier recommended for the submitted assessment, if pricing was shown
    """
    if _submissions_counter:
        _submissions_counter.add(1, {"recommended_tier": recommended_tier or "none"})


def increment_errors(error_type: str) -> None:
    """
    Increment the errors counter.

    Args:
        error_type: Category of error (e.g., 'validation_error', 'calculation_error')
    """
    if _errors_counter:
        _errors_counter.add(1, {"error_type": error_type})
