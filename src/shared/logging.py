"""Shared logging utilities for CLI and Web interfaces."""

import logging
import os
import sys
from typing import Dict, Optional

from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource
from opentelemetry.trace import get_current_span

from src.shared.metrics import otel_enabled, otlp_endpoint


_LOGGING_CONFIGURED = False


class TraceContextFilter(logging.Filter):
    """Attach trace/span ids to records so they can be correlated across sinks."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        span_context = get_current_span().get_span_context()

        if span_context and span_context.is_valid:
            record.trace_id = format(span_context.trace_id, "032x")
            record.span_id = format(span_context.span_id, "016x")
        else:
            record.trace_id = "-"
            record.span_id = "-"

        return True


def _parse_headers(raw_headers: Optional[str]) -> Dict[str, str]:
    """Parse ``key=value,key2=value2`` exporter headers, skipping malformed pairs."""
    pairs = (pair.split("=", 1) for pair in (raw_headers or "").split(",") if "=" in pair)
    return {key.strip(): value.strip() for key, value in pairs}


def _build_otel_handler(service_name: str, level: int) -> Optional[logging.Handler]:
    """Create an OTLP logging handler when ENABLE_OTEL=true."""

    if not otel_enabled():
        return None

    endpoint = otlp_endpoint()
    headers = _parse_headers(
        os.getenv("OTLP_HEADERS") or os.getenv("OTEL_EXPORTER_OTLP_HEADERS")
    )

    try:
        provider = LoggerProvider(resource=Resource.create({"service.name": service_name}))
        provider.add_log_record_processor(
            BatchLogRecordProcessor(
                OTLPLogExporter(
                    endpoint=endpoint,
                    headers=headers,
                    insecure=endpoint.startswith("http://"),
                )
            )
        )
        set_logger_provider(provider)
    except Exception as exc:  # pragma: no cover - exporter misconfiguration
        sys.stderr.write(f"OTLP log export disabled: {exc}\n")
        return None

    return LoggingHandler(logger_provider=provider, level=level)


def resolve_log_level(default: str = "INFO") -> int:
    """Resolve the log level named by ``APP_LOG_LEVEL`` (falls back to ``default``)."""
    level_name = os.getenv("APP_LOG_LEVEL", default).upper()
    return getattr(logging, level_name, logging.INFO)


def _attach(
    root_logger: logging.Logger,
    handler: logging.Handler,
    level: int,
    formatter: Optional[logging.Formatter],
    trace_filter: logging.Filter,
) -> None:
    handler.setLevel(level)
    if formatter is not None:
        handler.setFormatter(formatter)
    handler.addFilter(trace_filter)
    root_logger.addHandler(handler)


def setup_logging(
    name: str = "roi_calculator",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    service_name: Optional[str] = None,
) -> logging.Logger:
    """Configure console/file logging and, when an endpoint is set, OTLP export.

    Safe to call more than once; only the first call installs handlers.
    """

    global _LOGGING_CONFIGURED

    if level is None:
        level = resolve_log_level()

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if _LOGGING_CONFIGURED:
        return logger

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    trace_filter = TraceContextFilter()
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s "
        "[trace_id=%(trace_id)s span_id=%(span_id)s]"
    )

    _attach(root_logger, logging.StreamHandler(sys.stdout), level, formatter, trace_filter)

    if log_file:
        _attach(root_logger, logging.FileHandler(log_file), level, formatter, trace_filter)

    otel_handler = _build_otel_handler(service_name or name, level)
    if otel_handler:
        _attach(root_logger, otel_handler, level, None, trace_filter)

    _LOGGING_CONFIGURED = True
    return logger
