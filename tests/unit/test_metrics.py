"""Tests for OpenTelemetry metrics module."""

import os
import pytest
from unittest.mock import MagicMock, patch

import src.shared.metrics as metrics_module
from src.shared.metrics import (
    configure_metrics,
    increment_calculations,
    increment_errors,
    increment_submissions,
)


@pytest.fixture(autouse=True)
def reset_metrics_state():
    """Reset module globals so tests don't leak counters into each other."""

    def reset():
        metrics_module._METRICS_CONFIGURED = False
        metrics_module._meter = None
        metrics_module._calculations_counter = None
        metrics_module._submissions_counter = None
        metrics_module._errors_counter = None

    reset()
    yield
    reset()


class TestMetricsConfiguration:
    """Tests for metrics configuration."""

    def test_configure_metrics_disabled_by_default(self):
        """Test metrics are disabled when ENABLE_OTEL is not set."""
        with patch.dict(os.environ, {}, clear=True):
            configure_metrics()

        assert metrics_module._calculations_counter is None

    def test_configure_metrics_disabled_explicitly(self):
        """Test metrics are disabled when ENABLE_OTEL is false."""
        with patch.dict(os.environ, {"ENABLE_OTEL": "false"}):
            configure_metrics()

        assert metrics_module._errors_counter is None

    @patch("src.shared.metrics.OTLPMetricExporter")
    @patch("src.shared.metrics.PeriodicExportingMetricReader")
    @patch("src.shared.metrics.MeterProvider")
    @patch("src.shared.metrics.metrics.set_meter_provider")
    @patch("src.shared.metrics.metrics.get_meter")
    def test_configure_metrics_enabled(
        self, mock_get_meter, mock_set_provider, mock_provider_class, mock_reader_class, mock_exporter_class
    ):
        """Test metrics are configured when ENABLE_OTEL is true."""
        with patch.dict(os.environ, {"ENABLE_OTEL": "true", "OTLP_ENDPOINT": "http://localhost:4317"}):
            mock_provider = MagicMock()
            mock_provider_class.return_value = mock_provider

            mock_meter = MagicMock()
            mock_get_meter.return_value = mock_meter

            calculations_counter = MagicMock()
            submissions_counter = MagicMock()
            errors_counter = MagicMock()
            mock_meter.create_counter.side_effect = [
                calculations_counter,
                submissions_counter,
                errors_counter,
            ]

            configure_metrics()

            call_kwargs = mock_exporter_class.call_args.kwargs
            assert call_kwargs["endpoint"] == "http://localhost:4317"
            assert call_kwargs["insecure"] is True

            mock_set_provider.assert_called_once_with(mock_provider)
            mock_get_meter.assert_called_once_with("roi_calculator")

            names = [c.kwargs["name"] for c in mock_meter.create_counter.call_args_list]
            assert names == ["roi_calculations_total", "roi_submissions_total", "errors_total"]
            assert metrics_module._calculations_counter is calculations_counter
            assert metrics_module._submissions_counter is submissions_counter
            assert metrics_module._errors_counter is errors_counter

    def test_configure_metrics_handles_errors_gracefully(self):
        """Test metrics configuration handles errors without crashing."""
        with patch.dict(os.environ, {"ENABLE_OTEL": "true"}):
            with patch("src.shared.metrics.OTLPMetricExporter", side_effect=Exception("Test error")):
                configure_metrics()

        assert metrics_module._calculations_counter is None


class TestMetricsIncrements:
    """Tests for metrics increment functions."""

    def test_increment_calculations_when_configured(self):
        mock_counter = MagicMock()
        metrics_module._calculations_counter = mock_counter

        increment_calculations("aggressive")

        mock_counter.add.assert_called_once_with(1, {"scenario": "aggressive"})

    def test_increment_calculations_when_not_configured(self):
        """Test calculations increment is safe when metrics not configured."""
        metrics_module._calculations_counter = None

        increment_calculations("expected")

    def test_increment_submissions_with_tier(self):
        mock_counter = MagicMock()
        metrics_module._submissions_counter = mock_counter

        increment_submissions("growth")

        mock_counter.add.assert_called_once_with(1, {"recommended_tier": "growth"})

    def test_increment_submissions_without_pricing(self):
        """Submissions made before pricing was shown are tagged 'none'."""
        mock_counter = MagicMock()
        metrics_module._submissions_counter = mock_counter

        increment_submissions(None)

        mock_counter.add.assert_called_once_with(1, {"recommended_tier": "none"})

    def test_increment_errors(self):
        mock_counter = MagicMock()
        metrics_module._errors_counter = mock_counter

        increment_errors("validation_error")

        mock_counter.add.assert_called_once_with(1, {"error_type": "validation_error"})

    def test_increment_errors_when_not_configured(self):
        """Test errors increment is safe when metrics not configured."""
        metrics_module._errors_counter = None

        increment_errors("test_error")


class TestMetricsURLHandling:
    """Tests for OTLP endpoint URL handling."""

    @pytest.mark.parametrize(
        "env,expected",
        [
            ({"OTLP_ENDPOINT": "http://localhost:4317/"}, "http://localhost:4317"),
            ({"OTLP_ENDPOINT": "localhost:4317"}, "http://localhost:4317"),
            ({"OTEL_EXPORTER_OTLP_ENDPOINT": "https://collector:4317"}, "https://collector:4317"),
            ({}, "http://localhost:4317"),
        ],
    )
    @patch("src.shared.metrics.OTLPMetricExporter")
    @patch("src.shared.metrics.PeriodicExportingMetricReader")
    @patch("src.shared.metrics.MeterProvider")
    @patch("src.shared.metrics.metrics.set_meter_provider")
    @patch("src.shared.metrics.metrics.get_meter")
    def test_endpoint_normalization(
        self,
        mock_get_meter,
        mock_set_provider,
        mock_provider_class,
        mock_reader_class,
        mock_exporter_class,
        env,
        expected,
    ):
        with patch.dict(os.environ, {"ENABLE_OTEL": "true", **env}, clear=True):
            mock_get_meter.return_value.create_counter.return_value = MagicMock()

            configure_metrics()

            assert mock_exporter_class.call_args.kwargs["endpoint"] == expected


class TestMetricsIdempotence:
    """Tests for metrics configuration idempotence."""

    @patch("src.shared.metrics.OTLPMetricExporter")
    @patch("src.shared.metrics.PeriodicExportingMetricReader")
    @patch("src.shared.metrics.MeterProvider")
    def test_configure_metrics_is_idempotent(self, mock_provider_class, mock_reader_class, mock_exporter_class):
        """Test configure_metrics can be called multiple times safely."""
        with patch.dict(os.environ, {"ENABLE_OTEL": "true"}):
            with patch("src.shared.metrics.metrics.set_meter_provider"), \
                 patch("src.shared.metrics.metrics.get_meter") as mock_get_meter:
                mock_get_meter.return_value.create_counter.return_value = MagicMock()

                configure_metrics()
                configure_metrics()
                configure_metrics()

                assert mock_exporter_class.call_count == 1
