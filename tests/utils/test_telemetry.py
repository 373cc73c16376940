"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from opentelemetry import trace

from doors94.utils.telemetry import (
    ATTR_MODE,
    _INSTRUMENTATION_NAME,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        assert isinstance(get_tracer("test.module"), trace.Tracer)

    def test_default_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "doors94"
        assert isinstance(get_tracer(), trace.Tracer)

    def test_noop_span(self) -> None:
        """Without the SDK configured, spans are no-ops."""
        with get_tracer("test.noop").start_as_current_span("test") as span:
            span.set_attribute(ATTR_MODE, "raw")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_installs_provider(self) -> None:
        try:
            from opentelemetry.sdk.trace import TracerProvider
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with patch("doors94.utils.telemetry.trace.set_tracer_provider") as set_provider:
            configure_telemetry(service_name="test-svc", export_to_console=False)

        provider = set_provider.call_args.args[0]
        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "test-svc"

    def test_console_exporter_attached(self) -> None:
        try:
            import opentelemetry.sdk.trace  # noqa: F401
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with (
            patch("doors94.utils.telemetry.trace.set_tracer_provider"),
            patch("doors94.utils.telemetry._add_console_exporter") as add_exporter,
        ):
            configure_telemetry(export_to_console=True)
        add_exporter.assert_called_once()


def test_add_console_exporter_wraps_exporter() -> None:
    try:
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter
    except ImportError:
        pytest.skip("opentelemetry-sdk not installed")

    from doors94.utils.telemetry import _add_console_exporter

    provider = MagicMock()
    processor_cls = MagicMock()
    _add_console_exporter(provider, processor_cls)

    assert isinstance(processor_cls.call_args.args[0], ConsoleSpanExporter)
    provider.add_span_processor.assert_called_once_with(processor_cls.return_value)
