"""OpenTelemetry tracing helpers for doors94.

Provides a thin wrapper around the OpenTelemetry API so the rest of the
codebase can call ``get_tracer()`` without caring whether the SDK is
installed.  When the SDK is *not* configured the API returns no-op
implementations.

Usage::

    from doors94.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("gateway.chat") as span:
        span.set_attribute(ATTR_MODE, "agent")

To activate real tracing, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install doors94[otel]``).
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

ATTR_MODE = "doors94.chat.mode"
ATTR_AGENT_ID = "doors94.agent.id"
ATTR_MODEL = "doors94.model"
ATTR_PROVIDER = "doors94.provider"
ATTR_PROMPT_CHARS = "doors94.prompt.chars"
ATTR_MESSAGE_COUNT = "doors94.chat.messages"
ATTR_ERROR_KIND = "doors94.error.kind"
ATTR_UPSTREAM_STATUS = "doors94.upstream.status"

_INSTRUMENTATION_NAME = "doors94"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name* (no-op unless configured)."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "doors94",
    export_to_console: bool = True,
) -> None:
    """Configure OpenTelemetry tracing (requires ``doors94[otel]``).

    Raises:
        ImportError: If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import SimpleSpanProcessor  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install doors94[otel]"
        )
        raise ImportError(msg) from exc

    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    if export_to_console:
        _add_console_exporter(provider, SimpleSpanProcessor)

    trace.set_tracer_provider(provider)


def _add_console_exporter(provider: Any, processor_cls: Any) -> None:
    """Attach the console exporter (JSON to stdout)."""
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports]

    provider.add_span_processor(processor_cls(ConsoleSpanExporter()))
