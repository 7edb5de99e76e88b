"""OpenTelemetry tracing configuration."""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
)
from opentelemetry.semconv.resource import ResourceAttributes

from drift_advisor.config import ObservabilitySettings


def setup_tracing(settings: ObservabilitySettings) -> bool:
    """Install a console-exporting tracer provider.

    Engine spans are no-ops until this runs. Returns whether tracing was
    enabled.
    """
    if not settings.tracing_enabled:
        return False

    resource = Resource.create({
        ResourceAttributes.SERVICE_NAME: settings.service_name,
        ResourceAttributes.SERVICE_VERSION: "1.0.0",
    })

    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)
    return True


def get_tracer(name: str = "drift_advisor") -> trace.Tracer:
    """Get a tracer instance."""
    return trace.get_tracer(name)
