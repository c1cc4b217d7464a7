"""
OpenTelemetry spans for the quality dashboard.

The dashboard wraps its composite reads in spans named
``dashboard.overall_quality_metrics``, ``dashboard.health_score`` and
``dashboard.alerts_summary``; the health score span also carries
``health_score`` and ``health_status`` attributes. SQLAlchemy queries issued
by the parallel reads appear as child spans once ``setup_tracing`` has run.

Without ``setup_tracing`` spans go to the OpenTelemetry no-op tracer.
Environment: OTEL_EXPORTER_OTLP_ENDPOINT, OTEL_SERVICE_NAME,
OTEL_ENVIRONMENT, OTEL_TRACING_ENABLED.
"""

import os
from functools import wraps
from typing import Any, Callable, Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import DEPLOYMENT_ENVIRONMENT, SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from aiqa.utils.logging_config import get_logger

logger = get_logger(__name__, component="tracing")

_tracer_provider: Optional[TracerProvider] = None
_tracing_enabled: bool = True


def setup_tracing(
    service_name: str = "aiqa",
    environment: str = "development",
    otlp_endpoint: Optional[str] = None,
    enabled: Optional[bool] = None
) -> None:
    """
    Install a tracer provider exporting dashboard spans over OTLP/HTTP.

    OTEL_* environment variables override service_name and environment;
    enabled defaults to OTEL_TRACING_ENABLED.
    """
    global _tracer_provider, _tracing_enabled

    if enabled is None:
        enabled = os.getenv("OTEL_TRACING_ENABLED", "true").lower() == "true"

    _tracing_enabled = enabled

    if not _tracing_enabled:
        logger.info("tracing_disabled")
        return

    service_name = os.getenv("OTEL_SERVICE_NAME", service_name)
    environment = os.getenv("OTEL_ENVIRONMENT", environment)
    otlp_endpoint = otlp_endpoint or os.getenv(
        "OTEL_EXPORTER_OTLP_ENDPOINT",
        "http://localhost:4318"
    )

    resource = Resource(attributes={
        SERVICE_NAME: service_name,
        DEPLOYMENT_ENVIRONMENT: environment,
    })

    _tracer_provider = TracerProvider(resource=resource)
    _tracer_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=f"{otlp_endpoint}/v1/traces"))
    )
    trace.set_tracer_provider(_tracer_provider)

    SQLAlchemyInstrumentor().instrument()

    logger.info(
        "tracing_initialized",
        service_name=service_name,
        environment=environment,
        otlp_endpoint=otlp_endpoint
    )


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer for the given module name.

    Without setup_tracing this is the OpenTelemetry no-op tracer.
    """
    return trace.get_tracer(name)


def trace_operation(
    operation_name: str,
    attributes: Optional[dict] = None
) -> Callable:
    """Run the decorated call in a span; failures are recorded and re-raised."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not _tracing_enabled:
                return func(*args, **kwargs)

            tracer = get_tracer(func.__module__)

            with tracer.start_as_current_span(operation_name) as span:
                if attributes:
                    for key, value in attributes.items():
                        span.set_attribute(key, value)

                span.set_attribute("code.function", func.__name__)
                span.set_attribute("code.namespace", func.__module__)

                try:
                    result = func(*args, **kwargs)
                    span.set_attribute("operation.status", "success")
                    return result
                except Exception as e:
                    span.set_attribute("operation.status", "error")
                    span.set_attribute("error.type", type(e).__name__)
                    span.set_attribute("error.message", str(e))
                    span.record_exception(e)
                    raise

        return wrapper
    return decorator


def add_span_attributes(**attributes: Any) -> None:
    """Add attributes to the current active span, if one is recording."""
    if not _tracing_enabled:
        return

    current_span = trace.get_current_span()
    if current_span and current_span.is_recording():
        for key, value in attributes.items():
            current_span.set_attribute(key, value)


def shutdown_tracing() -> None:
    """Flush pending spans and shut down the tracer provider."""
    global _tracer_provider

    if _tracer_provider:
        _tracer_provider.shutdown()
        _tracer_provider = None
        logger.info("tracing_shutdown")
