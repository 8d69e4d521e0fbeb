"""\
OpenTelemetry
=============

Author: Akshay Mestry <xa@mes3.dev>
Created on: Tuesday, September 08 2026
Last updated on: Saturday, October 03 2026

This module provides `OpenTelemetry` integration for this framework.
Every method call made through a subject is recorded as a span, which
makes slow or failing calls of a specification run visible in any
tracing backend.
"""

from __future__ import annotations

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.export import ConsoleSpanExporter
from opentelemetry.sdk.trace.export import SimpleSpanProcessor

from specter.core.config import Config
from specter.utils.logging import get_logger

__all__: list[str] = ["get_tracer"]

logger = get_logger(__name__)


def get_tracer(
    config: Config | None = None,
    name: str | None = None,
) -> trace.Tracer:
    """Configure and return a tracer.

    This function sets up an `OpenTelemetry TracerProvider` based on the
    framework's configuration. With telemetry disabled the provider has
    no span processors, so spans are created but never exported. With
    telemetry enabled, spans are printed to the console in debug mode
    and exported over OTLP otherwise.

    :param config: An optional configuration object, defaults to a
        fresh `Config` instance.
    :param name: Override for the service name, defaults to `None`.
    :return: A configured `OpenTelemetry Tracer` instance.
    """
    if config is None:
        config = Config()
    service = name or config.telemetry.name or config.name
    resource = Resource.create(
        {
            "service.name": service,
            "service.version": config.version,
            "deployment.environment": (
                "development" if config.debug else "production"
            ),
        }
    )
    provider = TracerProvider(resource=resource)
    if config.telemetry.enable:
        if config.debug:
            processor = SimpleSpanProcessor(ConsoleSpanExporter())
        else:
            try:
                processor = BatchSpanProcessor(OTLPSpanExporter())
            except Exception as error:
                logger.warning(
                    f"OTLP exporter unavailable, using console: {error}"
                )
                processor = SimpleSpanProcessor(ConsoleSpanExporter())
        provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    return provider.get_tracer(service, config.version)
