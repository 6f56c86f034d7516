from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.flask import FlaskInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.instrumentation.requests import RequestsInstrumentor
from opentelemetry.propagate import set_global_textmap
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from models import db

_provider = None


def _get_provider(app):
    global _provider
    if _provider is None:
        service_name = app.config.get("OTEL_SERVICE_NAME", "jewelry-storefront")
        endpoint = app.config.get("OTEL_EXPORTER_OTLP_ENDPOINT")
        _provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
        if app.config.get("TESTING"):
            _provider.add_span_processor(SimpleSpanProcessor(InMemorySpanExporter()))
        else:
            _provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
        trace.set_tracer_provider(_provider)
        set_global_textmap(TraceContextTextMapPropagator())
        RequestsInstrumentor().instrument()
    return _provider


def init_tracing(app):
    """Initialize OpenTelemetry tracing for the Flask app."""
    provider = _get_provider(app)
    FlaskInstrumentor().instrument_app(app, tracer_provider=provider)
    with app.app_context():
        SQLAlchemyInstrumentor().instrument(engine=db.engine, tracer_provider=provider)
