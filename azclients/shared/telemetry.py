# azclients/shared/telemetry.py
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from azclients import __version__
from azclients.shared.config import settings
from azclients.shared.logging_config import get_logger

logger = get_logger(__name__)


def setup_telemetry(service_name: str = settings.OTEL_SERVICE_NAME) -> bool:
    """
    Initializes the OpenTelemetry SDK with OTLP export.
    Should be called once at process startup by the application embedding
    the clients. Returns False when no exporter endpoint is configured.
    """
    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("telemetry_disabled", reason="no_otlp_endpoint")
        return False

    logger.info("telemetry_enabled", service=service_name)

    resource = Resource.create(attributes={
        "service.name": service_name,
        "deployment.environment": settings.APP_ENV.value,
        "service.version": __version__,
    })

    trace_provider = TracerProvider(resource=resource)

    otlp_exporter = OTLPSpanExporter(endpoint=f"{settings.OTEL_EXPORTER_OTLP_ENDPOINT}/v1/traces")
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if settings.DEBUG:
        trace_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(trace_provider)
    return True


def get_tracer(name: str):
    """
    Utility to get a tracer for manual instrumentation.
    Usage:
        tracer = get_tracer(__name__)
        with tracer.start_as_current_span("get_device"):
            ...
    """
    return trace.get_tracer(name)
