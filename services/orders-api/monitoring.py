"""Monitoring and observability setup.

Traces and metrics go through OpenTelemetry. Exporters are attached only when
OTEL_EXPORTER_OTLP_ENDPOINT is set; otherwise the providers still record spans
and metric values in-process so instrumentation code paths stay identical.
"""
import logging
from opentelemetry import trace, metrics
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

from config import OTEL_EXPORTER_OTLP_ENDPOINT, SERVICE_NAME, API_VERSION

logger = logging.getLogger(__name__)

_resource = Resource.create({
    "service.name": SERVICE_NAME,
    "service.version": API_VERSION,
})


def init_tracing() -> trace.Tracer:
    """
    Initialize OpenTelemetry tracing.

    Returns:
        Tracer instance
    """
    tracer_provider = TracerProvider(resource=_resource)
    if OTEL_EXPORTER_OTLP_ENDPOINT:
        otlp_span_exporter = OTLPSpanExporter(
            endpoint=OTEL_EXPORTER_OTLP_ENDPOINT,
            insecure=True
        )
        tracer_provider.add_span_processor(BatchSpanProcessor(otlp_span_exporter))
        logger.info(f"Tracing initialized with endpoint: {OTEL_EXPORTER_OTLP_ENDPOINT}")
    trace.set_tracer_provider(tracer_provider)

    return trace.get_tracer(__name__)


def init_metrics() -> metrics.Meter:
    """
    Initialize OpenTelemetry metrics.

    Returns:
        Meter instance
    """
    metric_readers = []
    if OTEL_EXPORTER_OTLP_ENDPOINT:
        otlp_metric_exporter = OTLPMetricExporter(
            endpoint=OTEL_EXPORTER_OTLP_ENDPOINT,
            insecure=True
        )
        metric_readers.append(
            PeriodicExportingMetricReader(otlp_metric_exporter, export_interval_millis=5000)
        )
        logger.info("Metrics initialized with OTLP exporter")

    meter_provider = MeterProvider(resource=_resource, metric_readers=metric_readers)
    metrics.set_meter_provider(meter_provider)

    return metrics.get_meter(__name__)


tracer = init_tracing()
meter = init_metrics()

# User metrics
users_created_counter = meter.create_counter(
    "orders_api.users.created",
    description="Total number of users created",
    unit="1"
)

duplicate_email_counter = meter.create_counter(
    "orders_api.users.duplicates",
    description="User creations rejected because the email is already registered",
    unit="1"
)

# Order metrics
orders_placed_counter = meter.create_counter(
    "orders_api.orders.placed",
    description="Total number of orders placed",
    unit="1"
)

order_quantity_histogram = meter.create_histogram(
    "orders_api.orders.quantity",
    description="Quantity requested per order",
    unit="1"
)

# Rejected requests, by resource ("users", "orders") and reason
validation_failures_counter = meter.create_counter(
    "orders_api.validation.failures",
    description="Requests rejected by input validation",
    unit="1"
)
