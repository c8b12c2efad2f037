from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator, metrics

PROMETHEUS_NAMESPACE = 'PdfSum'
PROMETHEUS_SUMMARIES_SUBSYSTEM = 'Summaries'

SUMMARY_INPUT_LENGTH_METRIC = Histogram(
    'summary_input_length',
    documentation='Measures the length of the text extracted from the uploaded pdf',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM,
    buckets=[500, 1000, 5000, 10000, 50000, 120000, 500000],
)

SUMMARY_DURATION_METRIC = Histogram(
    'summary_duration_seconds',
    documentation='Measures the duration of the summary inference in seconds',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM,
    buckets=[0.5, 1, 2.5, 5, 10, 15, 30],
    labelnames=['processor'],
)

SUMMARY_TIMEOUT_COUNTER = Counter(
    'summary_timeouts',
    documentation='Number of summaries abandoned because the upstream model missed the deadline',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM,
    labelnames=['processor'],
)

SUMMARY_ERROR_COUNTER = Counter(
    'summary_errors',
    documentation='Number of requests that have failed, by error code',
    namespace=PROMETHEUS_NAMESPACE,
    subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM,
    labelnames=['code'],
)

instrumentator = Instrumentator(
    excluded_handlers=['/healthz', '/metrics'],
)

instrumentator.add(
    metrics.latency(buckets=[n for n in range(1, 6)] + [10, 15, 30]),
    metrics.requests(metric_namespace=PROMETHEUS_NAMESPACE, metric_subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM),
)
