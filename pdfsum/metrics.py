from pdfsum.env import enable_metrics
from pdfsum.logs import get_logger
from pdfsum.modules.monitoring import instrumentator, PROMETHEUS_NAMESPACE, PROMETHEUS_SUMMARIES_SUBSYSTEM
from pdfsum.utils import create_app

log = get_logger(__name__)
metrics = create_app()

if enable_metrics:

    @metrics.get('/healthz')
    def health():
        '''
        Health checking.
        '''

        return {'status': 'ok'}

    from pdfsum.modules.summaries.app import app as summaries_app

    instrumentator.instrument(
        summaries_app, metric_namespace=PROMETHEUS_NAMESPACE, metric_subsystem=PROMETHEUS_SUMMARIES_SUBSYSTEM
    ).expose(metrics)
