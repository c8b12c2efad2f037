import logging
import sys
from logging import Filter, LogRecord

from uvicorn.logging import DefaultFormatter

from pdfsum.env import log_level

LOG_FORMAT = '%(asctime)s %(name)s %(levelprefix)s %(message)s'
ACCESS_LOG_FORMAT = '%(asctime)s %(name)s %(levelprefix)s %(client_addr)s - "%(request_line)s" %(status_code)s'

# the llm sdks log every outgoing request at INFO
QUIET_LIBRARIES = ('httpx', 'httpcore', 'google_genai', 'openai')


class AccessLogSuppressor(Filter):
    """
    Drops uvicorn access lines for health checks and metric scrapes.
    """

    quiet_paths = frozenset({'/favicon.ico', '/metrics', '/healthz', '/api/health'})

    def filter(self, record: LogRecord) -> bool:
        # uvicorn access records carry (client_addr, method, path, http_version, status_code)
        if not isinstance(record.args, tuple) or len(record.args) < 3:
            return True

        path = str(record.args[2]).split('?', 1)[0]

        return path not in self.quiet_paths


for name in QUIET_LIBRARIES:
    logging.getLogger(name).setLevel(logging.WARNING)

sh = logging.StreamHandler(sys.stdout)
sh.setFormatter(DefaultFormatter(LOG_FORMAT))

logging.basicConfig(level=log_level, handlers=[sh])


def get_logger(name):
    return logging.getLogger(name)


def _stdout_handler(formatter: str, filters: list[str] | None = None) -> dict:
    handler = {'formatter': formatter, 'class': 'logging.StreamHandler', 'stream': 'ext://sys.stdout'}

    if filters:
        handler['filters'] = filters

    return handler


# passed to uvicorn so the server logs look like ours
uvicorn_log_config = {
    'version': 1,
    'disable_existing_loggers': False,
    'filters': {'quiet_paths': {'()': AccessLogSuppressor}},
    'formatters': {
        'default': {'()': 'uvicorn.logging.DefaultFormatter', 'fmt': LOG_FORMAT, 'use_colors': None},
        'access': {'()': 'uvicorn.logging.AccessFormatter', 'fmt': ACCESS_LOG_FORMAT},
    },
    'handlers': {
        'default': _stdout_handler('default'),
        'access': _stdout_handler('access', filters=['quiet_paths']),
    },
    'loggers': {
        'uvicorn': {'handlers': ['default'], 'level': log_level, 'propagate': False},
        'uvicorn.access': {'handlers': ['access'], 'level': log_level, 'propagate': False},
    },
}
