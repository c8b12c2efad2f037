import asyncio
import importlib.metadata
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pdfsum.env import app_port, enable_metrics, metrics_port
from pdfsum.logs import get_logger
from pdfsum.modules.summaries.app import app as summaries_app, app_startup as summaries_startup
from pdfsum.utils import create_app, create_webserver

log = get_logger(__name__)


@asynccontextmanager
async def lifespan(main_app: FastAPI):
    log.info(f'pdfsum {importlib.metadata.version("pdfsum")} is ready to read')

    summaries_startup()

    yield

    log.info('pdfsum is shutting down')


app = create_app(lifespan=lifespan)


@app.get('/api/health')
def health():
    return {'ok': True}


app.mount('/api', summaries_app)


async def main():
    tasks = [asyncio.create_task(create_webserver('pdfsum.main:app', port=app_port))]

    if enable_metrics:
        tasks.append(asyncio.create_task(create_webserver('pdfsum.metrics:metrics', port=metrics_port)))

    await asyncio.wait(tasks, return_when=asyncio.ALL_COMPLETED)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except Exception as e:
        print(e)
        sys.exit(0)
    except KeyboardInterrupt:
        pass
