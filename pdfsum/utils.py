import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pdfsum.env import cors_origins
from pdfsum.logs import get_logger, uvicorn_log_config

log = get_logger(__name__)


def create_app(**kwargs):
    app = FastAPI(**kwargs)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ['*'],
        allow_methods=['GET', 'POST', 'OPTIONS'],
        allow_headers=['Content-Type'],
    )

    return app


def get_router(**kwargs) -> APIRouter:
    return APIRouter(**kwargs)


async def create_webserver(app, port):
    server_config = uvicorn.Config(
        app,
        host='0.0.0.0',
        port=port,
        log_config=uvicorn_log_config,
    )
    server = uvicorn.Server(server_config)
    await server.serve()
