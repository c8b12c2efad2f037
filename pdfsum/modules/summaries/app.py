from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi_versionizer.versionizer import Versionizer
from starlette.exceptions import HTTPException as StarletteHTTPException

from pdfsum.env import llm_processor, summary_timeout_ms
from pdfsum.logs import get_logger
from pdfsum.utils import create_app

from .errors import MissingFileError, PayloadTooLargeError, UnsupportedMediaTypeError
from .pipeline import error_response
from .v1.models import ErrorCode, ErrorResponse
from .v1.router import router as v1_router


log = get_logger(__name__)

# statuses the framework raises on its own that have a pipeline counterpart
http_status_to_error = {
    400: MissingFileError,
    413: PayloadTooLargeError,
    415: UnsupportedMediaTypeError,
}

app = create_app()
app.include_router(v1_router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    log.debug(f'Rejected malformed request to {request.url.path}: {exc.errors()}')

    return error_response(MissingFileError())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    log.debug(f'Request to {request.url.path} failed with {exc.status_code}: {exc.detail}')

    error_class = http_status_to_error.get(exc.status_code)

    if error_class:
        return error_response(error_class())

    code = ErrorCode.INTERNAL_ERROR if exc.status_code >= 500 else ErrorCode.VALIDATION_ERROR
    error = ErrorResponse(code=code, message=str(exc.detail))

    return JSONResponse(status_code=exc.status_code, content=error.model_dump(mode='json'), headers=exc.headers)


Versionizer(app=app, prefix_format='/v{major}', sort_routes=True).versionize()


def app_startup():
    log.info(f'summaries module initialized (processor: {llm_processor}, timeout: {summary_timeout_ms}ms)')


__all__ = ['app', 'app_startup']
