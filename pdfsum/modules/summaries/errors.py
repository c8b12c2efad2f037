import asyncio
import re

from pdfsum.logs import get_logger

from .v1.models import ErrorCode, ErrorResponse

log = get_logger(__name__)

TIMEOUT_PATTERN = re.compile(r'abort|timeout', re.IGNORECASE)

error_code_to_status = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.UNSUPPORTED_MEDIA_TYPE: 415,
    ErrorCode.PAYLOAD_TOO_LARGE: 413,
    ErrorCode.EMPTY_PDF: 400,
    ErrorCode.EXTRACTION_ERROR: 502,
    ErrorCode.AI_TIMEOUT: 504,
    ErrorCode.EMPTY_SUMMARY: 502,
    ErrorCode.CONFIGURATION_ERROR: 502,
    ErrorCode.AI_UPSTREAM_ERROR: 502,
    ErrorCode.INTERNAL_ERROR: 500,
}


class PipelineError(Exception):
    """Base exception for every failure the pipeline knows how to report."""

    code = ErrorCode.INTERNAL_ERROR
    default_message = 'Unexpected error'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return error_code_to_status[self.code]


class MissingFileError(PipelineError):
    code = ErrorCode.VALIDATION_ERROR
    default_message = 'file is required and must be a PDF'


class UnsupportedMediaTypeError(PipelineError):
    code = ErrorCode.UNSUPPORTED_MEDIA_TYPE
    default_message = 'File is not a valid PDF'


class PayloadTooLargeError(PipelineError):
    code = ErrorCode.PAYLOAD_TOO_LARGE
    default_message = 'File too large (max 10MB)'


class EmptyPdfError(PipelineError):
    code = ErrorCode.EMPTY_PDF
    default_message = 'No extractable text in PDF'


class ExtractionError(PipelineError):
    code = ErrorCode.EXTRACTION_ERROR
    default_message = 'Failed to extract text from PDF'


class AITimeoutError(PipelineError):
    code = ErrorCode.AI_TIMEOUT
    default_message = 'Upstream model timeout'


class EmptySummaryError(PipelineError):
    code = ErrorCode.EMPTY_SUMMARY
    default_message = 'Empty summary from model'


class ConfigurationError(PipelineError):
    code = ErrorCode.CONFIGURATION_ERROR
    default_message = 'Summarization backend is not configured'


class UpstreamError(PipelineError):
    code = ErrorCode.AI_UPSTREAM_ERROR
    default_message = 'Upstream model error'


def classify_upstream_exception(e: BaseException) -> PipelineError:
    """
    Tags a raw exception raised by the upstream model call.

    SDK error types differ between backends and versions, so anything that is not a known
    timeout type is matched on its message before defaulting to a generic upstream error.
    """

    if isinstance(e, PipelineError):
        return e

    if isinstance(e, (TimeoutError, asyncio.TimeoutError)):
        return AITimeoutError()

    message = str(e) or type(e).__name__

    if TIMEOUT_PATTERN.search(message) or TIMEOUT_PATTERN.search(type(e).__name__):
        return AITimeoutError()

    return UpstreamError(message)


def classify(e: BaseException) -> tuple[int, ErrorResponse]:
    """
    Maps any failure to the http status and body returned to the caller.
    """

    if isinstance(e, PipelineError):
        log.warning(f'Request failed with {e.code.value}: {e.message}')

        return e.status_code, ErrorResponse(code=e.code, message=e.message)

    log.error(f'Unexpected error while processing request: {e}', exc_info=e)
    fallback = PipelineError()

    return fallback.status_code, ErrorResponse(code=fallback.code, message=fallback.message)


__all__ = [
    'AITimeoutError',
    'ConfigurationError',
    'EmptyPdfError',
    'EmptySummaryError',
    'ExtractionError',
    'MissingFileError',
    'PayloadTooLargeError',
    'PipelineError',
    'UnsupportedMediaTypeError',
    'UpstreamError',
    'classify',
    'classify_upstream_exception',
    'error_code_to_status',
]
