import time

from fastapi import UploadFile
from fastapi.responses import JSONResponse

from pdfsum.logs import get_logger
from pdfsum.modules.monitoring import SUMMARY_DURATION_METRIC, SUMMARY_ERROR_COUNTER, SUMMARY_INPUT_LENGTH_METRIC

from .errors import classify
from .llm_selector import LLMSelector
from .processor import summarize
from .text_extractor.main import extract
from .upload import read_upload
from .v1.models import SummaryResponse

log = get_logger(__name__)


async def run_pipeline(file: UploadFile | None) -> SummaryResponse:
    """
    Validate, extract, summarize. Any stage failure propagates untouched.
    """

    document = await read_upload(file)
    text = await extract(document.content)

    SUMMARY_INPUT_LENGTH_METRIC.observe(len(text))

    start = time.perf_counter()
    result = await summarize(text)
    duration = time.perf_counter() - start

    SUMMARY_DURATION_METRIC.labels(LLMSelector.get_processor().value).observe(duration)

    log.info(f'Summarized {document.filename or "<unnamed>"} with {result.model} in {round(duration, 3)}s')

    return SummaryResponse(
        summary=result.summary,
        model=result.model,
        input_chars=len(text),
        duration_ms=round(duration * 1000),
    )


def error_response(e: BaseException) -> JSONResponse:
    status_code, error = classify(e)
    SUMMARY_ERROR_COUNTER.labels(code=error.code.value).inc()

    return JSONResponse(status_code=status_code, content=error.model_dump(mode='json'))


async def handle_upload(file: UploadFile | None) -> SummaryResponse | JSONResponse:
    try:
        return await run_pipeline(file)
    except Exception as e:
        return error_response(e)


__all__ = ['error_response', 'handle_upload', 'run_pipeline']
