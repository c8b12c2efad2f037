import asyncio

from multiprocessing import cpu_count

from kreuzberg import ExtractionConfig, extract_bytes

from pdfsum.constants import PDF_MEDIA_TYPE
from pdfsum.logs import get_logger

from ..errors import EmptyPdfError, ExtractionError

log = get_logger(__name__)

MAX_CONCURRENT_PROCESSES = max(1, cpu_count() - 1)  # Leave one core free for other tasks
cpu_semaphore = asyncio.Semaphore(MAX_CONCURRENT_PROCESSES)

# image only pages must surface as an empty document, not be sent through tesseract
extraction_config = ExtractionConfig(ocr_backend=None)


async def extract(content: bytes) -> str:
    """
    Extract the text of a pdf, trimmed.
    """

    try:
        async with cpu_semaphore:
            result = await extract_bytes(content, mime_type=PDF_MEDIA_TYPE, config=extraction_config)
    except Exception as e:
        log.warning(f'Text extraction failed: {e}')
        raise ExtractionError(f'Failed to extract text from PDF: {e}') from e

    text = str(result.content or '').strip()

    if not text:
        raise EmptyPdfError()

    log.info(f'Extracted {len(text)} characters from {len(content)} bytes.')

    return text


__all__ = ['extract']
