from enum import Enum

PDF_SIGNATURE = b'%PDF-'
PDF_MEDIA_TYPE = 'application/pdf'

# browsers and some clients send generic binary for drag & dropped files
ACCEPTED_MEDIA_TYPES = {PDF_MEDIA_TYPE, 'application/octet-stream'}

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
MAX_PROMPT_CHARS = 120_000


class Processors(Enum):
    GEMINI = 'GEMINI'
    OPENAI = 'OPENAI'
    LOCAL = 'LOCAL'
