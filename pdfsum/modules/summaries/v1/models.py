from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ErrorCode(Enum):
    VALIDATION_ERROR = 'VALIDATION_ERROR'
    UNSUPPORTED_MEDIA_TYPE = 'UNSUPPORTED_MEDIA_TYPE'
    PAYLOAD_TOO_LARGE = 'PAYLOAD_TOO_LARGE'
    EMPTY_PDF = 'EMPTY_PDF'
    EXTRACTION_ERROR = 'EXTRACTION_ERROR'
    AI_TIMEOUT = 'AI_TIMEOUT'
    EMPTY_SUMMARY = 'EMPTY_SUMMARY'
    CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
    AI_UPSTREAM_ERROR = 'AI_UPSTREAM_ERROR'
    INTERNAL_ERROR = 'INTERNAL_ERROR'


# request scoped, never persisted
class UploadedDocument(BaseModel):
    content: bytes
    filename: str | None = None


class SummaryResult(BaseModel):
    summary: str
    model: str


# response model to expose to the API
class SummaryResponse(BaseModel):
    summary: str
    model: str
    input_chars: int
    duration_ms: int

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'examples': [
                {
                    'summary': 'This document is a quarterly report...\n- Revenue grew 12%.',
                    'model': 'gemini-2.5-flash',
                    'inputChars': 18231,
                    'durationMs': 3120,
                }
            ]
        },
    )


class ErrorResponse(BaseModel):
    code: ErrorCode
    message: str

    model_config = ConfigDict(
        json_schema_extra={
            'examples': [{'code': 'UNSUPPORTED_MEDIA_TYPE', 'message': 'File is not a valid PDF'}]
        },
    )
