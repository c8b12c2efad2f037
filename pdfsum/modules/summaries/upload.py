from fastapi import UploadFile

from pdfsum.constants import ACCEPTED_MEDIA_TYPES, MAX_UPLOAD_BYTES, PDF_SIGNATURE
from pdfsum.logs import get_logger

from .errors import MissingFileError, PayloadTooLargeError, UnsupportedMediaTypeError
from .v1.models import UploadedDocument

log = get_logger(__name__)


def is_pdf(content: bytes) -> bool:
    return content[: len(PDF_SIGNATURE)] == PDF_SIGNATURE


def validate_media_type(content_type: str | None) -> None:
    # the declared type is client supplied, it can only ever reject an upload
    if not content_type:
        return

    media_type = content_type.split(';')[0].strip().lower()

    if media_type not in ACCEPTED_MEDIA_TYPES:
        raise UnsupportedMediaTypeError('Only PDF files are accepted')


def validate_document(content: bytes, content_type: str | None = None) -> None:
    if not content:
        raise MissingFileError()

    validate_media_type(content_type)

    if len(content) > MAX_UPLOAD_BYTES:
        raise PayloadTooLargeError()

    if not is_pdf(content):
        raise UnsupportedMediaTypeError()


async def read_upload(file: UploadFile | None) -> UploadedDocument:
    """
    Reads the uploaded file and validates it before any expensive work is done.
    """

    if file is None:
        raise MissingFileError()

    # reject early when the multipart parser already knows the size
    if file.size is not None and file.size > MAX_UPLOAD_BYTES:
        validate_media_type(file.content_type)
        raise PayloadTooLargeError()

    # read at most one byte past the ceiling, enough to tell it was exceeded
    content = await file.read(MAX_UPLOAD_BYTES + 1)

    validate_document(content, file.content_type)

    log.info(f'Accepted upload {file.filename or "<unnamed>"} ({len(content)} bytes)')

    return UploadedDocument(content=content, filename=file.filename)


__all__ = ['is_pdf', 'read_upload', 'validate_document', 'validate_media_type']
