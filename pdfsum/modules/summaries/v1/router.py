from fastapi import File, UploadFile
from fastapi_versionizer.versionizer import api_version

from pdfsum.utils import get_router

from ..pipeline import handle_upload
from .models import ErrorResponse, SummaryResponse

router = get_router(
    responses={
        status: {'model': ErrorResponse, 'description': description}
        for status, description in [
            (400, 'Missing file or no extractable text'),
            (413, 'File too large'),
            (415, 'Not a PDF'),
            (500, 'Internal error'),
            (502, 'Extraction, upstream model or backend configuration error'),
            (504, 'Upstream model timeout'),
        ]
    }
)


@api_version(1)
@router.post('/summarize')
async def summarize_pdf(file: UploadFile | None = File(None)) -> SummaryResponse:
    """
    Summarizes the uploaded **file** (a single PDF, max 10MB).
    """

    return await handle_upload(file)
