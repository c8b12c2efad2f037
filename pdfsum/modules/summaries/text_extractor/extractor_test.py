from types import SimpleNamespace

import pytest

from pdfsum.modules.summaries.errors import EmptyPdfError, ExtractionError


@pytest.fixture()
def extract_bytes(mocker):
    return mocker.patch('pdfsum.modules.summaries.text_extractor.main.extract_bytes')


class TestExtract:
    @pytest.mark.asyncio
    async def test_returns_trimmed_text(self, extract_bytes):
        from pdfsum.modules.summaries.text_extractor.main import extract, extraction_config

        extract_bytes.return_value = SimpleNamespace(content='\n\n  Quarterly report\nRevenue grew.  \n')

        assert await extract(b'%PDF-1.4') == 'Quarterly report\nRevenue grew.'
        extract_bytes.assert_called_once_with(b'%PDF-1.4', mime_type='application/pdf', config=extraction_config)

    @pytest.mark.asyncio
    @pytest.mark.parametrize('content', ['', '   \n\t ', None])
    async def test_empty_text(self, extract_bytes, content):
        '''A scanned pdf without a text layer is an expected failure, not a crash.'''

        from pdfsum.modules.summaries.text_extractor.main import extract

        extract_bytes.return_value = SimpleNamespace(content=content)

        with pytest.raises(EmptyPdfError):
            await extract(b'%PDF-1.4')

    @pytest.mark.asyncio
    async def test_parser_failure(self, extract_bytes):
        from pdfsum.modules.summaries.text_extractor.main import extract

        extract_bytes.side_effect = ValueError('Invalid xref table')

        with pytest.raises(ExtractionError) as exc_info:
            await extract(b'%PDF-broken')

        assert exc_info.value.status_code == 502
        assert 'Invalid xref table' in exc_info.value.message

    def test_ocr_is_disabled(self):
        from pdfsum.modules.summaries.text_extractor.main import extraction_config

        assert extraction_config.ocr_backend is None
