import asyncio
from types import SimpleNamespace

import pytest

from pdfsum.constants import MAX_PROMPT_CHARS, Processors
from pdfsum.modules.summaries.errors import (
    AITimeoutError,
    ConfigurationError,
    EmptySummaryError,
    UpstreamError,
)


class FakeModel:
    def __init__(self, response=None, delay=0.0, error=None):
        self.response = response
        self.delay = delay
        self.error = error
        self.prompts = []
        self.finished = False

    async def ainvoke(self, prompt):
        self.prompts.append(prompt)
        await asyncio.sleep(self.delay)
        self.finished = True

        if self.error:
            raise self.error

        return self.response


@pytest.fixture()
def summarize_fixture(mocker):
    mocker.patch('pdfsum.modules.summaries.processor.summary_timeout_ms', 1000)
    mocker.patch('pdfsum.modules.summaries.processor.LLMSelector.get_processor', return_value=Processors.GEMINI)
    mocker.patch('pdfsum.modules.summaries.processor.LLMSelector.get_model_name', return_value='gemini-test')
    mocker.patch('pdfsum.modules.summaries.processor.SUMMARY_TIMEOUT_COUNTER')

    def use_model(model):
        mocker.patch('pdfsum.modules.summaries.processor.LLMSelector.select', return_value=model)
        return model

    return use_model


class TestBuildPrompt:
    def test_prefixes_instructions(self):
        from pdfsum.modules.summaries.processor import build_prompt
        from pdfsum.modules.summaries.prompts.summary import summary_pdf

        assert build_prompt('Some text') == f'{summary_pdf}\n\nSome text'

    def test_head_truncation(self):
        from pdfsum.modules.summaries.processor import build_prompt

        text = 'a' * MAX_PROMPT_CHARS + 'TAIL'
        prompt = build_prompt(text)

        assert prompt.endswith('a' * MAX_PROMPT_CHARS)
        assert 'TAIL' not in prompt


class TestCoerceResponse:
    def test_plain_string(self):
        from pdfsum.modules.summaries.processor import coerce_response

        assert coerce_response('Point A.') == 'Point A.'

    def test_string_field(self):
        from pdfsum.modules.summaries.processor import coerce_response

        assert coerce_response(SimpleNamespace(text='Point A.')) == 'Point A.'
        assert coerce_response({'text': 'Point B.'}) == 'Point B.'

    def test_callable_field(self):
        from pdfsum.modules.summaries.processor import coerce_response

        assert coerce_response(SimpleNamespace(text=lambda: 'Point A.')) == 'Point A.'

    def test_callable_field_returning_wrapper(self):
        from pdfsum.modules.summaries.processor import coerce_response

        wrapped = SimpleNamespace(text=lambda: SimpleNamespace(text='Point A.'))

        assert coerce_response(wrapped) == 'Point A.'

    def test_message_content(self):
        from pdfsum.modules.summaries.processor import coerce_response

        assert coerce_response(SimpleNamespace(content='Point A.')) == 'Point A.'

        parts = SimpleNamespace(content=['Point A. ', {'type': 'text', 'text': 'Point B.'}, {'type': 'thinking'}])
        assert coerce_response(parts) == 'Point A. Point B.'

    @pytest.mark.parametrize('response', [None, 42, SimpleNamespace(answer='Point A.'), SimpleNamespace(content=[1])])
    def test_unrecognized_shape(self, response):
        '''Unknown shapes fail loudly instead of being stringified.'''

        from pdfsum.modules.summaries.processor import coerce_response

        with pytest.raises(UpstreamError, match='Unrecognized response shape'):
            coerce_response(response)


class TestInvokeWithDeadline:
    @pytest.mark.asyncio
    async def test_call_wins(self):
        from pdfsum.modules.summaries.processor import invoke_with_deadline

        model = FakeModel(response='done', delay=0.01)

        assert await invoke_with_deadline(model.ainvoke('prompt'), 1) == 'done'

    @pytest.mark.asyncio
    async def test_timer_wins_exactly_once(self):
        '''The late result of an abandoned call never reaches the caller.'''

        from pdfsum.modules.summaries.processor import invoke_with_deadline

        model = FakeModel(response='too late', delay=0.2)

        with pytest.raises(AITimeoutError):
            await invoke_with_deadline(model.ainvoke('prompt'), 0.05)

        await asyncio.sleep(0.3)

        assert not model.finished

    @pytest.mark.asyncio
    async def test_upstream_error_is_classified(self):
        from pdfsum.modules.summaries.processor import invoke_with_deadline

        model = FakeModel(error=RuntimeError('500 internal'))

        with pytest.raises(UpstreamError, match='500 internal'):
            await invoke_with_deadline(model.ainvoke('prompt'), 1)

    @pytest.mark.asyncio
    async def test_upstream_timeout_message_is_classified(self):
        from pdfsum.modules.summaries.processor import invoke_with_deadline

        model = FakeModel(error=RuntimeError('Deadline: request aborted'))

        with pytest.raises(AITimeoutError):
            await invoke_with_deadline(model.ainvoke('prompt'), 1)


class TestSummarize:
    @pytest.mark.asyncio
    async def test_summarize(self, summarize_fixture):
        from pdfsum.modules.summaries.processor import summarize
        from pdfsum.modules.summaries.prompts.summary import summary_pdf

        model = summarize_fixture(FakeModel(response=SimpleNamespace(content='  Point A. Point B.\n')))

        result = await summarize('Document text')

        assert result.summary == 'Point A. Point B.'
        assert result.model == 'gemini-test'
        assert model.prompts == [f'{summary_pdf}\n\nDocument text']

    @pytest.mark.asyncio
    async def test_empty_summary(self, summarize_fixture):
        from pdfsum.modules.summaries.processor import summarize

        summarize_fixture(FakeModel(response='   \n'))

        with pytest.raises(EmptySummaryError):
            await summarize('Document text')

    @pytest.mark.asyncio
    async def test_failing_text_accessor(self, summarize_fixture):
        '''An sdk response whose text accessor raises is an upstream failure.'''

        from pdfsum.modules.summaries.processor import summarize

        def text():
            raise ValueError('response blocked by safety filter')

        summarize_fixture(FakeModel(response=SimpleNamespace(text=text)))

        with pytest.raises(UpstreamError, match='response blocked by safety filter') as exc_info:
            await summarize('Document text')

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_timeout(self, summarize_fixture, mocker):
        from pdfsum.modules.summaries.processor import SUMMARY_TIMEOUT_COUNTER, summarize

        mocker.patch('pdfsum.modules.summaries.processor.summary_timeout_ms', 50)
        summarize_fixture(FakeModel(response='too late', delay=10))

        with pytest.raises(AITimeoutError):
            await summarize('Document text')

        SUMMARY_TIMEOUT_COUNTER.labels.assert_called_once_with(processor='GEMINI')

    @pytest.mark.asyncio
    async def test_configuration_checked_before_call(self, summarize_fixture, mocker):
        from pdfsum.modules.summaries.processor import summarize

        mocker.patch(
            'pdfsum.modules.summaries.processor.LLMSelector.select',
            side_effect=ConfigurationError('GEMINI_API_KEY is missing'),
        )

        with pytest.raises(ConfigurationError):
            await summarize('Document text')
