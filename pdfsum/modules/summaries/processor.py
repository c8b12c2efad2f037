import asyncio
from collections.abc import Mapping
from typing import Any, Awaitable

from pdfsum.constants import MAX_PROMPT_CHARS
from pdfsum.env import summary_timeout_ms
from pdfsum.logs import get_logger
from pdfsum.modules.monitoring import SUMMARY_TIMEOUT_COUNTER

from .errors import AITimeoutError, classify_upstream_exception, EmptySummaryError, UpstreamError
from .llm_selector import LLMSelector
from .prompts.summary import summary_pdf
from .v1.models import SummaryResult

log = get_logger(__name__)


def build_prompt(text: str) -> str:
    # head truncation, the tail of very long documents is dropped
    truncated = text[:MAX_PROMPT_CHARS]

    if len(truncated) < len(text):
        log.info(f'Truncated input from {len(text)} to {len(truncated)} characters')

    return f'{summary_pdf}\n\n{truncated}'


def _get_field(response: Any, name: str) -> Any:
    if isinstance(response, Mapping):
        return response.get(name)

    return getattr(response, name, None)


def _join_content_parts(content: list) -> str | None:
    parts = []

    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, Mapping) and isinstance(part.get('text'), str):
            parts.append(part['text'])
        elif isinstance(part, Mapping):
            # non text blocks, e.g. tool calls or thinking signatures
            continue
        else:
            return None

    return ''.join(parts)


def coerce_response(response: Any, unwrap: bool = True) -> str:
    """
    Normalizes the value returned by the chat model to a string.

    Recognized shapes, in order:
      1. a plain string
      2. an object or mapping with a string `text` field
      3. an object with a callable `text` returning a string, or a value of shape 1, 2 or 4
      4. an object or mapping with a `content` field holding a string or a list of text parts

    Anything else is treated as a broken upstream contract.
    """

    if isinstance(response, str):
        return response

    text = _get_field(response, 'text')

    if isinstance(text, str):
        return text

    if callable(text):
        value = text()

        if isinstance(value, str):
            return value

        if unwrap and value is not None:
            return coerce_response(value, unwrap=False)

    content = _get_field(response, 'content')

    if isinstance(content, str):
        return content

    if isinstance(content, list):
        joined = _join_content_parts(content)

        if joined is not None:
            return joined

    raise UpstreamError(f'Unrecognized response shape from model: {type(response).__name__}')


def _discard_result(task: asyncio.Task) -> None:
    # retrieve the outcome of an abandoned call so it is never reported as unhandled
    if not task.cancelled():
        task.exception()


async def invoke_with_deadline(call: Awaitable, timeout: float) -> Any:
    """
    Races the upstream call against a timer; whichever settles first decides the outcome.

    When the timer wins, the call task is asked to cancel and is no longer awaited. Its result,
    if it ever produces one, is discarded.
    """

    task = asyncio.ensure_future(call)
    timer = asyncio.create_task(asyncio.sleep(timeout))

    try:
        done, _ = await asyncio.wait({task, timer}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        timer.cancel()

        if not task.done():
            task.add_done_callback(_discard_result)
            task.cancel()

    if task not in done:
        raise AITimeoutError()

    try:
        return task.result()
    except Exception as e:
        raise classify_upstream_exception(e) from e


async def summarize(text: str) -> SummaryResult:
    processor = LLMSelector.get_processor()
    model_name = LLMSelector.get_model_name(processor)
    llm = LLMSelector.select()

    prompt = build_prompt(text)
    timeout = summary_timeout_ms / 1000

    try:
        response = await invoke_with_deadline(llm.ainvoke(prompt), timeout)
    except AITimeoutError:
        log.warning(f'{processor.value} model {model_name} did not respond within {summary_timeout_ms}ms')
        SUMMARY_TIMEOUT_COUNTER.labels(processor=processor.value).inc()
        raise

    try:
        summary = coerce_response(response).strip()
    except UpstreamError:
        raise
    except Exception as e:
        raise classify_upstream_exception(e) from e

    if not summary:
        raise EmptySummaryError()

    log.info(f'input length: {len(prompt)}')
    log.info(f'output length: {len(summary)}')

    return SummaryResult(summary=summary, model=model_name)


__all__ = ['build_prompt', 'coerce_response', 'invoke_with_deadline', 'summarize']
