from pdfsum.logs import get_logger
from .common import expect_timeout, get, make_pdf, upload

log = get_logger(__name__)

# courtesy of https://www.gutenberg.org/files/2701/2701-h/2701-h.htm#link2HCH0001
moby_dick_lines = [
    'Call me Ishmael. Some years ago, never mind how long precisely, having little or no money',
    'in my purse, and nothing particular to interest me on shore, I thought I would sail about',
    'a little and see the watery part of the world. It is a way I have of driving off the spleen',
    'and regulating the circulation. This is my substitute for pistol and ball. With a',
    'philosophical flourish Cato throws himself upon his sword; I quietly take to the ship.',
]


async def check_health():
    resp = await get('api/health')
    assert resp.status == 200, log.error(f'Unexpected status code: {resp.status}')
    assert (await resp.json()) == {'ok': True}


async def summarize(content: bytes, **kwargs):
    resp = await upload('api/v1/summarize', content, **kwargs)

    return resp.status, await resp.json()


async def run():
    log.info('#### Running summaries e2e tests')

    log.info('GET api/health')
    await check_health()

    log.info('POST api/v1/summarize - not a pdf')
    status, body = await summarize(b'hello', content_type='application/pdf')
    assert status == 415, log.error(f'Unexpected status code: {status}')
    assert body['code'] == 'UNSUPPORTED_MEDIA_TYPE'

    log.info('POST api/v1/summarize - pdf without text')
    status, body = await summarize(make_pdf([]))
    assert status == 400, log.error(f'Unexpected status code: {status}')
    assert body['code'] == 'EMPTY_PDF'

    log.info('POST api/v1/summarize - summarize a pdf')
    status, body = await summarize(make_pdf(moby_dick_lines))

    if expect_timeout:
        assert status == 504, log.error(f'Unexpected status code: {status}')
        assert body['code'] == 'AI_TIMEOUT'
        return

    assert status == 200, log.error(f'Unexpected status code: {status} {body}')
    assert body['summary'], log.error('Empty summary')
    assert body['inputChars'] > 0
    log.info(f'Response ({body["model"]}, {body["durationMs"]}ms): {body["summary"]}')
