from argparse import ArgumentParser

import aiohttp


session = None
parser = ArgumentParser()
parser.add_argument('-u', '--url', dest='url', help='pdfsum url', default='http://localhost:8000')
parser.add_argument(
    '-expect-timeout',
    '--expect-timeout',
    dest='expect_timeout',
    help='the server runs with a timeout too short for the model to answer',
    action='store_true',
)

args = parser.parse_args()
base_url = args.url
expect_timeout = args.expect_timeout


def get_session():
    global session

    if session is None:
        session = aiohttp.ClientSession()

    return session


async def close_session():
    if session is not None:
        await session.close()


async def get(path):
    url = f'{base_url}/{path}'

    return await get_session().get(url)


async def upload(path, content: bytes, filename='document.pdf', content_type='application/pdf'):
    url = f'{base_url}/{path}'
    data = aiohttp.FormData()
    data.add_field('file', content, filename=filename, content_type=content_type)

    return await get_session().post(url, data=data)


def _escape(text: str) -> str:
    return text.replace('\\', '\\\\').replace('(', '\\(').replace(')', '\\)')


def make_pdf(lines: list[str]) -> bytes:
    '''
    Builds a single page pdf with one line of Helvetica text per entry.
    '''

    operations = ['BT', '/F1 12 Tf', '14 TL', '72 720 Td']
    operations += [f'({_escape(line)}) Tj T*' for line in lines]
    operations.append('ET')
    stream = '\n'.join(operations).encode('latin-1')

    objects = [
        b'<< /Type /Catalog /Pages 2 0 R >>',
        b'<< /Type /Pages /Kids [3 0 R] /Count 1 >>',
        b'<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R '
        b'/Resources << /Font << /F1 5 0 R >> >> >>',
        b'<< /Length ' + str(len(stream)).encode() + b' >>\nstream\n' + stream + b'\nendstream',
        b'<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>',
    ]

    pdf = b'%PDF-1.4\n'
    offsets = []

    for number, body in enumerate(objects, start=1):
        offsets.append(len(pdf))
        pdf += f'{number} 0 obj\n'.encode() + body + b'\nendobj\n'

    xref_offset = len(pdf)
    pdf += f'xref\n0 {len(objects) + 1}\n'.encode()
    pdf += b'0000000000 65535 f \n'
    pdf += b''.join(f'{offset:010d} 00000 n \n'.encode() for offset in offsets)
    pdf += f'trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_offset}\n%%EOF\n'.encode()

    return pdf


__all__ = ['close_session', 'expect_timeout', 'get', 'make_pdf', 'upload']
