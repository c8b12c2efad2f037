import asyncio

from .common import close_session


async def main():
    from .summaries import run as summaries_run

    success = True

    try:
        await summaries_run()
    except Exception as e:
        print(e)
        success = False
    finally:
        await close_session()

    if not success:
        raise Exception('E2E tests failed')


asyncio.run(main())
