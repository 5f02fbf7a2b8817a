# File: tests/conftest.py
import asyncio
import threading
from collections import Counter
from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from aiohttp import web

from pages import HOST, build_app


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, HOST, port)
    await site.start()
    try:
        yield f"http://{HOST}:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def hits() -> Counter:
    """Requests per path seen by ``archive_server``."""
    return Counter()


@pytest_asyncio.fixture
async def archive_server(unused_tcp_port: int, hits: Counter) -> AsyncIterator[str]:
    async for url in _serve_app(build_app(hits), unused_tcp_port):
        yield url


@pytest.fixture()
def threaded_server(unused_tcp_port: int) -> Iterator[str]:
    """Serve the test site from a background thread for the blocking API."""
    loop = asyncio.new_event_loop()
    runner = web.AppRunner(build_app())
    loop.run_until_complete(runner.setup())
    site = web.TCPSite(runner, HOST, unused_tcp_port)
    loop.run_until_complete(site.start())
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    try:
        yield f"http://{HOST}:{unused_tcp_port}"
    finally:
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=5)
        loop.run_until_complete(runner.cleanup())
        loop.close()
