# web_archive/archiver/fetcher.py
"""
Fetcher module: thin aiohttp wrapper that downloads one URL at a time.

Status codes are returned as-is; interpreting them is up to the caller.
Transport failures surface as ``aiohttp.ClientError`` or ``asyncio.TimeoutError``.
"""
from __future__ import annotations

import codecs
from dataclasses import dataclass
from typing import Optional

from aiohttp import ClientSession, ClientTimeout, TCPConnector

from web_archive.config import ArchiveOptions
from web_archive.logger import logger


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Status, declared content type and raw body of one response."""

    url: str
    status: int
    content_type: Optional[str]
    body: bytes
    encoding: Optional[str] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        """Decode the body with the response encoding, replacing bad bytes."""
        encoding = self.encoding or "utf-8"
        try:
            codecs.lookup(encoding)
        except LookupError:
            encoding = "utf-8"
        return self.body.decode(encoding, errors="replace")


class Fetcher:
    """Owns the HTTP session for one archive run."""

    def __init__(self, options: ArchiveOptions) -> None:
        self.options = options
        self.session: Optional[ClientSession] = None
        self._proxy = str(options.proxy) if options.proxy is not None else None

    async def __aenter__(self) -> Fetcher:
        connector = TCPConnector(ssl=False if self.options.accept_invalid_certificates else True)
        self.session = ClientSession(
            connector=connector,
            timeout=ClientTimeout(total=self.options.timeout),
            headers={"User-Agent": self.options.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> FetchResponse:
        """GET *url* and read the whole body."""
        if not self.session:
            raise RuntimeError("Session not initialized")
        async with self.session.get(url, proxy=self._proxy) as resp:
            body = await resp.read()
            ctype = resp.headers.get("Content-Type")
            encoding = resp.get_encoding()
            logger.debug("GET %s -> %d (%s, %d bytes)", url, resp.status, ctype, len(body))
            return FetchResponse(url, resp.status, ctype, body, encoding)


__all__ = ["FetchResponse", "Fetcher"]
