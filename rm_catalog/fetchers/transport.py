"""HTTP transport used by the catalog fetchers.

Fetchers only need ``get(url) -> TransportResponse``; anything providing that
coroutine can stand in for ``AiohttpTransport`` (tests use an in-memory fake).
"""

import logging
from typing import NamedTuple, Optional, Protocol

import aiohttp

from ..constants.api import DEFAULT_TIMEOUT_SECONDS


logger = logging.getLogger(__name__)


class TransportResponse(NamedTuple):
    """Status code and raw text body of a GET request."""

    status_code: int
    body: str


class Transport(Protocol):
    async def get(self, url: str) -> TransportResponse:
        ...


class AiohttpTransport:
    """Transport backed by a shared ``aiohttp.ClientSession``.

    The session is created lazily inside the running event loop. A session
    passed in by the caller is left open on ``close()``. Bodies that are not
    valid in their declared charset are decoded with replacement characters.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def get(self, url: str) -> TransportResponse:
        session = self._get_session()
        logger.debug("GET %s", url)
        async with session.get(url, timeout=self._timeout) as response:
            body = await response.text(errors="replace")
            logger.debug("GET %s -> %d", url, response.status)
            return TransportResponse(status_code=response.status, body=body)

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "AiohttpTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
