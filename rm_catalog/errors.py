"""Error types raised by the catalog fetchers and codec."""

import asyncio
from typing import Optional

import aiohttp


class CatalogError(Exception):
    """Base class for catalog access failures."""


class FetchFailure(CatalogError):
    """A request returned a status that is neither success nor an empty page."""

    def __init__(self, endpoint: str, status_code: int, message: Optional[str] = None):
        self.endpoint = endpoint
        self.status_code = status_code
        super().__init__(message or f"Failed to load {endpoint}: HTTP {status_code}")


class DecodeFailure(CatalogError):
    """A response body could not be decoded into the expected shape."""

    def __init__(self, message: str, endpoint: Optional[str] = None):
        self.endpoint = endpoint
        super().__init__(message)


# Expected failures of a catalog request, including transport-level ones
FETCH_ERRORS = (CatalogError, aiohttp.ClientError, asyncio.TimeoutError)
