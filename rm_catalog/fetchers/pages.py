"""Paginated list fetcher for the character endpoint."""

import logging
from typing import Optional
from urllib.parse import urlencode

from pydantic import ValidationError

from ..constants.api import BASE_URL, CHARACTER_ENDPOINT, NAME_FILTER_PARAM, PAGE_PARAM
from ..errors import DecodeFailure, FetchFailure
from ..models.page import PageEnvelope
from ..utils.decoding import parse_json
from .transport import Transport


logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetch single pages of a list endpoint, optionally filtered by name."""

    def __init__(
        self,
        transport: Transport,
        base_url: str = BASE_URL,
        endpoint: str = CHARACTER_ENDPOINT,
    ):
        self.transport = transport
        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint

    def build_url(self, page: int, query: Optional[str] = None) -> str:
        params = {PAGE_PARAM: str(page)}
        if query:
            params[NAME_FILTER_PARAM] = query
        return f"{self.base_url}/{self.endpoint}?{urlencode(params)}"

    async def fetch_page(self, page: int = 1, query: Optional[str] = None) -> PageEnvelope:
        """
        Fetch one page of the list endpoint.

        Args:
            page: 1-based page number
            query: Name filter; omitted from the request when empty

        Returns:
            PageEnvelope with raw records. A 404 yields ``PageEnvelope.empty()``.

        Raises:
            ValueError: If page is less than 1
            FetchFailure: On any status other than 200 or 404
            DecodeFailure: If the body is not a ``{info, results}`` envelope
        """
        if page < 1:
            raise ValueError(f"Page numbers start at 1, got {page}")

        url = self.build_url(page, query)
        response = await self.transport.get(url)

        if response.status_code == 404:
            logger.debug("No results for %s", url)
            return PageEnvelope.empty()
        if response.status_code != 200:
            raise FetchFailure(self.endpoint, response.status_code)

        body = parse_json(response.body, self.endpoint)
        try:
            return PageEnvelope.model_validate(body)
        except ValidationError as e:
            raise DecodeFailure(f"Malformed page envelope from {self.endpoint}", endpoint=self.endpoint) from e
