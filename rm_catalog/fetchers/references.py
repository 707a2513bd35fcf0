"""Batched resolution of cross-reference URLs."""

import logging
from typing import List, Sequence, Type

from ..constants.api import BASE_URL, CHARACTER_ENDPOINT, EPISODE_ENDPOINT
from ..errors import FetchFailure
from ..models.character import Character
from ..models.episode import Episode
from ..utils.decoding import EntityModel, decode_many, parse_json
from ..utils.references import unique_reference_ids
from .transport import Transport


logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Resolve lists of entity URLs with a single batched request per call."""

    def __init__(self, transport: Transport, base_url: str = BASE_URL):
        self.transport = transport
        self.base_url = base_url.rstrip("/")

    async def resolve(
        self,
        urls: Sequence[str],
        model: Type[EntityModel],
        endpoint: str,
    ) -> List[EntityModel]:
        """
        Fetch every entity referenced by ``urls`` in one request.

        Identifiers are taken from the trailing path segment of each URL and
        deduplicated. The result follows server order; callers should match
        entities by ``id`` rather than by position.

        Args:
            urls: Cross-reference URLs pointing at ``endpoint`` entities
            model: Model to decode the response into
            endpoint: Collection endpoint name, e.g. ``"episode"``

        Returns:
            Decoded entities, empty without any request when ``urls`` is empty

        Raises:
            FetchFailure: On a non-200 response
            DecodeFailure: If the body is neither a record nor a list of records
        """
        if not urls:
            return []

        ids = unique_reference_ids(urls)
        if not ids:
            return []

        url = f"{self.base_url}/{endpoint}/{','.join(ids)}"
        logger.debug("Resolving %d %s references (%d unique)", len(urls), endpoint, len(ids))
        response = await self.transport.get(url)
        if response.status_code != 200:
            raise FetchFailure(endpoint, response.status_code)

        return decode_many(model, parse_json(response.body, endpoint), endpoint=endpoint)

    async def resolve_characters(self, urls: Sequence[str]) -> List[Character]:
        return await self.resolve(urls, Character, CHARACTER_ENDPOINT)

    async def resolve_episodes(self, urls: Sequence[str]) -> List[Episode]:
        return await self.resolve(urls, Episode, EPISODE_ENDPOINT)
