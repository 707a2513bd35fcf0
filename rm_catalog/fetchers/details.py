"""Catalog API facade: single-entity lookups and detail flows."""

import logging
from typing import Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field

from ..constants.api import BASE_URL, CHARACTER_ENDPOINT, DEFAULT_TIMEOUT_SECONDS, EPISODE_ENDPOINT
from ..errors import FetchFailure
from ..models.character import Character
from ..models.episode import Episode
from ..sessions.character_list import CharacterListSession
from ..utils.decoding import EntityModel, parse_json, try_decode
from .pages import PageFetcher
from .references import ReferenceResolver
from .transport import AiohttpTransport, Transport


logger = logging.getLogger(__name__)


class CharacterDetail(BaseModel):
    """A character together with the episodes it appears in."""

    model_config = ConfigDict(frozen=True)

    character: Character = Field(description="The requested character")
    episodes: Tuple[Episode, ...] = Field(default=(), description="Resolved episode references")


class EpisodeDetail(BaseModel):
    """An episode together with the characters appearing in it."""

    model_config = ConfigDict(frozen=True)

    episode: Episode = Field(description="The requested episode")
    characters: Tuple[Character, ...] = Field(default=(), description="Resolved character references")


class CatalogApi:
    """Entry point wiring a transport to the fetchers and list sessions.

    Detail lookups propagate ``CatalogError`` and transport errors to the
    caller; only list sessions convert failures into state.
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else AiohttpTransport(timeout=timeout)
        self.base_url = base_url.rstrip("/")
        self.pages = PageFetcher(self.transport, self.base_url, CHARACTER_ENDPOINT)
        self.references = ReferenceResolver(self.transport, self.base_url)

    def character_list(self) -> CharacterListSession:
        """Create a new, unloaded character list session."""
        return CharacterListSession(self.pages)

    async def _fetch_one(self, model: Type[EntityModel], endpoint: str, entity_id: int) -> EntityModel:
        response = await self.transport.get(f"{self.base_url}/{endpoint}/{entity_id}")
        if response.status_code != 200:
            raise FetchFailure(endpoint, response.status_code)
        return try_decode(model, parse_json(response.body, endpoint), endpoint).unwrap()

    async def fetch_character(self, character_id: int) -> Character:
        return await self._fetch_one(Character, CHARACTER_ENDPOINT, character_id)

    async def fetch_episode(self, episode_id: int) -> Episode:
        return await self._fetch_one(Episode, EPISODE_ENDPOINT, episode_id)

    async def load_character_detail(self, character_id: int) -> CharacterDetail:
        """Fetch a character, then its episodes in one batched request."""
        character = await self.fetch_character(character_id)
        episodes = await self.references.resolve_episodes(character.episode_urls)
        logger.debug("Character %d appears in %d episodes", character.id, len(episodes))
        return CharacterDetail(character=character, episodes=tuple(episodes))

    async def load_episode_detail(self, episode_id: int) -> EpisodeDetail:
        """Fetch an episode, then its characters in one batched request."""
        episode = await self.fetch_episode(episode_id)
        characters = await self.references.resolve_characters(episode.character_urls)
        logger.debug("Episode %d has %d characters", episode.id, len(characters))
        return EpisodeDetail(episode=episode, characters=tuple(characters))

    async def close(self) -> None:
        """Close the transport if this API created it."""
        if self._owns_transport:
            await self.transport.close()

    async def __aenter__(self) -> "CatalogApi":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
