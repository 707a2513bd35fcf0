"""Episode model for catalog episode records."""

from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..constants.api import UNKNOWN_NAME
from ..utils.normalization import apply_defaults


EPISODE_DEFAULTS: Dict[str, Any] = {
    "name": UNKNOWN_NAME,
    "air_date": UNKNOWN_NAME,
    "episode_code": UNKNOWN_NAME,
    "character_urls": (),
}


class Episode(BaseModel):
    """Pydantic model for an episode record from the catalog API."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Server-assigned episode ID")
    name: str = Field(default=UNKNOWN_NAME, description="Episode title")
    air_date: str = Field(default=UNKNOWN_NAME, description="Original air date as sent by the API")
    episode_code: str = Field(default=UNKNOWN_NAME, description="Season/episode code, e.g. S01E01")
    character_urls: Tuple[str, ...] = Field(
        default=(),
        description="URLs of the characters appearing in the episode"
    )

    @classmethod
    def from_api(cls, record: Mapping[str, Any]) -> "Episode":
        """Create an Episode from a raw API record, applying EPISODE_DEFAULTS."""
        values = {
            "id": record.get("id"),
            "name": record.get("name"),
            "air_date": record.get("air_date"),
            "episode_code": record.get("episode"),
            "character_urls": record.get("characters"),
        }
        return cls(**apply_defaults(values, EPISODE_DEFAULTS))
