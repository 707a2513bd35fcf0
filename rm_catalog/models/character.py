"""Character model for catalog character records."""

from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..constants.api import UNKNOWN_NAME, UNKNOWN_VALUE
from ..utils.normalization import apply_defaults, nested_value


# Values substituted when a record omits a field or sends null
CHARACTER_DEFAULTS: Dict[str, Any] = {
    "name": UNKNOWN_NAME,
    "status": UNKNOWN_VALUE,
    "species": UNKNOWN_VALUE,
    "image": "",
    "location_name": UNKNOWN_VALUE,
    "episode_urls": (),
}


class Character(BaseModel):
    """Pydantic model for a character record from the catalog API."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Server-assigned character ID")
    name: str = Field(default=UNKNOWN_NAME, description="Character name")
    status: str = Field(default=UNKNOWN_VALUE, description="Alive, Dead or unknown")
    species: str = Field(default=UNKNOWN_VALUE, description="Species name")
    image: str = Field(default="", description="Avatar image URL")
    location_name: str = Field(default=UNKNOWN_VALUE, description="Name of the last known location")
    episode_urls: Tuple[str, ...] = Field(
        default=(),
        description="URLs of the episodes the character appears in"
    )

    @classmethod
    def from_api(cls, record: Mapping[str, Any]) -> "Character":
        """Create a Character from a raw API record, applying CHARACTER_DEFAULTS."""
        values = {
            "id": record.get("id"),
            "name": record.get("name"),
            "status": record.get("status"),
            "species": record.get("species"),
            "image": record.get("image"),
            "location_name": nested_value(record, "location", "name"),
            "episode_urls": record.get("episode"),
        }
        return cls(**apply_defaults(values, CHARACTER_DEFAULTS))
