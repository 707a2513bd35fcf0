"""State snapshot for the character list session."""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .character import Character


class LoadingStatus(str, Enum):
    """Status of a list session."""

    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"


class SessionState(BaseModel):
    """Immutable snapshot of a list session, replaced on every transition."""

    model_config = ConfigDict(frozen=True)

    status: LoadingStatus = Field(default=LoadingStatus.IDLE, description="Current loading status")
    characters: Tuple[Character, ...] = Field(
        default=(),
        description="Accumulated results in append order across pages"
    )
    page: int = Field(default=1, description="Last successfully loaded page number")
    query: str = Field(default="", description="Active name filter, empty for unfiltered")
    next_url: Optional[str] = Field(default=None, description="Next-page cursor from the last envelope")
    is_fetching_next: bool = Field(default=False, description="True while a next-page fetch is outstanding")
    error_message: Optional[str] = Field(default=None, description="Message of the last failed fetch")

    @property
    def has_more(self) -> bool:
        return self.next_url is not None
