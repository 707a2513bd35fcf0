"""Pydantic models for the paginated list envelope."""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class PageInfo(BaseModel):
    """Pagination metadata sent alongside list results."""

    model_config = ConfigDict(frozen=True)

    count: Optional[int] = Field(default=None, description="Total number of matching records")
    pages: Optional[int] = Field(default=None, description="Total number of pages")
    next: Optional[str] = Field(default=None, description="URL of the next page, null on the last page")
    prev: Optional[str] = Field(default=None, description="URL of the previous page")


class PageEnvelope(BaseModel):
    """A single page of list results: ``{info, results}``."""

    model_config = ConfigDict(frozen=True)

    info: Optional[PageInfo] = Field(default=None, description="Pagination metadata, null for empty pages")
    results: Tuple[Dict[str, Any], ...] = Field(..., description="Raw entity records in server order")

    @classmethod
    def empty(cls) -> "PageEnvelope":
        """The envelope returned for a 404 (no matches or past the last page)."""
        return cls(info=None, results=())

    @property
    def next_url(self) -> Optional[str]:
        """Next-page cursor, or None when this is the last page."""
        return self.info.next if self.info else None

    @property
    def has_more(self) -> bool:
        return self.next_url is not None
