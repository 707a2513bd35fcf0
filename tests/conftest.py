"""Shared fixtures: an in-memory transport and sample API records."""

import asyncio
import json
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import pytest

from rm_catalog.fetchers.pages import PageFetcher
from rm_catalog.fetchers.transport import TransportResponse


BASE_URL = "http://catalog.test/api"


def page_url(page: int, name: Optional[str] = None) -> str:
    params = {"page": str(page)}
    if name:
        params["name"] = name
    return f"{BASE_URL}/character?{urlencode(params)}"


def page_body(results: List[Dict[str, Any]], next_url: Optional[str] = None) -> Dict[str, Any]:
    return {
        "info": {"count": len(results), "pages": 1, "next": next_url, "prev": None},
        "results": results,
    }


def character_record(character_id: int, name: str, **fields: Any) -> Dict[str, Any]:
    record = {
        "id": character_id,
        "name": name,
        "status": "Alive",
        "species": "Human",
        "image": f"{BASE_URL}/character/avatar/{character_id}.jpeg",
        "location": {"name": "Earth (C-137)", "url": f"{BASE_URL}/location/1"},
        "episode": [f"{BASE_URL}/episode/1", f"{BASE_URL}/episode/2"],
    }
    record.update(fields)
    return record


def episode_record(episode_id: int, name: str, **fields: Any) -> Dict[str, Any]:
    record = {
        "id": episode_id,
        "name": name,
        "air_date": "December 2, 2013",
        "episode": f"S01E{episode_id:02d}",
        "characters": [f"{BASE_URL}/character/1", f"{BASE_URL}/character/2"],
    }
    record.update(fields)
    return record


class FakeTransport:
    """Transport double that serves canned responses and records requested URLs.

    A route registered with a ``gate`` event blocks until the event is set,
    which lets tests hold a request in flight. A route registered with an
    ``error`` raises it instead of responding.
    """

    def __init__(self):
        self.requests: List[str] = []
        self._routes: Dict[str, tuple] = {}

    def add(
        self,
        url: str,
        body: Any = None,
        status: int = 200,
        gate: Optional[asyncio.Event] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        text = body if isinstance(body, str) else json.dumps(body)
        self._routes[url] = (status, text, gate, error)

    async def get(self, url: str) -> TransportResponse:
        self.requests.append(url)
        if url not in self._routes:
            raise AssertionError(f"Unexpected request: {url}")
        status, text, gate, error = self._routes[url]
        if gate is not None:
            await gate.wait()
        if error is not None:
            raise error
        return TransportResponse(status_code=status, body=text)

    async def close(self) -> None:
        pass


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def fetcher(transport: FakeTransport) -> PageFetcher:
    return PageFetcher(transport, base_url=BASE_URL)
