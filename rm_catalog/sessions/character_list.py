"""Incremental character list session.

The session owns the accumulated character list and drives the first-page,
next-page, refresh and search transitions. Each transition replaces the
``SessionState`` snapshot and notifies observers once.

Concurrency rules:
    - A first-page load (including ``refresh`` and ``search``) cancels any
      outstanding first-page or next-page fetch. The most recently issued
      load is the one that writes state.
    - ``load_next_page`` is dropped while another next-page fetch is in
      flight or when there is no next page.
    - Failures of either load become the error state. Only cancellation of
      the awaiting caller propagates.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Tuple

from ..errors import FETCH_ERRORS
from ..fetchers.pages import PageFetcher
from ..models.character import Character
from ..models.page import PageEnvelope
from ..models.session import LoadingStatus, SessionState
from ..utils.decoding import decode_many


logger = logging.getLogger(__name__)

Observer = Callable[[SessionState], None]


def describe_failure(error: Exception) -> str:
    """Human-readable message for a failed fetch."""
    return str(error) or type(error).__name__


def log_failure(message: str, error: Exception, *args) -> None:
    if isinstance(error, FETCH_ERRORS):
        logger.warning(f"{message}: %s", *args, describe_failure(error))
    else:
        logger.exception(message, *args)


class CharacterListSession:
    """State machine for a paginated, searchable character list."""

    def __init__(self, fetcher: PageFetcher):
        self._fetcher = fetcher
        self._state = SessionState()
        self._observers: List[Observer] = []
        self._first_page_task: Optional[asyncio.Task] = None
        self._next_page_task: Optional[asyncio.Task] = None

    # Observers

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a callable that unsubscribes it."""
        self._observers.append(observer)
        return lambda: self.unsubscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def get_state(self) -> SessionState:
        return self._state

    @property
    def characters(self) -> Tuple[Character, ...]:
        return self._state.characters

    @property
    def status(self) -> LoadingStatus:
        return self._state.status

    @property
    def error_message(self) -> Optional[str]:
        return self._state.error_message

    @property
    def has_more(self) -> bool:
        return self._state.has_more

    @property
    def page(self) -> int:
        return self._state.page

    @property
    def query(self) -> str:
        return self._state.query

    def _transition(self, **changes) -> SessionState:
        self._state = self._state.model_copy(update=changes)
        for observer in list(self._observers):
            try:
                observer(self._state)
            except Exception:
                logger.exception("Session observer %r failed", observer)
        return self._state

    # Fetching

    async def _fetch(self, page: int, query: str) -> Tuple[PageEnvelope, Tuple[Character, ...]]:
        envelope = await self._fetcher.fetch_page(page, query or None)
        characters = decode_many(Character, list(envelope.results), endpoint=self._fetcher.endpoint)
        return envelope, tuple(characters)

    def _cancel_pending(self) -> None:
        for task in (self._first_page_task, self._next_page_task):
            if task is not None and not task.done():
                task.cancel()
        self._first_page_task = None
        self._next_page_task = None

    # Transitions

    async def load_first_page(self, query: str = "") -> SessionState:
        """
        Reset the list and load page 1 for ``query``.

        Any fetch still outstanding from an earlier load is cancelled and its
        result discarded.

        Returns:
            The settled state (or the current one if this load was superseded)
        """
        self._cancel_pending()
        task = asyncio.ensure_future(self._fetch(1, query))
        self._first_page_task = task
        self._transition(
            status=LoadingStatus.LOADING,
            characters=(),
            page=1,
            query=query,
            next_url=None,
            is_fetching_next=False,
            error_message=None,
        )

        try:
            envelope, characters = await task
        except asyncio.CancelledError:
            if self._first_page_task is task:
                self._first_page_task = None
                self._transition(status=LoadingStatus.ERROR, error_message="Loading was cancelled")
                raise
            logger.debug("First page load for %r superseded", query)
            return self._state
        except Exception as e:
            if self._first_page_task is not task:
                return self._state
            self._first_page_task = None
            log_failure("Failed to load first page for %r", e, query)
            return self._transition(status=LoadingStatus.ERROR, error_message=describe_failure(e))

        if self._first_page_task is not task:
            return self._state
        self._first_page_task = None

        if not characters:
            return self._transition(status=LoadingStatus.EMPTY)
        return self._transition(
            status=LoadingStatus.IDLE,
            characters=characters,
            next_url=envelope.next_url,
        )

    async def load_next_page(self) -> SessionState:
        """
        Append the next page to the accumulated list.

        No-op when there is no next page or a next-page fetch is already in
        flight. Results from earlier pages are kept when the fetch fails.
        """
        state = self._state
        if state.next_url is None or state.is_fetching_next:
            return state

        page = state.page + 1
        task = asyncio.ensure_future(self._fetch(page, state.query))
        self._next_page_task = task
        self._transition(is_fetching_next=True)

        try:
            envelope, characters = await task
        except asyncio.CancelledError:
            if self._next_page_task is task:
                self._next_page_task = None
                self._transition(is_fetching_next=False)
                raise
            logger.debug("Next page %d for %r superseded", page, state.query)
            return self._state
        except Exception as e:
            if self._next_page_task is not task:
                return self._state
            self._next_page_task = None
            log_failure("Failed to load page %d for %r", e, page, state.query)
            return self._transition(
                status=LoadingStatus.ERROR,
                error_message=describe_failure(e),
                is_fetching_next=False,
            )

        if self._next_page_task is not task:
            return self._state
        self._next_page_task = None

        accumulated = self._state.characters + characters
        return self._transition(
            status=LoadingStatus.IDLE if accumulated else LoadingStatus.EMPTY,
            characters=accumulated,
            page=page,
            next_url=envelope.next_url,
            is_fetching_next=False,
            error_message=None,
        )

    async def refresh(self) -> SessionState:
        """Reload page 1 of the active query."""
        return await self.load_first_page(self._state.query)

    async def search(self, query: str) -> SessionState:
        """Load page 1 for a new name filter (surrounding whitespace ignored)."""
        return await self.load_first_page(query.strip())
