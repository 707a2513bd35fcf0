"""CLI entry point for browsing the character catalog."""

import asyncio
import logging
import sys

import click

from .constants.api import BASE_URL, DEFAULT_TIMEOUT_SECONDS
from .errors import FETCH_ERRORS
from .fetchers.details import CatalogApi
from .models.character import Character
from .models.session import LoadingStatus, SessionState


def make_api(base_url: str, timeout: float) -> CatalogApi:
    """Build the API client used by every command."""
    return CatalogApi(base_url=base_url, timeout=timeout)


def format_character(character: Character) -> str:
    return (
        f"#{character.id} {character.name} "
        f"[{character.status}] {character.species} @ {character.location_name}"
    )


async def browse_characters(api: CatalogApi, query: str, pages: int) -> SessionState:
    """Load up to ``pages`` pages of characters matching ``query``."""
    async with api:
        session = api.character_list()
        state = await session.search(query)
        while state.status is LoadingStatus.IDLE and state.has_more and state.page < pages:
            state = await session.load_next_page()
        return state


async def _with_api(api: CatalogApi, load):
    async with api:
        return await load(api)


@click.group()
@click.option("--base-url", default=BASE_URL, help=f"Catalog API base URL (default: {BASE_URL})")
@click.option(
    "--timeout",
    default=DEFAULT_TIMEOUT_SECONDS,
    type=float,
    help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT_SECONDS})"
)
@click.option("--verbose", "-v", is_flag=True, help="Log requests to stderr")
@click.pass_context
def cli(ctx: click.Context, base_url: str, timeout: float, verbose: bool):
    """Rick & Morty catalog browser."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"base_url": base_url, "timeout": timeout}


@cli.command("characters")
@click.option("--query", "-q", default="", help="Filter characters by name")
@click.option(
    "--pages",
    default=1,
    type=click.IntRange(min=1),
    help="Number of pages to load (default: 1)"
)
@click.pass_obj
def characters(obj: dict, query: str, pages: int):
    """List characters, optionally filtered by name.

    Examples:

        rmcatalog characters

        rmcatalog characters --query rick --pages 2
    """
    api = make_api(obj["base_url"], obj["timeout"])
    state = asyncio.run(browse_characters(api, query, pages))

    if state.status is LoadingStatus.ERROR:
        click.echo(f"Error: {state.error_message}", err=True)
        sys.exit(1)
    if state.status is LoadingStatus.EMPTY:
        click.echo("No characters found")
        return

    for character in state.characters:
        click.echo(format_character(character))

    more = " (more available)" if state.has_more else ""
    click.echo(f"\n{len(state.characters)} characters from {state.page} page(s){more}")


@cli.command("character")
@click.argument("character_id", type=int)
@click.pass_obj
def character(obj: dict, character_id: int):
    """Show a character and the episodes it appears in.

    Examples:

        rmcatalog character 1
    """
    api = make_api(obj["base_url"], obj["timeout"])
    try:
        detail = asyncio.run(_with_api(api, lambda a: a.load_character_detail(character_id)))
    except FETCH_ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(format_character(detail.character))
    click.echo(f"Episodes ({len(detail.episodes)}):")
    for episode in detail.episodes:
        click.echo(f"  {episode.episode_code} {episode.name} ({episode.air_date})")


@cli.command("episode")
@click.argument("episode_id", type=int)
@click.pass_obj
def episode(obj: dict, episode_id: int):
    """Show an episode and the characters appearing in it.

    Examples:

        rmcatalog episode 28
    """
    api = make_api(obj["base_url"], obj["timeout"])
    try:
        detail = asyncio.run(_with_api(api, lambda a: a.load_episode_detail(episode_id)))
    except FETCH_ERRORS as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"{detail.episode.episode_code} {detail.episode.name} ({detail.episode.air_date})")
    click.echo(f"Characters ({len(detail.characters)}):")
    for entry in detail.characters:
        click.echo(f"  {format_character(entry)}")
