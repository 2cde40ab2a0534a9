"""CLI for hpl-scoreboard."""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime

import click
from rich.console import Console

from hpl_scoreboard import __version__
from hpl_scoreboard.clients import HTTPScoresClient, MockScoresClient, generate_records
from hpl_scoreboard.config import ScoreboardConfig
from hpl_scoreboard.feed import FeedController
from hpl_scoreboard.reporters import JSONReporter, TableReporter

console = Console()


def load_config(**overrides: object) -> ScoreboardConfig:
    """Load config from the environment, then apply CLI overrides.

    Exits with status 1 on invalid values.
    """
    try:
        return ScoreboardConfig.from_env().with_overrides(**overrides)
    except ValueError as e:
        console.print(f"[bold red]Invalid configuration:[/bold red] {e}")
        sys.exit(1)


def build_client(config: ScoreboardConfig, mock_records: int | None = None):
    """Create the page source: the Scores API, or generated data for demos."""
    if mock_records is not None:
        return MockScoresClient(records=generate_records(mock_records), timeout=config.timeout)
    return HTTPScoresClient(base_url=config.base_url, timeout=config.timeout)


async def load_feed(client, config: ScoreboardConfig, pages: int | None = None):
    """Drive a fresh feed until exhausted (or ``pages`` pages) and close everything."""
    async with client:
        async with FeedController(
            client,
            page_size=config.page_size,
            max_failures=config.max_failures,
        ) as feed:
            return await feed.load_until_exhausted(max_pages=pages)


@click.group()
@click.version_option(version=__version__, prog_name="hpl-scoreboard")
def main() -> None:
    """HPL Performance Scoreboard - incremental leaderboard client."""
    pass


@main.command()
@click.option(
    "--base-url",
    type=str,
    default=None,
    help="Scores API root URL (env: HPL_SCOREBOARD_URL, default: http://localhost:8080).",
)
@click.option(
    "--page-size",
    type=int,
    default=None,
    help="Records per page (env: HPL_SCOREBOARD_PAGE_SIZE, default: 20).",
)
@click.option(
    "--pages",
    type=click.IntRange(min=1),
    default=None,
    help="Number of pages to load (default: until exhausted).",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Request timeout in seconds (env: HPL_SCOREBOARD_TIMEOUT, default: 10).",
)
@click.option(
    "--max-failures",
    type=click.IntRange(min=1),
    default=None,
    help="Consecutive failed fetches before giving up (default: 3).",
)
@click.option(
    "--mock",
    "mock_records",
    type=click.IntRange(min=0),
    default=None,
    help="Serve N generated submissions instead of calling the Scores API.",
)
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of leaderboard rows to print.",
)
@click.option(
    "--output-json",
    type=click.Path(),
    default=None,
    help="Path to save the loaded leaderboard as JSON.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def fetch(
    base_url: str | None,
    page_size: int | None,
    pages: int | None,
    timeout: float | None,
    max_failures: int | None,
    mock_records: int | None,
    limit: int | None,
    output_json: str | None,
    verbose: bool,
) -> None:
    """Load the leaderboard page by page and print it."""
    if verbose:
        logging.basicConfig(level=logging.INFO)

    config = load_config(
        base_url=base_url,
        page_size=page_size,
        timeout=timeout,
        max_failures=max_failures,
    )
    source = f"mock ({mock_records} records)" if mock_records is not None else config.scores_url

    console.print("[bold cyan]HPL Performance Scoreboard[/bold cyan]")
    console.print(f"Source: {source}")
    console.print(f"Page size: {config.page_size}\n")

    client = build_client(config, mock_records)
    snapshot = asyncio.run(load_feed(client, config, pages))

    if snapshot.last_successful_page == 0 and snapshot.last_error:
        console.print(f"[bold red]Error:[/bold red] {snapshot.last_error}")
        sys.exit(1)

    TableReporter.generate(snapshot, console=console, limit=limit)

    if output_json:
        JSONReporter.generate(
            snapshot,
            output_path=output_json,
            source=source,
            timestamp=datetime.now().isoformat(),
        )
        console.print(f"\n[bold]Saved JSON:[/bold] {output_json}")


@main.command()
@click.option("--base-url", type=str, default=None, help="Scores API root URL.")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds.")
def health(base_url: str | None, timeout: float | None) -> None:
    """Check that the Scores API is reachable."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = build_client(config)

    async def _probe() -> bool:
        async with client:
            return await client.health_check()

    if asyncio.run(_probe()):
        console.print(f"[green]✓[/green] {config.scores_url} is reachable")
    else:
        console.print(f"[bold red]✗[/bold red] {config.scores_url} is not reachable")
        sys.exit(1)


if __name__ == "__main__":
    main()
