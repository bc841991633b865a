"""CLI commands for linkgnome.

This module implements the ``link`` command: discover media under the source
directories, resolve titles against TMDB and hardlink every file into a
Plex-style library under the destination.
- Uses Typer for declarative CLI structure and option parsing.
- All output is routed through Rich Console.
- Options not given on the command line fall back to LINKGNOME_* environment
  variables and the config file (see ``linkgnome.utils.config``).

Exit codes: 0 on success (including per-link failures, which are reported in
the summary), 1 on configuration errors.
"""

import asyncio
from collections import Counter
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Annotated, List, Optional, Tuple

import typer
from pydantic import ValidationError
from rich.table import Table

from linkgnome.cli import app, console
from linkgnome.core.pipeline import link_media, open_resolver
from linkgnome.fs.operations import create_link
from linkgnome.metadata.settings import Settings
from linkgnome.models.core import Link, LinkStatus
from linkgnome.models.options import (
    DEFAULT_BURST,
    DEFAULT_EXTENSIONS,
    DEFAULT_RATE_LIMIT,
    DEFAULT_WORKERS,
    LinkOptions,
)
from linkgnome.utils.config import ConfigError, resolve_setting
from linkgnome.utils.debug import setup_logger


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


_STATUS_STYLE = {
    LinkStatus.CREATED: "green",
    LinkStatus.EXISTS: "yellow",
    LinkStatus.FAILED: "red",
    LinkStatus.PLANNED: "cyan",
}


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse ``YYYY-MM-DD``, ``M/D``, ``M-D`` or ``MM/DD``.

    Month/day forms are taken to be in the current year.

    Raises:
        typer.BadParameter: If *value* matches none of the formats.
    """
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        pass
    year = datetime.now().year
    for sep in ("/", "-"):
        try:
            return datetime.strptime(f"{value}{sep}{year}", f"%m{sep}%d{sep}%Y")
        except ValueError:
            continue
    raise typer.BadParameter(
        f"invalid date {value!r}; expected YYYY-MM-DD, M/D, M-D or MM/DD"
    )


SOURCES = Annotated[
    Optional[List[Path]],
    typer.Argument(help="Directories to discover media in (default: current directory)"),
]
DEST = Annotated[
    Optional[Path],
    typer.Option("--dest", "-d", help="Library root to link into"),
]
DRY_RUN = Annotated[
    bool,
    typer.Option("--dry-run", "-n", help="Show the links that would be created"),
]
KEEP_TITLE_CASE = Annotated[
    bool,
    typer.Option("--keep-title-case", "-k", help="Do not title-case parsed titles"),
]
EXTENSIONS = Annotated[
    Optional[List[str]],
    typer.Option("--extensions", "-e", help="File extensions to include (repeatable)"),
]
EXCLUDE = Annotated[
    Optional[List[str]],
    typer.Option("--exclude", "-x", help="Regex of file or directory names to skip"),
]
EXCLUDE_COUNTRIES = Annotated[
    Optional[List[str]],
    typer.Option("--exclude-countries", help="Origin country codes to skip"),
]
API_KEY = Annotated[
    Optional[str],
    typer.Option("--api-key", help="TMDB API key (default: TMDB_API_KEY)"),
]
NO_TV = Annotated[bool, typer.Option("--no-tv", help="Skip TV episodes")]
NO_MOVIES = Annotated[bool, typer.Option("--no-movies", help="Skip movies")]
BEFORE = Annotated[
    Optional[str],
    typer.Option("--before", help="Only files modified before this date"),
]
AFTER = Annotated[
    Optional[str],
    typer.Option("--after", help="Only files modified after this date"),
]
RATE = Annotated[
    Optional[float],
    typer.Option("--rate", help="TMDB requests per second"),
]
BURST = Annotated[
    Optional[int],
    typer.Option("--burst", help="TMDB request burst size"),
]
WORKERS = Annotated[
    Optional[int],
    typer.Option("--workers", help="Files processed concurrently"),
]
VERBOSE = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable debug logging"),
]


async def _run(options: LinkOptions, *, dry_run: bool) -> List[Tuple[Link, LinkStatus]]:
    results: List[Tuple[Link, LinkStatus]] = []
    async with open_resolver(options) as resolver:
        async for link in link_media(options, resolver=resolver):
            status = await asyncio.to_thread(create_link, link, dry_run=dry_run)
            results.append((link, status))
    return results


def _render(results: List[Tuple[Link, LinkStatus]], destination: Path) -> None:
    table = Table(title="Links")
    table.add_column("Source", overflow="fold")
    table.add_column("Target", overflow="fold")
    table.add_column("Status")
    for link, status in sorted(results, key=lambda r: str(r[0].target)):
        try:
            target = link.target.relative_to(destination)
        except ValueError:
            target = link.target
        style = _STATUS_STYLE[status]
        table.add_row(str(link.source), str(target), f"[{style}]{status.value}[/{style}]")
    console.print(table)


def _summary(results: List[Tuple[Link, LinkStatus]]) -> str:
    counts = Counter(status for _, status in results)
    parts = [f"{counts[s]} {s.value}" for s in LinkStatus if counts[s]]
    return ", ".join(parts) if parts else "no media found"


@app.command()
def link(  # noqa: PLR0913
    sources: SOURCES = None,
    dest: DEST = None,
    dry_run: DRY_RUN = False,
    keep_title_case: KEEP_TITLE_CASE = False,
    extensions: EXTENSIONS = None,
    exclude: EXCLUDE = None,
    exclude_countries: EXCLUDE_COUNTRIES = None,
    api_key: API_KEY = None,
    no_tv: NO_TV = False,
    no_movies: NO_MOVIES = False,
    before: BEFORE = None,
    after: AFTER = None,
    rate: RATE = None,
    burst: BURST = None,
    workers: WORKERS = None,
    verbose: VERBOSE = False,
) -> None:
    """Hardlink media files from SOURCES into a Plex-style library."""
    setup_logger(verbose)
    try:
        destination = resolve_setting("destination", default=None, cli_value=dest)
        if destination is None:
            console.print(
                "[red]Error: no destination given; pass --dest or set "
                "LINKGNOME_DESTINATION[/red]"
            )
            raise typer.Exit(ExitCode.ERROR)

        options = LinkOptions(
            destination=Path(destination),
            sources=sources or [Path("./")],
            extensions=resolve_setting(
                "extensions", default=sorted(DEFAULT_EXTENSIONS), cli_value=extensions
            ),
            excludes=resolve_setting("exclude", default=[], cli_value=exclude),
            modified_after=_parse_date(after),
            modified_before=_parse_date(before),
            api_key=api_key or Settings().TMDB_API_KEY,
            keep_title_case=keep_title_case,
            exclude_movies=no_movies,
            exclude_tv=no_tv,
            exclude_countries=set(exclude_countries or []),
            rate_limit=resolve_setting(
                "tmdb.rate_limit", default=DEFAULT_RATE_LIMIT, cli_value=rate
            ),
            burst=resolve_setting("tmdb.burst", default=DEFAULT_BURST, cli_value=burst),
            workers=resolve_setting("workers", default=DEFAULT_WORKERS, cli_value=workers),
        )
    except (ConfigError, typer.BadParameter, ValidationError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(ExitCode.ERROR)

    results = asyncio.run(_run(options, dry_run=dry_run))

    if dry_run:
        _render(results, options.destination)
    elif any(status is LinkStatus.FAILED for _, status in results):
        _render([r for r in results if r[1] is LinkStatus.FAILED], options.destination)
    console.print(f"[bold]Done:[/bold] {_summary(results)}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
