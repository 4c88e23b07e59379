"""CLI interface for contrib-stats."""

import asyncio
import dataclasses
import logging
import time
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from contrib_stats import __version__
from contrib_stats.config import Config, get_config
from contrib_stats.date_range import DateRange, resolve_date_range
from contrib_stats.exceptions import InvalidDateRangeError
from contrib_stats.output.console import Console as OutputConsole
from contrib_stats.sdk import ContribStats
from contrib_stats.services.github_rest_client import GitHubRestClient
from contrib_stats.utils.rate_limiter import check_and_report_rate_limit, format_time_remaining

app = typer.Typer(
    name="contrib-stats",
    help="Monthly issue, pull request and contributor statistics for GitHub repositories",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"contrib-stats version {__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """contrib-stats - Monthly statistics for a fixed set of GitHub repositories."""
    pass


@app.command()
def stats(
    month: Optional[int] = typer.Option(
        None,
        "--month",
        "-m",
        help="The month to check",
    ),
    year: Optional[int] = typer.Option(
        None,
        "--year",
        "-y",
        help="The year to check (two digit years are read as 20YY)",
    ),
    authors: bool = typer.Option(
        False,
        "--authors",
        "-a",
        help="Output list of authors",
    ),
    issues: bool = typer.Option(
        False,
        "--issues",
        "-i",
        help="Output stats on issues/PRs",
    ),
    owner: Optional[str] = typer.Option(
        None,
        "--owner",
        help="Repository owner (overrides CONTRIB_STATS_OWNER)",
    ),
    repos: Optional[List[str]] = typer.Option(
        None,
        "--repo",
        "-r",
        help="Repository to analyze, may be repeated (overrides CONTRIB_STATS_REPOS)",
    ),
    branch: Optional[str] = typer.Option(
        None,
        "--branch",
        help="Branch commits are counted on (overrides CONTRIB_STATS_BRANCH)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Debug output",
    ),
):
    """Output statistics for one month.

    Examples:
        contrib-stats stats -m 3 -y 2020 --issues --authors
        contrib-stats stats -m 12 -y 19 -a
    """
    setup_logging(verbose=verbose, debug=debug)

    try:
        date_range = resolve_date_range(month, year)
    except InvalidDateRangeError as e:
        console.print(str(e), markup=False)
        raise typer.Exit(1)

    config = _apply_overrides(get_config(), owner=owner, repos=repos, branch=branch)
    output_console = OutputConsole()
    output_console.print_header(month, year, date_range)

    if not (issues or authors):
        output_console.print_warning("Nothing to report, pass --issues and/or --authors")
        return

    try:
        asyncio.run(
            _run_reports(
                config=config,
                date_range=date_range,
                issues=issues,
                authors=authors,
                output_console=output_console,
            )
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Analysis cancelled[/yellow]")
        raise typer.Exit(1)


def _apply_overrides(
    config: Config,
    owner: Optional[str] = None,
    repos: Optional[List[str]] = None,
    branch: Optional[str] = None,
) -> Config:
    """Return a copy of ``config`` with the CLI overrides applied."""
    return dataclasses.replace(
        config,
        owner=owner or config.owner,
        repos=tuple(repos) if repos else config.repos,
        branch=branch or config.branch,
    )


async def _run_reports(
    config: Config,
    date_range: DateRange,
    issues: bool,
    authors: bool,
    output_console: OutputConsole,
):
    """Run the requested reports asynchronously.

    Each report is fetched independently; a failure in one is printed and the
    other is still produced.
    """
    async with ContribStats(config=config) as client:
        rate_info = await _fetch_rate_limit(client.rest_client)
        if rate_info:
            check_and_report_rate_limit(rate_info, config.is_authenticated)

        jobs = []
        if issues:
            jobs.append(client.issue_report(date_range))
        if authors:
            jobs.append(client.author_report(date_range))

        reports = await asyncio.gather(*jobs, return_exceptions=True)

    printers = []
    if issues:
        printers.append(output_console.print_issue_report)
    if authors:
        printers.append(output_console.print_author_report)

    for printer, report in zip(printers, reports):
        if isinstance(report, Exception):
            logging.getLogger(__name__).warning("Report failed: %s", report)
            output_console.print_error(str(report))
        else:
            printer(report)


async def _fetch_rate_limit(rest_client: GitHubRestClient) -> dict | None:
    """Read the current quota, or None when it cannot be read."""
    try:
        return await rest_client.get_rate_limit()
    except Exception as e:
        console.print(f"[dim]Could not check rate limit: {escape(str(e))}[/dim]")
        return None


@app.command()
def check_token():
    """Check GitHub token configuration and rate limits."""
    config = get_config()

    if config.is_authenticated:
        console.print("[green]GitHub token is configured[/green]")
    else:
        console.print("[yellow]No GitHub token configured[/yellow]")

    rate_info = asyncio.run(_check_token(config))
    if rate_info:
        core = rate_info["core"]
        console.print(f"Rate limit: {core['remaining']}/{core['limit']} requests remaining")
        console.print(f"Resets in: {format_time_remaining(core['reset'] - time.time())}")

    if not config.is_authenticated:
        console.print()
        console.print("To configure a token:")
        console.print("  export GITHUB_TOKEN=your_token_here")
        console.print()
        console.print("Create a token at: https://github.com/settings/tokens")
        console.print("No special scopes needed for public data access.")


async def _check_token(config: Config) -> dict | None:
    async with GitHubRestClient(config=config) as rest_client:
        return await _fetch_rate_limit(rest_client)


if __name__ == "__main__":
    app()
