"""contrib-stats SDK - High-level API for monthly repository statistics."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from contrib_stats.config import Config, get_config
from contrib_stats.date_range import DateRange
from contrib_stats.exceptions import ContribStatsError
from contrib_stats.models.issue import RepoIssueStats
from contrib_stats.models.report import AuthorReport, IssueReport
from contrib_stats.services.author_aggregator import build_roster, merge_all
from contrib_stats.services.commit_collector import CommitCollector
from contrib_stats.services.github_rest_client import GitHubRestClient
from contrib_stats.services.issue_collector import IssueCollector, classify_issues

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContribStats:
    """High-level SDK for monthly contribution statistics.

    Every repository is fetched concurrently. A repository that fails (after
    the client's single rate limit retry) is left out of the report and
    recorded in its ``failures``; the others are still reported.

    Example usage:
        ```python
        from contrib_stats import ContribStats, resolve_date_range

        date_range = resolve_date_range(3, 2020)
        async with ContribStats() as stats:
            issues = await stats.issue_report(date_range)
            authors = await stats.author_report(date_range)
        ```

    Args:
        config: Configuration (defaults to the one loaded from the environment)
        rest_client: Client to fetch with; one is created from ``config`` if omitted
    """

    def __init__(
        self,
        config: Config | None = None,
        rest_client: GitHubRestClient | None = None,
    ):
        self._config = config or get_config()
        self._rest_client = rest_client
        self._owns_client = rest_client is None
        self._initialized = False

    @property
    def config(self) -> Config:
        return self._config

    @property
    def repos(self) -> tuple[str, ...]:
        return self._config.repos

    async def __aenter__(self) -> "ContribStats":
        """Async context manager entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Initialize the REST client."""
        if self._initialized:
            return

        if self._rest_client is None:
            self._rest_client = GitHubRestClient(config=self._config)

        self._initialized = True
        logger.debug(
            "ContribStats initialized (owner=%s, repos=%s, authenticated=%s)",
            self._config.owner,
            ", ".join(self._config.repos),
            self._config.is_authenticated,
        )

    async def close(self) -> None:
        """Close HTTP connections owned by this instance."""
        if self._rest_client and self._owns_client:
            await self._rest_client.close()
            self._rest_client = None
        self._initialized = False
        logger.debug("ContribStats closed")

    def _ensure_initialized(self) -> None:
        """Ensure the client is initialized."""
        if not self._initialized:
            raise ContribStatsError(
                "Client not initialized. Use 'async with ContribStats(...) as stats:'"
            )

    @property
    def rest_client(self) -> GitHubRestClient:
        self._ensure_initialized()
        return self._rest_client

    def _issue_collector(self) -> IssueCollector:
        return IssueCollector(self.rest_client, self._config.owner)

    def _commit_collector(self) -> CommitCollector:
        return CommitCollector(self.rest_client, self._config.owner, self._config.branch)

    async def _gather_by_repo(
        self,
        fetch: Callable[[str], Awaitable[T]],
    ) -> tuple[dict[str, T], dict[str, str]]:
        """Run ``fetch`` for every repository concurrently.

        Returns:
            (results, failures) keyed by repository name
        """
        repos: Sequence[str] = self._config.repos
        outcomes = await asyncio.gather(*(fetch(repo) for repo in repos), return_exceptions=True)

        results: dict[str, T] = {}
        failures: dict[str, str] = {}
        for repo, outcome in zip(repos, outcomes):
            if isinstance(outcome, Exception):
                logger.warning("Failed to fetch %s/%s: %s", self._config.owner, repo, outcome)
                failures[repo] = str(outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results[repo] = outcome
        return results, failures

    async def repo_issue_stats(self, repo: str, date_range: DateRange) -> RepoIssueStats:
        """Issue/PR counts and commit count of one repository for the analysis month."""
        self._ensure_initialized()
        tasks = (
            asyncio.create_task(self._issue_collector().collect_issues(repo)),
            asyncio.create_task(
                self._commit_collector().count_commits(
                    repo, date_range.range_start, date_range.range_end
                )
            ),
        )
        try:
            records, commit_count = await asyncio.gather(*tasks)
        except BaseException:
            # Cancel the sibling fetch of a failed repository
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        issues, prs = classify_issues(records, date_range)
        return RepoIssueStats(repo=repo, issues=issues, prs=prs, commits=commit_count.count)

    async def issue_report(self, date_range: DateRange) -> IssueReport:
        """Issue/PR and commit statistics for every configured repository.

        Args:
            date_range: Analysis month

        Returns:
            IssueReport listing repositories in configured order
        """
        self._ensure_initialized()
        logger.info("Collecting issue statistics for %d repositories", len(self.repos))

        results, failures = await self._gather_by_repo(
            lambda repo: self.repo_issue_stats(repo, date_range)
        )

        return IssueReport(
            date_range=date_range,
            repos=[results[repo] for repo in self.repos if repo in results],
            failures=failures,
        )

    async def author_report(self, date_range: DateRange) -> AuthorReport:
        """Active and new contributors across every configured repository.

        Commit histories are fetched from the start of the year so that authors
        with earlier commits are not reported as new.

        Args:
            date_range: Analysis month

        Returns:
            AuthorReport with the sorted roster
        """
        self._ensure_initialized()
        logger.info("Collecting commit history for %d repositories", len(self.repos))

        collector = self._commit_collector()
        results, failures = await self._gather_by_repo(
            lambda repo: collector.collect_authors(repo, date_range.year_start)
        )

        authors = merge_all(results[repo] for repo in self.repos if repo in results)
        logger.info("Merged commit history of %d authors", len(authors))

        return AuthorReport(
            date_range=date_range,
            roster=build_roster(authors, date_range),
            author_count=len(authors),
            failures=failures,
        )
