"""Main branch commit collector service."""

import logging
from collections.abc import Iterable
from datetime import datetime

from contrib_stats.models.commit import AuthorContributions, AuthorMap, CommitRecord, RepoCommitCount
from contrib_stats.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


class CommitCollector:
    """Collects commits from the main branch of repositories owned by one account."""

    def __init__(self, rest_client: GitHubRestClient, owner: str, branch: str):
        self.rest_client = rest_client
        self.owner = owner
        self.branch = branch

    async def collect_commits(
        self,
        repo: str,
        since: datetime,
        until: datetime | None = None,
    ) -> list[CommitRecord]:
        """Collect main branch commits of ``repo`` committed at or after ``since``.

        Args:
            repo: Repository name
            since: Earliest commit date, applied by the API
            until: Optional latest commit date, applied by the API

        Returns:
            List of CommitRecord objects
        """
        logger.debug("Fetching %s commits for %s/%s since %s", self.branch, self.owner, repo, since)

        commits_data = await self.rest_client.list_commits(
            self.owner, repo, sha=self.branch, since=since, until=until
        )
        commits = [CommitRecord.from_api(c, repo=repo) for c in commits_data]

        logger.debug("Found %d commits in %s", len(commits), repo)

        return commits

    async def collect_authors(self, repo: str, since: datetime) -> AuthorMap:
        """Collect the commits of ``repo`` since ``since`` grouped by author."""
        return group_by_author(await self.collect_commits(repo, since))

    async def count_commits(self, repo: str, since: datetime, until: datetime) -> RepoCommitCount:
        """Count main branch commits of ``repo`` between ``since`` and ``until``."""
        commits_data = await self.rest_client.list_commits(
            self.owner, repo, sha=self.branch, since=since, until=until
        )
        return RepoCommitCount(repo=repo, count=len(commits_data))


def group_by_author(commits: Iterable[CommitRecord]) -> AuthorMap:
    """Group commits by author key.

    The display name is the git author name of the first commit seen for a key.
    """
    authors: AuthorMap = {}
    for commit in commits:
        if commit.author_key not in authors:
            authors[commit.author_key] = AuthorContributions(name=commit.author_name)
        authors[commit.author_key].commits.append(commit)
    return authors
