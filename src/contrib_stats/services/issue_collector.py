"""Issue and pull request collector service."""

import logging
from collections.abc import Iterable

from contrib_stats.date_range import DateRange
from contrib_stats.models.issue import IssueCounts, IssueRecord
from contrib_stats.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


class IssueCollector:
    """Collects the issues and pull requests of repositories owned by one account."""

    def __init__(self, rest_client: GitHubRestClient, owner: str):
        self.rest_client = rest_client
        self.owner = owner

    async def collect_issues(self, repo: str) -> list[IssueRecord]:
        """Collect every issue and pull request of ``repo``, open or closed.

        No date filtering happens here; see ``classify_issues``.
        """
        logger.debug("Fetching issues for %s/%s", self.owner, repo)

        issues_data = await self.rest_client.list_issues(self.owner, repo)
        issues = [IssueRecord.from_api(i) for i in issues_data]

        logger.debug("Found %d issues and pull requests in %s", len(issues), repo)

        return issues


def classify_issues(
    records: Iterable[IssueRecord],
    date_range: DateRange,
) -> tuple[IssueCounts, IssueCounts]:
    """Count new, closed and currently open items for the analysis month.

    An item is "current" when it was created before the end of the month and
    has no closing timestamp at all.

    Returns:
        (issues, prs) counts
    """
    counts = {
        False: [0, 0, 0],  # issues
        True: [0, 0, 0],  # pull requests
    }

    for record in records:
        bucket = counts[record.is_pull_request]
        if date_range.in_range(record.created_at):
            bucket[0] += 1
        if date_range.in_range(record.closed_at):
            bucket[1] += 1
        if record.created_at < date_range.range_end and record.closed_at is None:
            bucket[2] += 1

    return IssueCounts(*counts[False]), IssueCounts(*counts[True])
