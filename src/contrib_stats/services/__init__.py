"""Services for GitHub data collection and aggregation."""

from contrib_stats.services.commit_collector import CommitCollector
from contrib_stats.services.github_rest_client import GitHubRestClient
from contrib_stats.services.issue_collector import IssueCollector

__all__ = [
    "GitHubRestClient",
    "IssueCollector",
    "CommitCollector",
]
