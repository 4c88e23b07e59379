"""Data models for contrib-stats."""

from contrib_stats.models.commit import (
    AuthorContributions,
    AuthorMap,
    CommitRecord,
    RepoCommitCount,
)
from contrib_stats.models.issue import IssueCounts, IssueRecord, RepoIssueStats
from contrib_stats.models.report import AuthorReport, AuthorRoster, IssueReport

__all__ = [
    "IssueRecord",
    "IssueCounts",
    "RepoIssueStats",
    "CommitRecord",
    "AuthorContributions",
    "AuthorMap",
    "RepoCommitCount",
    "AuthorRoster",
    "IssueReport",
    "AuthorReport",
]
