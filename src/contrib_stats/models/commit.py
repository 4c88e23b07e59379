"""Commit and author contribution models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from contrib_stats.date_range import parse_github_datetime


class CommitRecord(BaseModel):
    """Main branch commit attributed to an author."""

    repo: str
    sha: str
    author_key: str
    author_name: str | None = None
    date: datetime

    @classmethod
    def from_api(cls, data: dict[str, Any], repo: str) -> "CommitRecord":
        """Create from GitHub Commits API response.

        Commits linked to a GitHub account are keyed by login, the rest by the
        free-text author name from the git metadata.
        """
        commit_data = data.get("commit") or {}
        git_author = commit_data.get("author") or {}
        git_committer = commit_data.get("committer") or {}
        account = data.get("author")

        if account:
            key = account.get("login", "")
        else:
            key = git_author.get("name", "")

        return cls(
            repo=repo,
            sha=data.get("sha", ""),
            author_key=key,
            author_name=git_author.get("name"),
            date=parse_github_datetime(git_committer.get("date") or git_author.get("date")),
        )


class AuthorContributions(BaseModel):
    """All commits of one author across the analysed repositories."""

    name: str | None = None
    commits: list[CommitRecord] = Field(default_factory=list)


# author key -> contributions
AuthorMap = dict[str, AuthorContributions]


class RepoCommitCount(BaseModel):
    """Number of main branch commits in a date range."""

    repo: str
    count: int = 0
