"""Issue and pull request data models."""

from datetime import datetime
from typing import Any, NamedTuple

from pydantic import BaseModel

from contrib_stats.date_range import parse_github_datetime


class IssueRecord(BaseModel):
    """Issue or pull request as returned by the Issues API."""

    number: int = 0
    created_at: datetime
    closed_at: datetime | None = None
    is_pull_request: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "IssueRecord":
        """Create from GitHub Issues API response.

        The Issues API lists pull requests too; those carry a ``pull_request`` key.
        """
        return cls(
            number=data.get("number", 0),
            created_at=parse_github_datetime(data.get("created_at")),
            closed_at=parse_github_datetime(data.get("closed_at")),
            is_pull_request="pull_request" in data,
        )


class IssueCounts(NamedTuple):
    """Counts of items opened, closed and still open for one month."""

    new: int = 0
    closed: int = 0
    current: int = 0

    def __str__(self) -> str:
        return f"{self.new}/{self.closed}/{self.current}"


class RepoIssueStats(BaseModel):
    """Issue/PR statistics and commit count for one repository."""

    repo: str
    issues: IssueCounts = IssueCounts()
    prs: IssueCounts = IssueCounts()
    commits: int = 0
