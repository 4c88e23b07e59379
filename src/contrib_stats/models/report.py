"""Report models assembled from per-repository results."""

from pydantic import BaseModel, Field

from contrib_stats.date_range import DateRange
from contrib_stats.models.issue import RepoIssueStats


class AuthorRoster(BaseModel):
    """Display names of authors active in the month, and of those new this year."""

    active: list[str] = Field(default_factory=list)
    new: list[str] = Field(default_factory=list)


class IssueReport(BaseModel):
    """Issue/PR report for every repository that could be fetched."""

    date_range: DateRange
    repos: list[RepoIssueStats] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)  # repo -> error message


class AuthorReport(BaseModel):
    """Contributor report built from the repositories that could be fetched."""

    date_range: DateRange
    roster: AuthorRoster = Field(default_factory=AuthorRoster)
    author_count: int = 0  # authors seen since the start of the year
    failures: dict[str, str] = Field(default_factory=dict)  # repo -> error message
