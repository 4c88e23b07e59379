"""contrib-stats - Monthly contribution statistics for a set of GitHub repositories.

For every configured repository this package reports, for one month:
- issues and pull requests opened, closed and still open
- commits on the main branch
- authors active in the month, and which of them are new this year

Example usage:
    ```python
    from contrib_stats import ContribStats, resolve_date_range

    async with ContribStats() as stats:
        report = await stats.author_report(resolve_date_range(3, 2020))
        print(f"New contributors: {', '.join(report.roster.new)}")
    ```
"""

from importlib.metadata import PackageNotFoundError, version

from contrib_stats.config import Config
from contrib_stats.date_range import DateRange, normalize_year, resolve_date_range
from contrib_stats.exceptions import (
    ContribStatsError,
    GitHubAbuseLimitError,
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    InvalidDateRangeError,
)
from contrib_stats.models import (
    AuthorContributions,
    AuthorReport,
    AuthorRoster,
    CommitRecord,
    IssueCounts,
    IssueRecord,
    IssueReport,
    RepoCommitCount,
    RepoIssueStats,
)
from contrib_stats.sdk import ContribStats

try:
    __version__ = version("contrib-stats")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

__all__ = [
    # Main SDK class
    "ContribStats",
    # Configuration
    "Config",
    # Date ranges
    "DateRange",
    "normalize_year",
    "resolve_date_range",
    # Exceptions
    "ContribStatsError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubAbuseLimitError",
    "GitHubNotFoundError",
    "InvalidDateRangeError",
    # Models
    "IssueRecord",
    "IssueCounts",
    "RepoIssueStats",
    "CommitRecord",
    "AuthorContributions",
    "RepoCommitCount",
    "AuthorRoster",
    "IssueReport",
    "AuthorReport",
]
