"""Exceptions for contrib-stats.

Exception Hierarchy:
    ContribStatsError (base)
    ├── GitHubAPIError (HTTP API errors with status codes)
    │   ├── GitHubRateLimitError (primary rate limit, retried once)
    │   ├── GitHubAbuseLimitError (abuse detection / secondary rate limit)
    │   └── GitHubNotFoundError (404 not found)
    └── InvalidDateRangeError (missing or invalid month/year)

Usage:
    - GitHubRateLimitError: the REST client waits ``retry_after`` seconds and
      retries the request exactly once before letting it propagate.
    - GitHubAbuseLimitError: logged and never retried.
"""

__all__ = [
    "ContribStatsError",
    "GitHubAPIError",
    "GitHubRateLimitError",
    "GitHubAbuseLimitError",
    "GitHubNotFoundError",
    "InvalidDateRangeError",
]


class ContribStatsError(Exception):
    """Base exception for all contrib-stats errors."""

    pass


class GitHubAPIError(ContribStatsError):
    """Base exception for GitHub API errors (HTTP responses with error status codes)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: dict | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class GitHubRateLimitError(GitHubAPIError):
    """Raised when the GitHub API reports an exhausted primary rate limit.

    ``retry_after`` is the number of seconds GitHub asked us to wait, taken from
    the ``Retry-After`` header or derived from ``x-ratelimit-reset``.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = 403,
        response_body: dict | None = None,
        retry_after: float = 60.0,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.retry_after = retry_after


class GitHubAbuseLimitError(GitHubAPIError):
    """Raised when GitHub flags a request with its abuse detection mechanism."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 403,
        response_body: dict | None = None,
        retry_after: float | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)
        self.retry_after = retry_after


class GitHubNotFoundError(GitHubAPIError):
    """Raised when a GitHub resource is not found (HTTP 404)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = 404,
        response_body: dict | None = None,
    ):
        super().__init__(message, status_code=status_code, response_body=response_body)


class InvalidDateRangeError(ContribStatsError):
    """Raised when the month/year pair cannot be turned into a date range."""

    pass
