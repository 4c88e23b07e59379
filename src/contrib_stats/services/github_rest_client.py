"""GitHub REST API client."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import urlencode

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from contrib_stats.config import Config, get_config
from contrib_stats.exceptions import (
    GitHubAbuseLimitError,
    GitHubAPIError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from contrib_stats.utils.pagination import get_next_page_url
from contrib_stats.utils.rate_limiter import RateLimiter, retry_after_from_headers

logger = logging.getLogger(__name__)


def format_github_datetime(value: datetime) -> str:
    """Format a datetime the way the GitHub API expects in query strings."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _wait_for_rate_limit_reset(retry_state: RetryCallState) -> float:
    """Wait as long as GitHub asked, bounded by the client's max_retry_wait."""
    error = retry_state.outcome.exception()
    client = retry_state.args[0]
    return min(error.retry_after, client.config.max_retry_wait)


def _log_rate_limit_retry(retry_state: RetryCallState) -> None:
    endpoint = retry_state.args[2] if len(retry_state.args) > 2 else "?"
    logger.warning(
        "Request quota exhausted for GET %s, retrying after %.0f seconds",
        endpoint,
        retry_state.next_action.sleep,
    )


def _error_body(response: httpx.Response) -> dict[str, Any]:
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {"message": response.text}
    return body if isinstance(body, dict) else {}


class GitHubRestClient:
    """Async client for GitHub REST API."""

    def __init__(
        self,
        config: Optional[Config] = None,
        rate_limiter: Optional[RateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or get_config()
        self.rate_limiter = rate_limiter or RateLimiter()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "contrib-stats/0.1.0",
        }
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.github_api_url,
                headers=self._get_headers(),
                timeout=self.config.request_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GitHubRestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _raise_for_status(self, response: httpx.Response, endpoint: str) -> None:
        """Translate an error response into the matching GitHubAPIError."""
        status = response.status_code
        if status < 400:
            return

        body = _error_body(response)
        message = body.get("message", "Unknown error")

        if status == 404:
            raise GitHubNotFoundError(
                f"Resource not found: {endpoint}",
                status_code=404,
                response_body=body,
            )
        if status in (403, 429):
            lowered = message.lower()
            if "secondary rate limit" in lowered or "abuse" in lowered:
                retry_after = response.headers.get("retry-after")
                raise GitHubAbuseLimitError(
                    f"Abuse detected for request GET {endpoint}: {message}",
                    status_code=status,
                    response_body=body,
                    retry_after=float(retry_after) if retry_after else None,
                )
            if response.headers.get("x-ratelimit-remaining") == "0" or "rate limit" in lowered:
                raise GitHubRateLimitError(
                    f"Rate limit exceeded for request GET {endpoint}",
                    status_code=status,
                    response_body=body,
                    retry_after=retry_after_from_headers(response.headers),
                )
            raise GitHubAPIError(
                f"Forbidden: {message}",
                status_code=status,
                response_body=body,
            )
        if status >= 500:
            raise GitHubAPIError(
                f"Server error: {status}",
                status_code=status,
            )
        raise GitHubAPIError(
            f"API error: {message}",
            status_code=status,
            response_body=body,
        )

    # Only the primary rate limit is retried, and only once
    @retry(
        retry=retry_if_exception_type(GitHubRateLimitError),
        stop=stop_after_attempt(2),
        wait=_wait_for_rate_limit_reset,
        before_sleep=_log_rate_limit_retry,
        reraise=True,
    )
    @retry(
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _request(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        """Make an API request, retrying once on rate limiting."""
        client = await self._get_client()
        logger.debug("%s %s", method, endpoint)
        response = await client.request(method, endpoint, **kwargs)

        self.rate_limiter.update_from_headers(response.headers)
        self._raise_for_status(response, endpoint)

        return response

    async def get(self, endpoint: str, **kwargs) -> Any:
        """Make a GET request and return JSON response."""
        response = await self._request("GET", endpoint, **kwargs)
        return response.json()

    async def get_paginated(
        self,
        endpoint: str,
        params: Optional[dict[str, str]] = None,
    ) -> list[dict[str, Any]]:
        """Fetch all pages of a paginated endpoint.

        Args:
            endpoint: API endpoint without a query string
            params: Query parameters for the first page; later pages follow
                the ``Link`` header, which already carries them

        Returns:
            List of all items across all pages
        """
        query = dict(params or {})
        query["per_page"] = str(self.config.per_page)

        all_items: list[dict[str, Any]] = []
        page = 1
        url: Optional[str] = f"{endpoint}?{urlencode(query)}"

        while url:
            response = await self._request("GET", url)
            all_items.extend(response.json())

            url = get_next_page_url(response.headers.get("Link"))
            page += 1

            # Small delay to be nice to the API
            if url:
                await asyncio.sleep(0.1)

        logger.debug("Fetched %d items from %s in %d page(s)", len(all_items), endpoint, page - 1)
        return all_items

    async def list_issues(self, owner: str, repo: str) -> list[dict[str, Any]]:
        """Get every issue and pull request of a repository, in any state."""
        return await self.get_paginated(
            f"/repos/{owner}/{repo}/issues",
            params={"state": "all"},
        )

    async def list_commits(
        self,
        owner: str,
        repo: str,
        sha: str,
        since: datetime,
        until: Optional[datetime] = None,
    ) -> list[dict[str, Any]]:
        """Get commits reachable from ``sha``, filtered server side by date."""
        params = {"sha": sha, "since": format_github_datetime(since)}
        if until is not None:
            params["until"] = format_github_datetime(until)

        return await self.get_paginated(f"/repos/{owner}/{repo}/commits", params=params)

    async def get_rate_limit(self) -> dict[str, Any]:
        """Read the current core quota from ``/rate_limit``.

        Returns a dict shaped like ``RateLimiter.get_status()``.
        """
        data = await self.get("/rate_limit")
        core = data.get("resources", {}).get("core", {})
        self.rate_limiter.core.limit = core.get("limit", self.rate_limiter.core.limit)
        self.rate_limiter.core.remaining = core.get("remaining", self.rate_limiter.core.remaining)
        self.rate_limiter.core.reset_time = float(core.get("reset", self.rate_limiter.core.reset_time))
        return self.rate_limiter.get_status()
