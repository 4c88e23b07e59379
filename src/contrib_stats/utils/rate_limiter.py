"""Rate limit tracking for GitHub API requests."""

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from rich.console import Console

console = Console(stderr=True)

# Warn when fewer requests than this remain in the core quota
LOW_REMAINING_THRESHOLD = 50

# Fallback wait when GitHub gives no hint about when to retry
DEFAULT_RETRY_AFTER = 60.0


def format_time_remaining(seconds: float) -> str:
    """Format seconds into a human-friendly string."""
    if seconds <= 0:
        return "now"

    seconds = int(seconds)

    if seconds < 60:
        return f"{seconds} second{'s' if seconds != 1 else ''}"
    elif seconds < 3600:
        minutes = seconds // 60
        secs = seconds % 60
        if secs > 0:
            return f"{minutes} min {secs} sec"
        return f"{minutes} minute{'s' if minutes != 1 else ''}"
    else:
        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        if minutes > 0:
            return f"{hours} hr {minutes} min"
        return f"{hours} hour{'s' if hours != 1 else ''}"


def format_reset_time(reset_timestamp: float) -> str:
    """Format reset timestamp to a human-readable local time."""
    reset_dt = datetime.fromtimestamp(reset_timestamp)
    return reset_dt.strftime("%H:%M:%S")


def retry_after_from_headers(headers: Mapping[str, str], now: Optional[float] = None) -> float:
    """Seconds to wait before retrying a rate limited request.

    ``Retry-After`` wins; otherwise the wait runs until ``x-ratelimit-reset``.
    """
    retry_after = headers.get("retry-after")
    if retry_after is not None:
        try:
            return max(0.0, float(retry_after))
        except ValueError:
            pass

    reset = headers.get("x-ratelimit-reset")
    if reset is not None:
        try:
            now = time.time() if now is None else now
            return max(0.0, float(reset) - now)
        except ValueError:
            pass

    return DEFAULT_RETRY_AFTER


@dataclass
class RateLimitState:
    """Track rate limit state for an API."""

    limit: int
    remaining: int
    reset_time: float  # Unix timestamp

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Update state from GitHub API response headers."""
        if "x-ratelimit-limit" in headers:
            self.limit = int(headers["x-ratelimit-limit"])
        if "x-ratelimit-remaining" in headers:
            self.remaining = int(headers["x-ratelimit-remaining"])
        if "x-ratelimit-reset" in headers:
            self.reset_time = float(headers["x-ratelimit-reset"])


@dataclass
class RateLimiter:
    """Tracks the REST core quota as reported by response headers."""

    # REST API: 5000/hour authenticated, 60/hour unauthenticated
    core: RateLimitState = field(
        default_factory=lambda: RateLimitState(
            limit=5000, remaining=5000, reset_time=time.time() + 3600
        )
    )

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        """Update REST rate limit state from response headers."""
        self.core.update_from_headers(headers)

    def get_status(self) -> dict[str, Any]:
        """Get current rate limit status."""
        return {
            "core": {
                "remaining": self.core.remaining,
                "limit": self.core.limit,
                "reset": self.core.reset_time,
            },
        }


def check_and_report_rate_limit(rate_info: dict, is_authenticated: bool) -> None:
    """Report the quota to the user before a run.

    This only warns. An exhausted quota is handled by the REST client, which
    waits for the reset and retries once.

    Args:
        rate_info: Rate limit info shaped like ``RateLimiter.get_status()``
        is_authenticated: Whether using authenticated access
    """
    core = rate_info["core"]
    remaining = core["remaining"]
    limit = core["limit"]
    reset_time = core["reset"]

    if remaining == 0:
        human_time = format_time_remaining(reset_time - time.time())
        reset_at = format_reset_time(reset_time)

        console.print(f"\n[red]Rate limit exhausted[/red] (0/{limit} requests remaining)")
        console.print(f"[yellow]  Resets in: {human_time} (at {reset_at})[/yellow]")
        console.print("[yellow]  Requests will wait for the reset and retry once[/yellow]")

        if not is_authenticated:
            console.print(
                "[dim]  Tip: Set CONTRIB_STATS_TOKEN for 5,000 requests/hour instead of 60[/dim]"
            )

        console.print()
        return

    # Show warning if running low
    if remaining < LOW_REMAINING_THRESHOLD:
        console.print(
            f"[yellow]Warning: Only {remaining}/{limit} API requests remaining[/yellow]"
        )

