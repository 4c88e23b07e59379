"""Utility modules for contrib-stats."""

from contrib_stats.utils.pagination import get_next_page_url, parse_link_header
from contrib_stats.utils.rate_limiter import (
    RateLimiter,
    check_and_report_rate_limit,
    retry_after_from_headers,
)

__all__ = [
    "RateLimiter",
    "check_and_report_rate_limit",
    "retry_after_from_headers",
    "parse_link_header",
    "get_next_page_url",
]
