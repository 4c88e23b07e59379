"""Configuration management for contrib-stats."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_OWNER = "racket"
DEFAULT_REPOS = (
    "racket",
    "ChezScheme",
    "redex",
    "typed-racket",
    "drracket",
    "scribble",
    "plot",
)
DEFAULT_BRANCH = "master"


@dataclass
class Config:
    """Application configuration."""

    github_token: str | None
    github_api_url: str = "https://api.github.com"

    # Repositories under analysis
    owner: str = DEFAULT_OWNER
    repos: tuple[str, ...] = DEFAULT_REPOS
    branch: str = DEFAULT_BRANCH

    # Pagination
    per_page: int = 100

    # Timeouts
    request_timeout: float = 30.0
    max_retry_wait: float = 3600.0  # upper bound for the rate limit retry delay

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        # override=False ensures environment variables take precedence over .env
        load_dotenv(override=False)

        # Support both CONTRIB_STATS_TOKEN (preferred) and GITHUB_TOKEN (fallback)
        token = os.getenv("CONTRIB_STATS_TOKEN") or os.getenv("GITHUB_TOKEN")

        return cls(
            github_token=token,
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            owner=os.getenv("CONTRIB_STATS_OWNER", DEFAULT_OWNER),
            repos=parse_repo_list(os.getenv("CONTRIB_STATS_REPOS")) or DEFAULT_REPOS,
            branch=os.getenv("CONTRIB_STATS_BRANCH", DEFAULT_BRANCH),
        )

    @property
    def is_authenticated(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)


def parse_repo_list(value: str | None) -> tuple[str, ...]:
    """Split a comma separated repository list, dropping blanks."""
    if not value:
        return ()
    return tuple(name.strip() for name in value.split(",") if name.strip())


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config
