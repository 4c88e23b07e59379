"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from contrib_stats.config import Config, set_config
from contrib_stats.date_range import DateRange, parse_github_datetime, resolve_date_range


def issue_payload(
    number: int,
    created_at: str,
    closed_at: str | None = None,
    pull_request: bool = False,
) -> dict:
    """Issues API item as GitHub returns it (trimmed to the fields we read)."""
    data = {
        "number": number,
        "state": "closed" if closed_at else "open",
        "created_at": created_at,
        "closed_at": closed_at,
    }
    if pull_request:
        data["pull_request"] = {"url": f"https://api.github.com/repos/racket/racket/pulls/{number}"}
    return data


def commit_payload(
    sha: str,
    date: str,
    name: str,
    login: str | None = None,
) -> dict:
    """Commits API item; ``login=None`` mimics a commit with no linked account."""
    return {
        "sha": sha,
        "commit": {
            "author": {"name": name, "email": f"{name.lower()}@example.com", "date": date},
            "committer": {"name": name, "email": f"{name.lower()}@example.com", "date": date},
            "message": "Commit message",
        },
        "author": {"login": login} if login else None,
    }


class FakeRestClient:
    """Stands in for GitHubRestClient; commit date filters are applied like the API does."""

    def __init__(
        self,
        issues: dict[str, list[dict]] | None = None,
        commits: dict[str, list[dict]] | None = None,
        errors: dict[str, Exception] | None = None,
    ):
        self.issues = issues or {}
        self.commits = commits or {}
        self.errors = errors or {}
        self.calls: list[tuple] = []
        self.closed = False

    def _check(self, repo: str) -> None:
        if repo in self.errors:
            raise self.errors[repo]

    async def list_issues(self, owner: str, repo: str) -> list[dict]:
        self.calls.append(("issues", owner, repo))
        self._check(repo)
        return list(self.issues.get(repo, []))

    async def list_commits(
        self,
        owner: str,
        repo: str,
        sha: str,
        since: datetime,
        until: datetime | None = None,
    ) -> list[dict]:
        self.calls.append(("commits", owner, repo, sha, since, until))
        self._check(repo)
        selected = []
        for commit in self.commits.get(repo, []):
            date = parse_github_datetime(commit["commit"]["committer"]["date"])
            if date >= since and (until is None or date <= until):
                selected.append(commit)
        return selected

    async def get_rate_limit(self) -> dict:
        return {"core": {"limit": 5000, "remaining": 4999, "reset": 0.0}}

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset global state before each test."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def test_config():
    """Create a test configuration."""
    config = Config(
        github_token="test_token",
        github_api_url="https://api.github.com",
        repos=("racket", "redex", "plot"),
    )
    set_config(config)
    return config


@pytest.fixture
def march_2020() -> DateRange:
    """March 2020, the month used throughout the tests."""
    return resolve_date_range(3, 2020)
