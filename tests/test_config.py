"""Tests for configuration loading."""

from contrib_stats.config import DEFAULT_REPOS, Config, get_config, parse_repo_list, set_config


class TestFromEnv:
    """Tests for Config.from_env."""

    def test_defaults(self, monkeypatch):
        for name in (
            "CONTRIB_STATS_TOKEN",
            "GITHUB_TOKEN",
            "CONTRIB_STATS_OWNER",
            "CONTRIB_STATS_REPOS",
            "CONTRIB_STATS_BRANCH",
            "GITHUB_API_URL",
        ):
            monkeypatch.delenv(name, raising=False)

        config = Config.from_env()

        assert config.owner == "racket"
        assert config.repos == DEFAULT_REPOS
        assert config.branch == "master"
        assert config.is_authenticated is False

    def test_preferred_token(self, monkeypatch):
        monkeypatch.setenv("CONTRIB_STATS_TOKEN", "preferred")
        monkeypatch.setenv("GITHUB_TOKEN", "fallback")

        assert Config.from_env().github_token == "preferred"

    def test_fallback_token(self, monkeypatch):
        monkeypatch.delenv("CONTRIB_STATS_TOKEN", raising=False)
        monkeypatch.setenv("GITHUB_TOKEN", "fallback")

        config = Config.from_env()

        assert config.github_token == "fallback"
        assert config.is_authenticated is True

    def test_repository_overrides(self, monkeypatch):
        monkeypatch.setenv("CONTRIB_STATS_OWNER", "plt")
        monkeypatch.setenv("CONTRIB_STATS_REPOS", "racket, rhombus ,,")
        monkeypatch.setenv("CONTRIB_STATS_BRANCH", "main")

        config = Config.from_env()

        assert config.owner == "plt"
        assert config.repos == ("racket", "rhombus")
        assert config.branch == "main"


class TestParseRepoList:
    def test_empty(self):
        assert parse_repo_list(None) == ()
        assert parse_repo_list(" , ") == ()


class TestGlobalConfig:
    def test_set_and_get(self):
        config = Config(github_token=None, repos=("plot",))
        set_config(config)

        assert get_config() is config
