"""Tests for merging author data and classifying contributors."""

from datetime import datetime, timezone
from functools import reduce
from itertools import permutations

from contrib_stats.models.commit import AuthorContributions, CommitRecord
from contrib_stats.services.author_aggregator import (
    build_roster,
    classify_author,
    merge_all,
    merge_contributions,
)


def commit(key: str, when: str, repo: str = "racket", sha: str | None = None, name: str | None = None):
    return CommitRecord(
        repo=repo,
        sha=sha or f"{repo}-{key}-{when}",
        author_key=key,
        author_name=name if name is not None else key.title(),
        date=datetime.fromisoformat(when).replace(tzinfo=timezone.utc),
    )


def author_map(*commits: CommitRecord) -> dict[str, AuthorContributions]:
    result: dict[str, AuthorContributions] = {}
    for c in commits:
        result.setdefault(c.author_key, AuthorContributions(name=c.author_name)).commits.append(c)
    return result


def commit_sets(authors: dict[str, AuthorContributions]) -> dict[str, set[str]]:
    return {key: {c.sha for c in value.commits} for key, value in authors.items()}


class TestMergeContributions:
    """Tests for merge_contributions and merge_all."""

    def test_shared_key_concatenates(self):
        left = author_map(commit("alice", "2020-01-10", repo="racket"))
        right = author_map(commit("alice", "2020-03-12", repo="plot"))

        merged = merge_contributions(left, right)

        assert [c.repo for c in merged["alice"].commits] == ["racket", "plot"]
        assert merged["alice"].name == "Alice"

    def test_display_name_from_left(self):
        left = author_map(commit("alice", "2020-01-10", name="Alice A."))
        right = author_map(commit("alice", "2020-03-12", repo="plot", name="alice"))

        assert merge_contributions(left, right)["alice"].name == "Alice A."

    def test_disjoint_keys_pass_through(self):
        left = author_map(commit("alice", "2020-01-10"))
        right = author_map(commit("bob", "2020-03-12"))

        merged = merge_contributions(left, right)

        assert merged["alice"] is left["alice"]
        assert merged["bob"] is right["bob"]

    def test_inputs_not_mutated(self):
        left = author_map(commit("alice", "2020-01-10"))
        right = author_map(commit("alice", "2020-03-12", repo="plot"))

        merge_contributions(left, right)

        assert len(left["alice"].commits) == 1
        assert len(right["alice"].commits) == 1

    def test_empty_repo_creates_no_keys(self):
        other = author_map(commit("alice", "2020-01-10"), commit("bob", "2020-03-01"))

        merged = merge_all([{}, other, {}])

        assert commit_sets(merged) == commit_sets(other)

    def test_merge_all_empty(self):
        assert merge_all([]) == {}

    def test_merge_all_single(self):
        only = author_map(commit("alice", "2020-01-10"))
        assert commit_sets(merge_all([only])) == commit_sets(only)

    def test_associative_and_commutative(self):
        """Test that any order or grouping gives the same per-author commits."""
        a = author_map(commit("alice", "2020-01-10", repo="racket"), commit("bob", "2020-03-03", repo="racket"))
        b = author_map(commit("alice", "2020-03-12", repo="plot"), commit("carol", "2020-03-20", repo="plot"))
        c = author_map(commit("bob", "2020-02-02", repo="redex"), commit("dave", "2020-03-30", repo="redex"))

        expected = commit_sets(merge_all([a, b, c]))

        for ordering in permutations([a, b, c]):
            assert commit_sets(merge_all(ordering)) == expected

        right_grouped = merge_contributions(a, merge_contributions(b, c))
        left_grouped = merge_contributions(merge_contributions(a, b), c)
        assert commit_sets(right_grouped) == expected
        assert commit_sets(left_grouped) == expected
        assert commit_sets(reduce(merge_contributions, [c, a, b])) == expected


class TestClassifyAuthor:
    """Tests for classify_author."""

    def test_commit_before_range_is_not_new(self, march_2020):
        commits = [commit("alice", "2020-01-10"), commit("alice", "2020-03-12")]

        assert classify_author(commits, march_2020) == (True, False)

    def test_only_in_range_is_new(self, march_2020):
        commits = [commit("bob", "2020-03-01"), commit("bob", "2020-03-31T23:00:00")]

        assert classify_author(commits, march_2020) == (True, True)

    def test_not_active(self, march_2020):
        commits = [commit("carol", "2020-02-01"), commit("carol", "2020-04-01")]

        assert classify_author(commits, march_2020) == (False, False)

    def test_commit_before_year_start_does_not_count(self, march_2020):
        """Test that only commits since the start of the year can make an author old."""
        commits = [commit("dave", "2019-12-31"), commit("dave", "2020-03-05")]

        assert classify_author(commits, march_2020) == (True, True)

    def test_no_commits(self, march_2020):
        assert classify_author([], march_2020) == (False, False)


class TestBuildRoster:
    """Tests for build_roster."""

    def test_sorted_names(self, march_2020):
        authors = author_map(
            commit("zed", "2020-03-02", name="Zed"),
            commit("alice", "2020-01-10", name="Alice"),
            commit("alice", "2020-03-12", name="Alice"),
            commit("bob", "2020-03-03", name="Bob"),
            commit("carol", "2020-02-03", name="Carol"),
        )

        roster = build_roster(authors, march_2020)

        assert roster.active == ["Alice", "Bob", "Zed"]
        assert roster.new == ["Bob", "Zed"]

    def test_name_falls_back_to_key(self, march_2020):
        authors = author_map(commit("ghost", "2020-03-02", name=""))

        roster = build_roster(authors, march_2020)

        assert roster.active == ["ghost"]
        assert roster.new == ["ghost"]

    def test_login_and_name_are_distinct_authors(self, march_2020):
        """Test that the same person keyed by login and by name is listed twice."""
        authors = author_map(
            commit("alice", "2020-03-02", name="Alice"),
            commit("Alice", "2020-03-05", name="Alice"),
        )

        assert build_roster(authors, march_2020).active == ["Alice", "Alice"]
