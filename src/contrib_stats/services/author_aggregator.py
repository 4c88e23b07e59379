"""Merge per-repository author data and find active and new contributors."""

from collections.abc import Iterable
from functools import reduce

from contrib_stats.date_range import DateRange
from contrib_stats.models.commit import AuthorContributions, AuthorMap, CommitRecord
from contrib_stats.models.report import AuthorRoster


def merge_contributions(left: AuthorMap, right: AuthorMap) -> AuthorMap:
    """Merge two author maps without mutating either.

    Authors present in both get their commit lists concatenated and keep the
    display name from ``left``.
    """
    merged: AuthorMap = dict(left)
    for key, contributions in right.items():
        if key in merged:
            merged[key] = AuthorContributions(
                name=merged[key].name,
                commits=merged[key].commits + contributions.commits,
            )
        else:
            merged[key] = contributions
    return merged


def merge_all(author_maps: Iterable[AuthorMap]) -> AuthorMap:
    """Fold any number of author maps into one."""
    return reduce(merge_contributions, author_maps, {})


def classify_author(commits: Iterable[CommitRecord], date_range: DateRange) -> tuple[bool, bool]:
    """Return ``(active, new)`` for one author.

    Active authors have a commit in the analysis month. New authors are active
    and have no commit between the start of the year and the analysis month.
    """
    active = False
    seen_earlier = False
    for commit in commits:
        if date_range.in_range(commit.date):
            active = True
        if date_range.before_range(commit.date):
            seen_earlier = True
    return active, active and not seen_earlier


def build_roster(authors: AuthorMap, date_range: DateRange) -> AuthorRoster:
    """List the display names of active and new authors, each sorted."""
    active: list[str] = []
    new: list[str] = []

    for key, contributions in authors.items():
        name = contributions.name or key
        is_active, is_new = classify_author(contributions.commits, date_range)
        if is_active:
            active.append(name)
        if is_new:
            new.append(name)

    return AuthorRoster(active=sorted(active), new=sorted(new))
