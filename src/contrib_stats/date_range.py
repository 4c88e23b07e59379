"""Resolve a (month, year) pair into the instants a report is computed against."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, model_validator

from contrib_stats.exceptions import InvalidDateRangeError


class DateRange(BaseModel):
    """Start of the year plus the half-open analysis month ``[range_start, range_end)``."""

    model_config = ConfigDict(frozen=True)

    year_start: datetime
    range_start: datetime
    range_end: datetime

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if not (self.year_start <= self.range_start <= self.range_end):
            raise ValueError("expected year_start <= range_start <= range_end")
        return self

    @property
    def year(self) -> int:
        return self.range_start.year

    @property
    def month(self) -> int:
        return self.range_start.month

    def in_range(self, value: datetime | None) -> bool:
        """Whether ``value`` falls inside the analysis month."""
        return value is not None and self.range_start <= value < self.range_end

    def before_range(self, value: datetime | None) -> bool:
        """Whether ``value`` falls between the start of the year and the analysis month."""
        return value is not None and self.year_start <= value < self.range_start


def normalize_year(year: int) -> int:
    """Expand two digit years (``20`` -> ``2020``)."""
    if year < 100:
        return 2000 + year
    return year


def resolve_date_range(month: int | None, year: int | None) -> DateRange:
    """Build the DateRange for ``month`` of ``year``.

    Raises:
        InvalidDateRangeError: if month or year is missing, or the resulting
            date is rejected by ``datetime``.
    """
    if not month or not year:
        raise InvalidDateRangeError("Missing month and year as arguments")

    full_year = normalize_year(year)
    try:
        year_start = datetime(full_year, 1, 1, tzinfo=timezone.utc)
        range_start = datetime(full_year, month, 1, tzinfo=timezone.utc)
        if month == 12:
            range_end = range_start.replace(year=full_year + 1, month=1)
        else:
            range_end = range_start.replace(month=month + 1)
    except ValueError as e:
        raise InvalidDateRangeError(f"Invalid month/year {month}/{year}: {e}") from e

    return DateRange(year_start=year_start, range_start=range_start, range_end=range_end)


def parse_github_datetime(value: str | None) -> datetime | None:
    """Parse an ISO datetime string from the GitHub API into an aware UTC datetime."""
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
