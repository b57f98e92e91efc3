"""Calendar date ranges used to request and label financial statements.

Every range function takes an explicit reference ``now`` so results are
deterministic; the ``*_today`` wrappers supply the wall clock.

Dates are rendered by truncating the reference's ISO-8601 form to its date
component. No timezone conversion happens: a timezone-aware ``now`` is
used in whatever zone it carries.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from campfire_insights.config import get_settings


@dataclass(frozen=True)
class DateRange:
    """Inclusive ``YYYY-MM-DD`` date range."""

    date_from: str
    date_to: str

    def to_dict(self) -> dict[str, Any]:
        return {"dateFrom": self.date_from, "dateTo": self.date_to}


@dataclass(frozen=True)
class ReportingPeriod:
    """A labelled date range for one statement request."""

    label: str
    range: DateRange


def _fmt(d: date) -> str:
    return d.isoformat()[:10]


def _shift_month(year: int, month: int, months_back: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) - months_back
    return index // 12, index % 12 + 1


def month_range(months_ago: int, now: date) -> DateRange:
    """Full calendar month ``months_ago`` months before ``now``'s month (0 = current)."""
    year, month = _shift_month(now.year, now.month, months_ago)
    last_day = calendar.monthrange(year, month)[1]
    return DateRange(
        date_from=_fmt(date(year, month, 1)),
        date_to=_fmt(date(year, month, last_day)),
    )


def current_ytd_range(now: date) -> DateRange:
    """January 1 of ``now``'s year through ``now``."""
    return DateRange(date_from=f"{now.year:04d}-01-01", date_to=_fmt(now))


def current_month_range(now: date) -> DateRange:
    """First day of ``now``'s month through ``now``."""
    return DateRange(date_from=_fmt(date(now.year, now.month, 1)), date_to=_fmt(now))


def month_range_today(months_ago: int) -> DateRange:
    return month_range(months_ago, datetime.now())


def ytd_range_today() -> DateRange:
    return current_ytd_range(datetime.now())


def month_to_date_today() -> DateRange:
    return current_month_range(datetime.now())


def snapshot_periods(now: date) -> tuple[ReportingPeriod, ReportingPeriod]:
    """Return the (current month, year-to-date) periods for a financial snapshot."""
    current_month = ReportingPeriod(
        label=f"Current Month ({now.strftime('%B %Y')})",
        range=current_month_range(now),
    )
    ytd = ReportingPeriod(label=f"YTD {now.year}", range=current_ytd_range(now))
    return current_month, ytd


def burn_rate_windows(months: int | None, now: date) -> list[ReportingPeriod]:
    """Return the full months preceding ``now``'s month, oldest first.

    Args:
        months: Requested number of months; settings supply the default and
            the minimum.
        now: Reference date. Its own (partial) month is never included.

    Returns:
        One period per month labelled like ``"Nov 2025"``.
    """
    settings = get_settings()
    requested = settings.burn_rate_default_months if months is None else months
    count = max(requested, settings.burn_rate_min_months)

    windows: list[ReportingPeriod] = []
    for months_ago in range(count, 0, -1):
        window = month_range(months_ago, now)
        first = date.fromisoformat(window.date_from)
        windows.append(ReportingPeriod(label=first.strftime("%b %Y"), range=window))
    return windows
