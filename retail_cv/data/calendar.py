"""
Calendar helpers for the weekly time index.

Week offsets in the raw data count weeks from a reference start date.
They are resolved to calendar dates and then to an ISO year-week pair,
which is the time index used for all window filtering.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Union

import pandas as pd

_YEARWEEK_PATTERN = re.compile(r"^(\d{4})-W(\d{2})$")


@dataclass(frozen=True, order=True)
class YearWeek:
    """ISO-8601 (year, week-of-year) pair, ordered chronologically."""
    year: int
    week: int

    def __str__(self) -> str:
        return f"{self.year:04d}-W{self.week:02d}"

    @classmethod
    def from_date(cls, value: Union[date, pd.Timestamp]) -> "YearWeek":
        iso = value.isocalendar()
        return cls(int(iso[0]), int(iso[1]))

    @classmethod
    def parse(cls, text: str) -> "YearWeek":
        """Inverse of ``str()``: ``'1990-W05'`` -> ``YearWeek(1990, 5)``."""
        match = _YEARWEEK_PATTERN.match(str(text).strip())
        if match is None:
            raise ValueError(f"Not a year-week value: {text!r}")
        year, week = int(match.group(1)), int(match.group(2))
        if not 1 <= week <= 53:
            raise ValueError(f"Week out of range in {text!r}")
        return cls(year, week)


def week_to_date(offset: int, start_date: date) -> date:
    """Calendar date of a week offset: ``start_date + 7 * offset`` days."""
    return start_date + timedelta(weeks=int(offset))


def week_to_yearweek(offset: int, start_date: date) -> YearWeek:
    return YearWeek.from_date(week_to_date(offset, start_date))


def weeks_to_yearweeks(weeks: pd.Series, start_date: date) -> pd.Series:
    """
    Vectorised conversion of a column of week offsets.

    Each distinct offset is resolved once and mapped back onto the column.

    Parameters
    ----------
    weeks : pd.Series
        Integer week offsets.
    start_date : date
        Date of week offset 0.

    Returns
    -------
    pd.Series
        Object series of ``YearWeek`` values aligned with ``weeks``.
    """
    mapping = {w: week_to_yearweek(w, start_date) for w in pd.unique(weeks)}
    return weeks.map(mapping).astype(object)
