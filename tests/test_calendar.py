"""
Unit tests for the year-week time index.
"""

from datetime import date

import pandas as pd
import pytest

from retail_cv.data import YearWeek, week_to_date, week_to_yearweek, weeks_to_yearweeks


START = date(1989, 9, 14)


class TestYearWeek:
    """Tests for YearWeek ordering and parsing."""

    def test_ordering(self):
        assert YearWeek(1989, 52) < YearWeek(1990, 1)
        assert YearWeek(1990, 1) < YearWeek(1990, 2)
        assert YearWeek(1990, 2) <= YearWeek(1990, 2)
        assert max(YearWeek(1991, 3), YearWeek(1990, 40)) == YearWeek(1991, 3)

    def test_from_date_iso_weeks(self):
        assert YearWeek.from_date(date(1989, 9, 14)) == YearWeek(1989, 37)
        assert YearWeek.from_date(date(2020, 12, 31)) == YearWeek(2020, 53)
        assert YearWeek.from_date(date(2021, 1, 3)) == YearWeek(2020, 53)
        assert YearWeek.from_date(date(2021, 1, 4)) == YearWeek(2021, 1)
        assert YearWeek.from_date(pd.Timestamp("2021-01-04")) == YearWeek(2021, 1)

    def test_str_and_parse(self):
        yw = YearWeek(1990, 5)
        assert str(yw) == "1990-W05"
        assert YearWeek.parse("1990-W05") == yw

    @pytest.mark.parametrize("text", ["1990-05", "1990W05", "1990-W60", ""])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            YearWeek.parse(text)

    def test_hashable(self):
        assert len({YearWeek(1990, 1), YearWeek(1990, 1), YearWeek(1990, 2)}) == 2


class TestWeekConversion:
    """Tests for week offset conversions."""

    def test_week_to_date(self):
        assert week_to_date(0, START) == START
        assert week_to_date(2, START) == date(1989, 9, 28)
        assert week_to_date(-1, START) == date(1989, 9, 7)

    def test_consecutive_offsets_strictly_increase(self):
        values = [week_to_yearweek(w, START) for w in range(0, 400)]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_vectorised_matches_scalar(self):
        weeks = pd.Series([40, 41, 40, 160])
        result = weeks_to_yearweeks(weeks, START)

        assert result.dtype == object
        assert list(result) == [week_to_yearweek(w, START) for w in weeks]
