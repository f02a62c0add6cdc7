"""Tests for calendar data structures."""

import math
from datetime import date

import numpy as np
import pytest
from py_terrain.core.calendar import (
    Calendar, CalendarError, ContributionDay, ContributionWeek
)


@pytest.fixture
def payload():
    return {
        "username": "octocat",
        "year": 2024,
        "weeks": [
            {
                "firstDay": "2024-01-07",
                "days": [
                    {"date": "2024-01-07", "count": 0, "level": 0},
                    {"date": "2024-01-08", "count": 4, "level": 2},
                    {"date": "2024-01-09", "count": 1, "level": 1},
                ],
            },
            {
                "days": [
                    {"date": "2024-01-14", "count": 12, "level": 4},
                ],
            },
        ],
    }


class TestContributionDay:
    """Test day validation."""

    def test_valid(self):
        day = ContributionDay(date="2024-03-01", count=3, level=2)
        assert day.count == 3

    def test_negative_count(self):
        with pytest.raises(CalendarError):
            ContributionDay(date="2024-03-01", count=-1)

    def test_non_finite_count(self):
        with pytest.raises(CalendarError):
            ContributionDay(date="2024-03-01", count=math.nan)
        with pytest.raises(CalendarError):
            ContributionDay(date="2024-03-01", count=math.inf)

    def test_coarse_level_range(self):
        with pytest.raises(CalendarError):
            ContributionDay(date="2024-03-01", count=1, level=5)

    def test_numpy_counts(self):
        day = ContributionDay(date="2024-03-01", count=np.int64(4))
        assert day.count == 4
        assert type(day.count) is int
        assert type(ContributionDay(date="2024-03-01", count=np.float32(2.5)).count) is float

    def test_bool_count(self):
        with pytest.raises(CalendarError):
            ContributionDay(date="2024-03-01", count=True)

    @pytest.mark.parametrize("bad", ["03/01/2024", "2024-13-01", "", "yesterday"])
    def test_date_must_be_iso(self, bad):
        with pytest.raises(CalendarError):
            ContributionDay(date=bad, count=1)

    def test_date_must_be_string(self):
        with pytest.raises(CalendarError):
            ContributionDay(date=None, count=1)

    def test_calendar_error_is_value_error(self):
        with pytest.raises(ValueError):
            ContributionDay(date="2024-03-01", count=-5)


class TestContributionWeek:
    """Test week validation."""

    def test_too_many_days(self):
        days = [ContributionDay(date=f"2024-01-{i:02d}", count=0) for i in range(1, 9)]
        with pytest.raises(CalendarError):
            ContributionWeek(days=days)

    def test_empty_week(self):
        with pytest.raises(CalendarError):
            ContributionWeek(days=())

    def test_first_day_defaults(self):
        week = ContributionWeek(days=[ContributionDay(date="2024-01-07", count=0)])
        assert week.first_day == "2024-01-07"
        assert isinstance(week.days, tuple)


class TestCalendar:
    """Test calendar construction."""

    def test_from_counts(self):
        cal = Calendar.from_counts([[0, 1, 2, 3, 4, 5, 6], [7, 0]], identity="x")
        assert cal.num_weeks == 2
        assert cal.max_count == 7
        assert cal.total() == 28
        assert cal.identity == "x"
        assert cal.oldest_date == date(2024, 1, 7)
        assert cal.weeks[1].days[0].date == "2024-01-14"

    def test_iter_days_column_major(self):
        cal = Calendar.from_counts([[1, 2], [3]])
        assert [(w, d, day.count) for w, d, day in cal.iter_days()] == [
            (0, 0, 1), (0, 1, 2), (1, 0, 3)
        ]

    def test_empty(self):
        cal = Calendar(weeks=())
        assert cal.max_count == 0
        assert cal.oldest_date is None
        assert cal.total() == 0

    def test_from_dict(self, payload):
        cal = Calendar.from_dict(payload)
        assert cal.identity == "octocat"
        assert cal.year == 2024
        assert cal.max_count == 12
        assert cal.weeks[0].first_day == "2024-01-07"
        assert cal.weeks[1].first_day == "2024-01-14"
        assert len(cal.weeks[0].days) == 3

    def test_from_dict_missing_key(self, payload):
        del payload["weeks"][0]["days"][1]["count"]
        with pytest.raises(CalendarError):
            Calendar.from_dict(payload)

    def test_from_dict_not_a_mapping(self):
        with pytest.raises(CalendarError):
            Calendar.from_dict({"weeks": [None]})

    def test_from_counts_numpy_array(self):
        cal = Calendar.from_counts(np.array([[0, 2, 0, 5, 3, 0, 1]]))
        assert cal.max_count == 5
        assert cal.total() == 11
        assert all(type(day.count) is int for _, _, day in cal.iter_days())

    def test_from_dict_invalid_date(self, payload):
        payload["weeks"][0]["days"][1]["date"] = "01/08/2024"
        with pytest.raises(CalendarError):
            Calendar.from_dict(payload)

    def test_from_dict_invalid_count(self, payload):
        payload["weeks"][0]["days"][0]["count"] = -3
        with pytest.raises(CalendarError):
            Calendar.from_dict(payload)

    def test_immutable(self):
        cal = Calendar.from_counts([[1]])
        with pytest.raises(AttributeError):
            cal.identity = "other"
