"""Tests for calendar-day arithmetic."""

from datetime import date, datetime, timedelta, timezone

from daystracker.dates import (
    days_between,
    is_same_calendar_day,
    local_date,
    sort_key,
    start_of_day,
)


class TestDaysBetween:
    def test_same_day_is_zero(self):
        """Times on the same calendar day are 0 days apart."""
        assert days_between(datetime(2024, 1, 1, 0, 5), datetime(2024, 1, 1, 23, 55)) == 0

    def test_counts_calendar_days_not_hours(self):
        """Late evening to early next morning is one day."""
        assert days_between(datetime(2024, 1, 1, 23, 0), datetime(2024, 1, 2, 1, 0)) == 1

    def test_whole_days(self):
        assert days_between(datetime(2024, 1, 1), datetime(2024, 1, 10)) == 9

    def test_negative_when_end_is_before_start(self):
        assert days_between(datetime(2024, 1, 10), datetime(2024, 1, 1)) == -9

    def test_accepts_plain_dates(self):
        assert days_between(date(2024, 2, 28), date(2024, 3, 1)) == 2

    def test_mixed_date_and_datetime(self):
        assert days_between(date(2024, 1, 1), datetime(2024, 1, 3, 12, 0)) == 2

    def test_aware_values_use_local_calendar(self):
        """Aware datetimes are compared on their local calendar dates."""
        start = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
        end = start + timedelta(days=3)
        assert days_between(start, end) == 3


class TestIsSameCalendarDay:
    def test_same_day(self):
        assert is_same_calendar_day(datetime(2024, 5, 5, 1), datetime(2024, 5, 5, 22)) is True

    def test_different_day(self):
        assert is_same_calendar_day(datetime(2024, 5, 5), datetime(2024, 5, 6)) is False

    def test_defaults_to_today(self):
        assert is_same_calendar_day(datetime.now()) is True
        assert is_same_calendar_day(datetime.now() - timedelta(days=2)) is False


class TestTruncation:
    def test_start_of_day(self):
        assert start_of_day(datetime(2024, 3, 15, 17, 42, 9)) == datetime(2024, 3, 15)

    def test_start_of_day_from_date(self):
        assert start_of_day(date(2024, 3, 15)) == datetime(2024, 3, 15)

    def test_local_date_of_naive_datetime(self):
        assert local_date(datetime(2024, 3, 15, 23, 59)) == date(2024, 3, 15)


class TestSortKey:
    def test_orders_naive_and_aware(self):
        """Naive and aware values can be sorted together."""
        aware = datetime(2024, 1, 1, tzinfo=timezone.utc)
        naive = datetime(2030, 1, 1)
        assert sorted([naive, aware], key=sort_key) == [aware, naive]
