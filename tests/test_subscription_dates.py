"""Tests for calendar-month helpers."""

from datetime import UTC, datetime

from subtrack.services.subscription_dates import (
    add_months,
    month_label,
    month_start,
    months_between,
)


class TestAddMonths:
    def test_basic(self):
        assert add_months(datetime(2025, 1, 15), 1) == datetime(2025, 2, 15)

    def test_clamp_end_of_month(self):
        # Jan 31 + 1 month = Feb 28
        result = add_months(datetime(2025, 1, 31), 1)
        assert result == datetime(2025, 2, 28)

    def test_leap_year(self):
        result = add_months(datetime(2024, 1, 31), 1)
        assert result == datetime(2024, 2, 29)

    def test_year_rollover(self):
        result = add_months(datetime(2025, 11, 15), 3)
        assert result == datetime(2026, 2, 15)

    def test_subtract_months(self):
        result = add_months(datetime(2025, 3, 15), -1)
        assert result == datetime(2025, 2, 15)

    def test_subtract_across_year(self):
        result = add_months(datetime(2025, 1, 15), -12)
        assert result == datetime(2024, 1, 15)

    def test_keeps_timezone(self):
        result = add_months(datetime(2025, 1, 1, tzinfo=UTC), 1)
        assert result.tzinfo == UTC


class TestMonthStart:
    def test_truncates_to_midnight_on_the_first(self):
        ref = datetime(2025, 3, 15, 10, 42, 7, 123, tzinfo=UTC)
        assert month_start(ref) == datetime(2025, 3, 1, 0, 0, tzinfo=UTC)

    def test_already_at_start(self):
        ref = datetime(2025, 3, 1, tzinfo=UTC)
        assert month_start(ref) == ref


class TestMonthsBetween:
    def test_same_month(self):
        assert months_between(datetime(2025, 3, 1), datetime(2025, 3, 31)) == 1

    def test_across_year(self):
        assert months_between(datetime(2023, 11, 1), datetime(2024, 2, 10)) == 4

    def test_end_before_start(self):
        assert months_between(datetime(2025, 3, 1), datetime(2025, 1, 1)) == 0


class TestMonthLabel:
    def test_format(self):
        assert month_label(datetime(2024, 1, 1)) == "Jan 2024"
        assert month_label(datetime(2023, 12, 31)) == "Dec 2023"
