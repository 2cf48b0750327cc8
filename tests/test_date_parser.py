"""Tests for date, month and timestamp parsing."""

from datetime import date, datetime, timedelta, timezone, UTC

import pytest
from dateutil.relativedelta import relativedelta

from moneyjar.utils.date_parser import (
    at_current_time,
    get_date_range,
    month_key,
    parse_date,
    parse_month,
    parse_timestamp,
    shift_month,
)


class TestParseDate:
    """Tests for parse_date."""

    def test_iso_date(self):
        """Test that ISO dates are never read day-first."""
        assert parse_date("2024-01-05") == date(2024, 1, 5)

    def test_day_first(self):
        """Test the Vietnamese day/month/year order."""
        assert parse_date("15/01/2024") == date(2024, 1, 15)
        assert parse_date("05/01/2024") == date(2024, 1, 5)

    def test_written_month(self):
        """Test a spelled-out date."""
        assert parse_date("January 15, 2024") == date(2024, 1, 15)

    @pytest.mark.parametrize(
        "text,offset",
        [("today", 0), ("Yesterday", -1), (" tomorrow ", 1)],
    )
    def test_relative_days(self, text, offset):
        """Test today, yesterday and tomorrow."""
        assert parse_date(text) == date.today() + timedelta(days=offset)

    def test_last_month(self):
        """Test that 'last month' is the first day of the previous month."""
        expected = (date.today() - relativedelta(months=1)).replace(day=1)
        assert parse_date("last month") == expected

    def test_this_week_is_monday(self):
        """Test that 'this week' resolves to Monday."""
        result = parse_date("this week")
        assert result.weekday() == 0
        assert date.today() - result < timedelta(days=7)

    def test_last_year(self):
        """Test parsing 'last year'."""
        assert parse_date("last year") == date(date.today().year - 1, 1, 1)

    def test_invalid(self):
        """Test that nonsense raises ValueError."""
        with pytest.raises(ValueError):
            parse_date("last invalid")
        with pytest.raises(ValueError, match="Could not parse date"):
            parse_date("not a date")

    def test_next_period_is_not_a_date(self):
        """Test that forward-looking periods are not accepted."""
        with pytest.raises(ValueError):
            parse_date("next month")


class TestMonths:
    """Tests for month keys."""

    def test_parse_month_key(self):
        """Test a YYYY-MM key."""
        assert parse_month("2026-10") == date(2026, 10, 1)

    def test_parse_month_from_date(self):
        """Test that a full date snaps to the first of its month."""
        assert parse_month("2026-10-19") == date(2026, 10, 1)
        assert parse_month("this month") == date.today().replace(day=1)

    def test_parse_month_invalid(self):
        """Test that an unknown month raises ValueError."""
        with pytest.raises(ValueError):
            parse_month("someday")

    @pytest.mark.parametrize(
        "month,delta,expected",
        [
            ("2026-01", -1, "2025-12"),
            ("2026-10", 0, "2026-10"),
            ("2026-11", 2, "2027-01"),
            ("2026-03", -14, "2025-01"),
        ],
    )
    def test_shift_month(self, month, delta, expected):
        """Test moving across year boundaries."""
        assert shift_month(month, delta) == expected

    def test_month_key(self):
        """Test month keys for dates and datetimes."""
        assert month_key(date(2024, 5, 31)) == "2024-05"
        assert month_key(datetime(2024, 12, 1, tzinfo=UTC)) == "2024-12"


class TestTimestamps:
    """Tests for persisted timestamps."""

    def test_browser_timestamp(self):
        """Test the millisecond Z format."""
        assert parse_timestamp("2024-01-15T10:30:00.123Z") == datetime(
            2024, 1, 15, 10, 30, 0, 123000, tzinfo=UTC
        )

    def test_offset_is_kept(self):
        """Test that an explicit offset is preserved."""
        value = parse_timestamp("2024-01-15T17:00:00+07:00")
        assert value.utcoffset() == timedelta(hours=7)
        assert value.astimezone(UTC).hour == 10

    def test_naive_is_utc(self):
        """Test that timestamps without an offset are taken as UTC."""
        assert parse_timestamp("2024-01-15").tzinfo == UTC

    def test_invalid(self):
        """Test that garbage raises ValueError."""
        with pytest.raises(ValueError, match="Could not parse timestamp"):
            parse_timestamp("yesterday-ish")

    def test_at_current_time(self):
        """Test that a day is combined with an aware time."""
        value = at_current_time(date(2024, 2, 29))
        assert value.date() == date(2024, 2, 29)
        assert value.tzinfo is not None
        assert value.utcoffset() == timezone.utc.utcoffset(None)


class TestGetDateRange:
    """Tests for named periods."""

    def test_this_month(self):
        """Test this-month runs from the first to today."""
        today = date.today()
        assert get_date_range("this-month") == (today.replace(day=1), today)

    def test_this_year(self):
        """Test this-year runs from January 1 to today."""
        today = date.today()
        assert get_date_range("this-year") == (date(today.year, 1, 1), today)

    def test_this_week(self):
        """Test this-week starts on Monday."""
        start, end = get_date_range("this-week")
        assert start.weekday() == 0
        assert end == date.today()

    def test_last_month(self):
        """Test last-month covers the whole previous month."""
        today = date.today()
        start, end = get_date_range("last-month")
        assert start == (today - relativedelta(months=1)).replace(day=1)
        assert end == today.replace(day=1) - timedelta(days=1)
        assert (start.year, start.month) == (end.year, end.month)

    def test_last_year(self):
        """Test last-year covers January 1 to December 31."""
        year = date.today().year - 1
        assert get_date_range("last-year") == (date(year, 1, 1), date(year, 12, 31))

    def test_last_week(self):
        """Test last-week runs Monday to Sunday."""
        start, end = get_date_range("last-week")
        assert start.weekday() == 0
        assert end.weekday() == 6
        assert (end - start).days == 6
        assert end < date.today()

    def test_invalid_period(self):
        """Test an unknown period."""
        with pytest.raises(ValueError, match="Unknown period"):
            get_date_range("fortnight")
