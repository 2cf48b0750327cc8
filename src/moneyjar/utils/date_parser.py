"""Date parsing utilities."""

from datetime import date, datetime, timedelta, UTC
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024" (day first), etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    # ISO strings must not be read day-first
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    try:
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_timestamp(value: str) -> datetime:
    """Parse a persisted ISO-8601 timestamp (e.g. "2024-01-15T10:30:00.000Z").

    Timestamps without an offset are taken as UTC.
    """
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Could not parse timestamp '{value}': {e}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def at_current_time(day: date) -> datetime:
    """Combine a calendar day with the current UTC time of day."""
    return datetime.combine(day, datetime.now(UTC).time(), tzinfo=UTC)


def month_key(value: date | datetime) -> str:
    """Return the YYYY-MM key for a date."""
    return value.strftime("%Y-%m")


def parse_month(month_str: str) -> date:
    """Parse a YYYY-MM month key (or any date) into the first day of that month.

    Raises:
        ValueError: If the string is not a month or date
    """
    month_str = month_str.strip().lower()
    try:
        return datetime.strptime(month_str, "%Y-%m").date()
    except ValueError:
        return parse_date(month_str).replace(day=1)


def shift_month(month: str, months: int) -> str:
    """Return the month key ``months`` away from ``month`` (negative goes back)."""
    first = datetime.strptime(month, "%Y-%m").date()
    return month_key(first + relativedelta(months=months))


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, this-year, this-week, last-month, last-year, last-week)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "this-week":
        return (today - timedelta(days=today.weekday()), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        end_date = start_date + timedelta(days=6)
        return (start_date, end_date)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, "
            "this-week, last-month, last-year, last-week"
        )
