"""Display helpers shared by CLI commands."""

from datetime import date

from moneyjar.utils.date_parser import month_key


def format_vnd(amount: float) -> str:
    """Format an amount the Vietnamese way, e.g. 1.500.000 ₫."""
    if amount != amount or amount in (float("inf"), float("-inf")):
        return str(amount)
    return f"{amount:,.0f} ₫".replace(",", ".")


def current_month() -> str:
    return month_key(date.today())
