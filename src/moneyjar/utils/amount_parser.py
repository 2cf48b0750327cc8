"""Amount parsing utilities."""

import re

_SUFFIXES = {
    "k": 1_000,
    "nghìn": 1_000,
    "tr": 1_000_000,
    "triệu": 1_000_000,
    "củ": 1_000_000,
    "m": 1_000_000,
    "tỷ": 1_000_000_000,
    "ty": 1_000_000_000,
}


def parse_amount(amount_str: str) -> float:
    """Parse a VND amount string into a float.

    Handles various formats:
    - "150000"
    - "1.500.000" (dot thousands separator)
    - "1,500,000"
    - "150k", "2tr", "1,5 tỷ" (shorthand multipliers; separator is decimal)
    - "1.500.000 ₫", "1.500.000đ"

    Args:
        amount_str: Amount string

    Returns:
        Amount as float

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip().lower()

    # Remove currency markers
    text = re.sub(r"(₫|vnd|đ)$", "", text).strip()

    multiplier = 1
    for suffix in sorted(_SUFFIXES, key=len, reverse=True):
        if text.endswith(suffix):
            multiplier = _SUFFIXES[suffix]
            text = text[: -len(suffix)].strip()
            break

    if multiplier == 1:
        # Separators are thousands groupings
        text = text.replace(".", "").replace(",", "")
    else:
        text = text.replace(",", ".")

    try:
        return float(text) * multiplier
    except ValueError as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

