"""Text formatting for tooltip values."""

import math
from datetime import datetime
from typing import Optional

from whalewatch.domain.models import ChartPoint


def format_number(value: float, max_fraction_digits: int = 3) -> str:
    """Format a number with thousands grouping and up to 3 decimals.

    Example:
        >>> format_number(1234567.891234)
        '1,234,567.891'
        >>> format_number(2.0)
        '2'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-∞" if value < 0 else "∞"

    text = f"{value:,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def ordinal(day: int) -> str:
    """1 -> '1st', 2 -> '2nd', 11 -> '11th', 23 -> '23rd'."""
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_long_date(value: datetime) -> str:
    """Long date form, e.g. 'Friday, January 1st, 2021'."""
    return f"{value.strftime('%A, %B')} {ordinal(value.day)}, {value.year}"


def tooltip_rows(point: ChartPoint, price: Optional[float] = None) -> list[tuple[str, str]]:
    """Label/value rows shown in the hover tooltip.

    Args:
        point: Hovered chart point
        price: Price on the same date from the overlay series, if any

    Returns:
        List of (label, value) tuples in display order
    """
    rows = [
        ("Date:", format_long_date(point.date)),
        ("xJewel:", format_number(point.x_jewel)),
        ("xJewel in Jewel:", format_number(point.bank_jewel)),
        ("Bank Ratio:", format_number(point.ratio)),
        ("Circulating Jewel:", format_number(point.circulating_jewel)),
    ]
    if price is not None:
        rows.append(("Price:", format_number(price)))
    return rows
