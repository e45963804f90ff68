"""Data transformer: raw dataset records to typed chart points."""

from datetime import datetime, timezone
from typing import Sequence

from dateutil.parser import isoparse

from whalewatch.domain.models import ChartPoint, PricePoint, RawPoint, RawPricePoint


def parse_date(value: str) -> datetime:
    """Parse an ISO date string into a UTC-aware datetime.

    Date-only strings are UTC midnight. Strings without an offset are
    treated as UTC.

    Raises:
        ValueError: If the string is not ISO 8601
    """
    parsed = isoparse(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def transform_points(raw_points: Sequence[RawPoint]) -> list[ChartPoint]:
    """Map raw records to chart points.

    Order is preserved and nothing is re-sorted. The bank quantity is
    derived as xJewel * ratio.

    Args:
        raw_points: Raw primary series (may be empty; callers guard)

    Returns:
        Chart points, same length as the input

    Example:
        >>> raw = [RawPoint("2021-01-01", 100, 10, 50, 2)]
        >>> transform_points(raw)[0].bank_jewel
        200.0
    """
    return [
        ChartPoint(
            date=parse_date(raw.date),
            x_jewel=raw.x_jewel,
            x_jewel_wallets=raw.x_jewel_wallets,
            circulating_jewel=raw.circulating_jewel,
            ratio=raw.ratio,
            bank_jewel=raw.x_jewel * raw.ratio,
        )
        for raw in raw_points
    ]


def transform_prices(raw_prices: Sequence[RawPricePoint]) -> list[PricePoint]:
    """Map raw price records to price points, preserving order."""
    return [PricePoint(date=parse_date(raw.date), price=raw.price) for raw in raw_prices]
