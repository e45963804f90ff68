"""Domain and range calculation for the chart scales.

The value domain is stored inverted ([max, 0]) because pixel y grows
downward while the chart value grows upward.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from whalewatch.domain.models import ChartPoint, PricePoint
from whalewatch.domain.settings import ViewportSettings

DEFAULT_HEADROOM = 1.15


class EmptySeriesError(ValueError):
    """Raised when a domain is requested for an empty series."""


@dataclass(frozen=True)
class ChartBounds:
    """Domains and pixel ranges for the date and value scales."""

    date_domain: tuple[datetime, datetime]
    value_domain: tuple[float, float]
    date_range: tuple[float, float]
    value_range: tuple[float, float]


def compute_domains(
    points: Sequence[ChartPoint], headroom: float = DEFAULT_HEADROOM
) -> tuple[tuple[datetime, datetime], tuple[float, float]]:
    """Compute the date and value domains.

    Args:
        points: Transformed points, sorted by date
        headroom: Multiplier applied to the tallest stacked band

    Returns:
        (date_domain, value_domain) where date_domain is (first, last) and
        value_domain is (max_combined * headroom, 0)

    Raises:
        EmptySeriesError: If points is empty
    """
    if not points:
        raise EmptySeriesError("Cannot compute domains for an empty series")

    max_value = max(p.combined * headroom for p in points)
    return (points[0].date, points[-1].date), (max_value, 0.0)


def compute_ranges(viewport: ViewportSettings) -> tuple[tuple[float, float], tuple[float, float]]:
    """Compute the pixel ranges left over after the margins.

    Returns:
        (date_range, value_range): [left, width - right] and
        [top, height - bottom]
    """
    margin = viewport.margin
    date_range = (margin.left, viewport.width - margin.right)
    value_range = (margin.top, viewport.height - margin.bottom)
    return date_range, value_range


def compute_bounds(
    points: Sequence[ChartPoint],
    viewport: ViewportSettings,
    headroom: float = DEFAULT_HEADROOM,
) -> ChartBounds:
    """Compute domains and ranges in one step."""
    date_domain, value_domain = compute_domains(points, headroom)
    date_range, value_range = compute_ranges(viewport)
    return ChartBounds(
        date_domain=date_domain,
        value_domain=value_domain,
        date_range=date_range,
        value_range=value_range,
    )


def compute_price_domain(
    prices: Sequence[PricePoint], headroom: float = DEFAULT_HEADROOM
) -> tuple[float, float]:
    """Compute the inverted value domain of the price overlay.

    Raises:
        EmptySeriesError: If prices is empty
    """
    if not prices:
        raise EmptySeriesError("Cannot compute a price domain for an empty series")
    return (max(p.price for p in prices) * headroom, 0.0)
