"""Domain models for the WhaleWatch chart.

Raw records arrive as plain dictionaries (camelCase keys, as exported by the
dataset). They are turned into immutable dataclasses here and then into
chart points by the transformer service.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping, Optional


@dataclass(frozen=True, slots=True)
class RawPoint:
    """One untransformed sample of the primary series."""

    date: str
    x_jewel: float
    x_jewel_wallets: float
    circulating_jewel: float
    ratio: float

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "RawPoint":
        """Build from a dataset record.

        Args:
            record: Mapping with date, xJewel, xJewelWallets,
                circulatingJewel and ratio keys

        Returns:
            RawPoint instance

        Raises:
            KeyError: If a field is missing
        """
        return cls(
            date=str(record["date"]),
            x_jewel=float(record["xJewel"]),
            x_jewel_wallets=float(record["xJewelWallets"]),
            circulating_jewel=float(record["circulatingJewel"]),
            ratio=float(record["ratio"]),
        )


@dataclass(frozen=True, slots=True)
class RawPricePoint:
    """One untransformed sample of the optional price series."""

    date: str
    price: float

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "RawPricePoint":
        """Build from a dataset record with date and price keys."""
        return cls(date=str(record["date"]), price=float(record["price"]))


@dataclass(frozen=True, slots=True)
class ChartPoint:
    """Transformed sample of the primary series.

    Pixel fields stay None until the path builder places the point.
    """

    date: datetime
    x_jewel: float
    x_jewel_wallets: float
    circulating_jewel: float
    ratio: float
    bank_jewel: float
    x: Optional[float] = None
    circulating_y: Optional[float] = None
    bank_jewel_y: Optional[float] = None

    @property
    def combined(self) -> float:
        """Height of the stacked band (circulating + bank)."""
        return self.circulating_jewel + self.bank_jewel

    def with_pixels(self, x: float, circulating_y: float, bank_jewel_y: float) -> "ChartPoint":
        """Return a copy placed at the given pixel coordinates."""
        return replace(self, x=x, circulating_y=circulating_y, bank_jewel_y=bank_jewel_y)


@dataclass(frozen=True, slots=True)
class PricePoint:
    """Transformed sample of the price overlay."""

    date: datetime
    price: float
    x: Optional[float] = None
    y: Optional[float] = None

    def with_pixels(self, x: float, y: float) -> "PricePoint":
        """Return a copy placed at the given pixel coordinates."""
        return replace(self, x=x, y=y)


@dataclass(frozen=True, slots=True)
class PointerSample:
    """Pointer position captured from a move event.

    screen_x/screen_y are absolute (desktop) coordinates used to anchor the
    tooltip; local_x/local_y are relative to the plotting surface.
    """

    screen_x: float
    screen_y: float
    local_x: float
    local_y: float
