"""Pytest fixtures and configuration."""

import os

# Qt must not need a display when the suite runs headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from whalewatch.domain.models import RawPoint, RawPricePoint
from whalewatch.domain.settings import MarginSettings, ViewportSettings


@pytest.fixture
def make_raw_point():
    """Factory fixture for creating raw points."""

    def _make(**kwargs):
        defaults = {
            "date": "2021-01-01",
            "x_jewel": 100.0,
            "x_jewel_wallets": 10.0,
            "circulating_jewel": 50.0,
            "ratio": 2.0,
        }
        defaults.update(kwargs)
        return RawPoint(**defaults)

    return _make


@pytest.fixture
def two_day_points(make_raw_point):
    """Two consecutive days with bank quantities 200 and 240."""
    return [
        make_raw_point(date="2021-01-01", x_jewel=100, ratio=2, circulating_jewel=50, x_jewel_wallets=10),
        make_raw_point(date="2021-01-02", x_jewel=120, ratio=2, circulating_jewel=60, x_jewel_wallets=12),
    ]


@pytest.fixture
def small_viewport():
    """400x300 surface with the default margins."""
    return ViewportSettings(
        width=400,
        height=300,
        margin=MarginSettings(top=20, right=20, bottom=20, left=65),
    )


@pytest.fixture
def two_day_prices():
    """Price overlay covering only the first day."""
    return [RawPricePoint(date="2021-01-01", price=8.5)]
