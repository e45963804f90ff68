"""Chart engine: raw records in, renderable scene out.

The engine owns the persistent scales for the lifetime of a chart. Each
render recomputes domains, ranges and paths from its inputs; only the
scales are mutated in place. Once closed, an engine refuses to render so
no new scales can appear behind the backs of the axes bound to the old ones.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from whalewatch.domain.models import ChartPoint, PricePoint, RawPoint, RawPricePoint
from whalewatch.domain.settings import ChartSettings, ViewportSettings
from whalewatch.services.bounds import ChartBounds, compute_bounds, compute_price_domain
from whalewatch.services.paths import ChartGeometry, PathDescription, build_geometry, build_price_path
from whalewatch.services.scales import AxisKey, ContinuousScale, ScaleRegistry
from whalewatch.services.transform import transform_points, transform_prices

logger = logging.getLogger(__name__)


class EngineClosedError(RuntimeError):
    """Raised when a closed ChartEngine is asked for scales or a render."""


@dataclass
class ChartScene:
    """Geometry for one render of the chart."""

    bounds: ChartBounds
    geometry: ChartGeometry
    price_path: Optional[PathDescription] = None
    price_points: list[PricePoint] = field(default_factory=list)

    @property
    def points(self) -> list[ChartPoint]:
        return self.geometry.points

    @property
    def date_range(self) -> tuple[float, float]:
        return self.bounds.date_range

    @property
    def value_range(self) -> tuple[float, float]:
        return self.bounds.value_range

    def price_on(self, date: datetime) -> Optional[float]:
        """Price recorded on exactly this date, if the overlay has one."""
        for price in self.price_points:
            if price.date == date:
                return price.price
        return None


class ChartEngine:
    """Composes transformer, bounds, scales and path builder.

    Example:
        >>> engine = ChartEngine()
        >>> scene = engine.render(raw_points, ViewportSettings(width=400, height=300))
        >>> scene.bounds.value_domain
        (345.0, 0.0)
    """

    def __init__(self, settings: Optional[ChartSettings] = None):
        """Initialize engine.

        Args:
            settings: Chart tuning; defaults to ChartSettings()
        """
        self.settings = settings or ChartSettings()
        self.scales = ScaleRegistry()
        self._closed = False

        self._raw_source: Optional[Sequence[RawPoint]] = None
        self._raw_length = 0
        self._points: list[ChartPoint] = []
        self._price_source: Optional[Sequence[RawPricePoint]] = None
        self._price_length = 0
        self._prices: list[PricePoint] = []

    def transformed(self, raw_points: Sequence[RawPoint]) -> list[ChartPoint]:
        """Transformed points, recomputed only when the input or its length changed."""
        if raw_points is not self._raw_source or len(raw_points) != self._raw_length:
            self._points = transform_points(raw_points)
            self._raw_source = raw_points
            self._raw_length = len(raw_points)
            logger.debug("Transformed %d points", self._raw_length)
        return self._points

    def transformed_prices(self, raw_prices: Sequence[RawPricePoint]) -> list[PricePoint]:
        """Transformed price points, memoized like transformed()."""
        if raw_prices is not self._price_source or len(raw_prices) != self._price_length:
            self._prices = transform_prices(raw_prices)
            self._price_source = raw_prices
            self._price_length = len(raw_prices)
        return self._prices

    def render(
        self,
        raw_points: Sequence[RawPoint],
        viewport: Optional[ViewportSettings] = None,
        raw_prices: Optional[Sequence[RawPricePoint]] = None,
    ) -> ChartScene:
        """Compute the scene for the given inputs.

        Args:
            raw_points: Primary series, non-empty and sorted by date
            viewport: Surface size and margins; defaults to the settings viewport
            raw_prices: Optional price overlay series

        Returns:
            ChartScene with bounds, band geometry and the price overlay

        Raises:
            EmptySeriesError: If raw_points is empty
            EngineClosedError: If the engine was closed
        """
        self._ensure_open()
        viewport = viewport or self.settings.viewport
        points = self.transformed(raw_points)
        bounds = compute_bounds(points, viewport, self.settings.headroom_factor)

        x_scale = self.scales.update(AxisKey.DATE, bounds.date_domain, bounds.date_range)
        y_scale = self.scales.update(AxisKey.VALUE, bounds.value_domain, bounds.value_range)
        geometry = build_geometry(points, x_scale, y_scale, bounds.date_range, bounds.value_range)

        scene = ChartScene(bounds=bounds, geometry=geometry)

        if raw_prices and self.settings.show_price_overlay:
            prices = self.transformed_prices(raw_prices)
            price_domain = compute_price_domain(prices, self.settings.headroom_factor)
            price_scale = self.scales.update(AxisKey.PRICE, price_domain, bounds.value_range)
            scene.price_path, scene.price_points = build_price_path(prices, x_scale, price_scale)

        return scene

    @property
    def closed(self) -> bool:
        return self._closed

    def scale(self, key: AxisKey) -> ContinuousScale:
        """The persistent scale for key; bind axes to this handle once."""
        self._ensure_open()
        return self.scales.get(key)

    def _ensure_open(self) -> None:
        if self._closed:
            raise EngineClosedError("ChartEngine is closed")

    def close(self) -> None:
        """Release the persistent scales; later scale() and render() calls raise."""
        if self._closed:
            return
        self._closed = True
        self.scales.clear()
        self._raw_source = None
        self._price_source = None
        logger.debug("Chart engine closed")
