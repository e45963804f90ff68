"""pyqtgraph axis items placed directly in the chart's pixel-space scene.

The items are not linked to a ViewBox. Their value range and extent come
from the chart's persistent scales through AxisRenderer, and pyqtgraph
picks the tick positions and labels.
"""

from math import ceil, log10
from typing import Optional

import pyqtgraph as pg

AXIS_THICKNESS = {'left': 65, 'right': 45, 'bottom': 20}


class ScaleSurfaceMixin:
    """AxisSurface implementation shared by the numeric and date axes.

    The mixin goes before the AxisItem base so set_scale()/move_to() can use
    setRange(), resize() and setPos() from it.
    """

    def _init_surface(self, thickness: float) -> None:
        self._thickness = thickness
        self._origin = (0.0, 0.0)
        self._span_start = 0.0
        if self.is_vertical:
            self.setWidth(thickness)
        else:
            self.setHeight(thickness)

    @property
    def is_vertical(self) -> bool:
        return self.orientation in ('left', 'right')

    def set_scale(self, domain: tuple[float, float], pixel_range: tuple[float, float]) -> None:
        """Show domain over the pixel span pixel_range of the scene."""
        (start_value, end_value), (start_px, end_px) = domain, pixel_range
        if end_px < start_px:
            start_px, end_px = end_px, start_px
            start_value, end_value = end_value, start_value

        # A flat domain still gets a visible range centred on its value
        if start_value == end_value:
            step = -1.0 if self.is_vertical else 1.0
            start_value, end_value = start_value - step, end_value + step

        length = max(1.0, end_px - start_px)
        self._span_start = start_px
        if self.is_vertical:
            # Pixel y grows downwards; AxisItem ranges run bottom to top
            self.setRange(end_value, start_value)
            self.resize(self._thickness, length)
        else:
            self.setRange(start_value, end_value)
            self.resize(length, self._thickness)
        self._place()

    def move_to(self, x: float, y: float) -> None:
        self._origin = (x, y)
        self._place()

    def _place(self) -> None:
        x, y = self._origin
        if self.orientation == 'left':
            self.setPos(x - self._thickness, self._span_start)
        elif self.orientation == 'right':
            self.setPos(x, self._span_start)
        else:
            self.setPos(self._span_start, y)

    def apply_color(self, color: str) -> None:
        self.setPen(pg.mkPen(color, width=1))
        self.setTextPen(pg.mkPen(color))


class ValueAxisItem(ScaleSurfaceMixin, pg.AxisItem):
    """Numeric axis with thousands-grouped labels (1,250,000)."""

    def __init__(self, orientation: str = 'left', color: Optional[str] = None):
        super().__init__(orientation, maxTickLength=6)
        self.enableAutoSIPrefix(False)
        self._init_surface(AXIS_THICKNESS[orientation])
        if color:
            self.apply_color(color)

    def tickStrings(self, values, scale, spacing):
        places = max(0, ceil(-log10(spacing * scale))) if spacing * scale > 0 else 0
        return [f"{value * scale:,.{places}f}" for value in values]


class DateAxis(ScaleSurfaceMixin, pg.DateAxisItem):
    """Bottom date axis labelled in UTC."""

    def __init__(self, color: Optional[str] = None):
        super().__init__(orientation='bottom', utcOffset=0, maxTickLength=6)
        self._init_surface(AXIS_THICKNESS['bottom'])
        if color:
            self.apply_color(color)
