"""Path builder for the stacked area chart.

Walks the transformed points once, placing each point in pixel space and
extending two outlines: the circulating band and the combined band
(circulating + bank). Both outlines are then closed along the bottom of
the plot so they can be filled as polygons.
"""

import math
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from whalewatch.domain.models import ChartPoint, PricePoint
from whalewatch.services.scales import ContinuousScale

MOVE = "M"
LINE = "L"
CLOSE = "Z"


def _format_coordinate(value: float) -> str:
    if not math.isfinite(value):
        return "NaN"
    text = repr(round(float(value), 6))
    return text[:-2] if text.endswith(".0") else text


class PathDescription:
    """Renderer-independent path made of move, line and close commands.

    str() gives SVG path data, e.g. "M65,230L355,200L355,280L65,280Z".
    """

    def __init__(self):
        self._commands: list[tuple[str, tuple[float, ...]]] = []

    @property
    def commands(self) -> list[tuple[str, tuple[float, ...]]]:
        """List of (command, args) tuples."""
        return list(self._commands)

    def move_to(self, x: float, y: float) -> None:
        self._commands.append((MOVE, (x, y)))

    def line_to(self, x: float, y: float) -> None:
        self._commands.append((LINE, (x, y)))

    def close_path(self) -> None:
        self._commands.append((CLOSE, ()))

    def subpaths(self) -> Iterator[list[tuple[str, tuple[float, ...]]]]:
        """Yield the commands of each subpath (split on move)."""
        current: list[tuple[str, tuple[float, ...]]] = []
        for command in self._commands:
            if command[0] == MOVE and current:
                yield current
                current = []
            current.append(command)
        if current:
            yield current

    @property
    def is_closed(self) -> bool:
        """True when the path is non-empty and every subpath ends with a close."""
        subpaths = list(self.subpaths())
        return bool(subpaths) and all(sub[-1][0] == CLOSE for sub in subpaths)

    def vertices(self) -> list[tuple[float, float]]:
        """Coordinates of all move and line commands, in order."""
        return [args for cmd, args in self._commands if cmd != CLOSE]

    def __bool__(self) -> bool:
        return bool(self._commands)

    def __str__(self) -> str:
        parts = []
        for cmd, args in self._commands:
            if cmd == CLOSE:
                parts.append(CLOSE)
            else:
                parts.append(cmd + ",".join(_format_coordinate(v) for v in args))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"PathDescription({str(self)!r})"


@dataclass
class ChartGeometry:
    """Output of the path builder."""

    points: list[ChartPoint] = field(default_factory=list)
    circulating_path: PathDescription = field(default_factory=PathDescription)
    bank_path: PathDescription = field(default_factory=PathDescription)


def build_geometry(
    points: Sequence[ChartPoint],
    x_scale: ContinuousScale,
    y_scale: ContinuousScale,
    date_range: tuple[float, float],
    value_range: tuple[float, float],
) -> ChartGeometry:
    """Place points in pixel space and build the two band outlines.

    Args:
        points: Transformed points in date order
        x_scale: Date scale
        y_scale: Value scale (inverted domain)
        date_range: (left, right) pixel bounds of the plot
        value_range: (top, bottom) pixel bounds of the plot

    Returns:
        ChartGeometry with pixel-augmented points and two closed paths.
        A single point gives a zero-width polygon; no points give empty paths.
    """
    geometry = ChartGeometry()
    circulating_path = geometry.circulating_path
    bank_path = geometry.bank_path

    for index, point in enumerate(points):
        x = x_scale(point.date)
        circulating_y = y_scale(point.circulating_jewel)
        bank_jewel_y = y_scale(point.circulating_jewel + point.bank_jewel)
        geometry.points.append(point.with_pixels(x, circulating_y, bank_jewel_y))

        if index == 0:
            circulating_path.move_to(x, circulating_y)
            bank_path.move_to(x, bank_jewel_y)
        else:
            circulating_path.line_to(x, circulating_y)
            bank_path.line_to(x, bank_jewel_y)

    if not geometry.points:
        return geometry

    # Down to the bottom-right corner, across to bottom-left, back to start
    bottom = value_range[1]
    for path in (bank_path, circulating_path):
        path.line_to(date_range[1], bottom)
        path.line_to(date_range[0], bottom)
        path.close_path()

    return geometry


def build_price_path(
    prices: Sequence[PricePoint],
    x_scale: ContinuousScale,
    price_scale: ContinuousScale,
) -> tuple[PathDescription, list[PricePoint]]:
    """Build the open overlay line for the price series.

    The price series is placed against its own points only; it is not
    aligned or interpolated to the primary series.
    """
    path = PathDescription()
    placed = []
    for index, price in enumerate(prices):
        x = x_scale(price.date)
        y = price_scale(price.price)
        placed.append(price.with_pixels(x, y))
        if index == 0:
            path.move_to(x, y)
        else:
            path.line_to(x, y)
    return path, placed
