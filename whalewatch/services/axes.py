"""Dependency-keyed axis updates.

Each axis is a retained surface (a pyqtgraph axis item in the UI) that
computes its own ticks and labels. An AxisRenderer binds one persistent
scale to one surface and only pushes the scale into the surface when the
scale's (domainMin, domainMax, rangeMin, rangeMax) changed since the
previous push.
"""

import logging
from typing import Optional, Protocol

from whalewatch.services.scales import ContinuousScale

logger = logging.getLogger(__name__)


class AxisSurface(Protocol):
    """Retained drawing target for one axis."""

    def set_scale(self, domain: tuple[float, float], pixel_range: tuple[float, float]) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...


class AxisRenderer:
    """Keeps an axis surface in step with a persistent scale.

    Example:
        >>> renderer = AxisRenderer(registry.get(AxisKey.VALUE), surface)
        >>> renderer.render(x=65)   # pushes the scale
        True
        >>> renderer.render(x=65)   # nothing changed
        False
    """

    def __init__(self, scale: ContinuousScale, surface: AxisSurface, name: str = "axis"):
        self.scale = scale
        self.surface = surface
        self.name = name
        self._drawn_dependencies: Optional[tuple] = None
        self._position: Optional[tuple[float, float]] = None

    @property
    def dependencies(self) -> tuple:
        """(domainMin, domainMax, rangeMin, rangeMax) of the bound scale."""
        return self.scale.dependencies()

    def render(self, x: float = 0, y: float = 0) -> bool:
        """Position the surface and update it if the dependencies changed.

        Returns:
            True if the scale was pushed into the surface
        """
        if self._position != (x, y):
            self._position = (x, y)
            self.surface.move_to(x, y)

        dependencies = self.dependencies
        if dependencies == self._drawn_dependencies:
            return False

        self._drawn_dependencies = dependencies
        pixel_range = (float(self.scale.range[0]), float(self.scale.range[-1]))
        self.surface.set_scale(self.scale.numeric_domain(), pixel_range)
        logger.debug("Updated %s for %s", self.name, dependencies)
        return True

    def invalidate(self) -> None:
        """Force the next render() to push the scale again."""
        self._drawn_dependencies = None
