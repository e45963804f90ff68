"""Central chart state.

ChartState holds the chart inputs and the pointer/hover state in Observable
containers so the widget can redraw when any of them changes.
"""

from dataclasses import dataclass, field
from typing import Optional

from whalewatch.domain.models import ChartPoint, PointerSample, RawPoint, RawPricePoint
from whalewatch.domain.settings import ViewportSettings
from whalewatch.state.observable import Observable


@dataclass
class ChartState:
    """Chart inputs and interaction state.

    Example:
        >>> state = ChartState()
        >>> state.hovered.subscribe(lambda point: print(point))
        >>> state.hovered.set(None)  # no emission, value unchanged
    """

    # Inputs
    raw_points: Observable[list[RawPoint]] = field(default_factory=lambda: Observable([]))
    raw_prices: Observable[list[RawPricePoint]] = field(default_factory=lambda: Observable([]))
    viewport: Observable[ViewportSettings] = field(
        default_factory=lambda: Observable(ViewportSettings())
    )

    # Interaction
    pointer: Observable[Optional[PointerSample]] = field(default_factory=lambda: Observable(None))
    hovered: Observable[Optional[ChartPoint]] = field(default_factory=lambda: Observable(None))

    def set_interaction(
        self, pointer: Optional[PointerSample], hovered: Optional[ChartPoint]
    ) -> None:
        """Replace pointer and hover state together.

        Both cells are assigned before either announces, so listeners never
        see a new pointer next to a stale hovered point.
        """
        changed = [
            obs
            for obs, value in ((self.hovered, hovered), (self.pointer, pointer))
            if obs.set(value, notify=False)
        ]
        for obs in changed:
            obs.notify()

    def clear_interaction(self) -> None:
        """Drop pointer and hover state together."""
        self.set_interaction(None, None)
