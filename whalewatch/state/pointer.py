"""Pointer tracking, crosshair and hover resolution.

The controller moves between three phases:

- IDLE: pointer outside the chart surface, nothing shown
- TRACKING: pointer inside, crosshair follows it (within the x range)
- HOVERING: pointer within hit radius of a data marker, tooltip shown

Move events are only listened to while the pointer is inside the surface
and are coalesced to one applied sample per display frame.
"""

import logging
import math
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Sequence

from whalewatch.domain.models import ChartPoint, PointerSample
from whalewatch.state.chart_state import ChartState
from whalewatch.state.frame_throttle import FrameThrottle

logger = logging.getLogger(__name__)


class PointerPhase(Enum):
    """Interaction phase of the chart."""

    IDLE = "idle"
    TRACKING = "tracking"
    HOVERING = "hovering"


@dataclass(frozen=True)
class Crosshair:
    """Guide lines as (x1, y1, x2, y2) in surface coordinates."""

    horizontal: tuple[float, float, float, float]
    vertical: tuple[float, float, float, float]


@dataclass(frozen=True)
class TooltipAnchor:
    """Hovered point and the absolute position to show its tooltip at."""

    point: ChartPoint
    screen_x: float
    screen_y: float


class PointerSource(Protocol):
    """Something that emits pointer samples (the chart surface)."""

    def connect_move(self, callback: Callable[[PointerSample], None]) -> None:
        ...

    def disconnect_move(self, callback: Callable[[PointerSample], None]) -> None:
        ...


class PointerController:
    """Owns pointer/hover state for one chart.

    Writes the applied pointer sample and hovered point into ChartState, so
    the widget only has to subscribe to those observables.
    """

    def __init__(self, state: ChartState, source: PointerSource, hit_radius: float = 4.0):
        """Initialize controller.

        Args:
            state: Chart state receiving pointer and hovered values
            source: Surface that delivers move events while connected
            hit_radius: Max distance in pixels from a marker centre to hover it
        """
        self._state = state
        self._source = source
        self.hit_radius = hit_radius
        self._throttle: FrameThrottle[PointerSample] = FrameThrottle(self._apply)
        self._tracking = False

        self._points: list[ChartPoint] = []
        self._xs: list[float] = []
        self._date_range: tuple[float, float] = (0.0, 0.0)
        self._value_range: tuple[float, float] = (0.0, 0.0)

    @property
    def tracking(self) -> bool:
        """True while the move listener is attached."""
        return self._tracking

    @property
    def throttle(self) -> FrameThrottle[PointerSample]:
        return self._throttle

    @property
    def phase(self) -> PointerPhase:
        if not self._tracking:
            return PointerPhase.IDLE
        if self._state.hovered.value is not None:
            return PointerPhase.HOVERING
        return PointerPhase.TRACKING

    def set_points(self, points: Sequence[ChartPoint]) -> None:
        """Replace the placed points used for hit-testing.

        The hovered point is re-resolved against the new points so a stale
        datum is never kept.
        """
        self._points = [p for p in points if p.x is not None]
        self._xs = [p.x for p in self._points]
        sample = self._state.pointer.value
        if sample is None:
            self._state.hovered.set(None)
        else:
            self._state.hovered.set(self.hit_test(sample.local_x, sample.local_y))

    def set_ranges(self, date_range: tuple[float, float], value_range: tuple[float, float]) -> None:
        """Update the pixel bounds the crosshair is drawn within."""
        self._date_range = date_range
        self._value_range = value_range

    def enter(self) -> None:
        """Pointer entered the surface: start listening for moves."""
        if self._tracking:
            return
        self._tracking = True
        self._source.connect_move(self.move)
        logger.debug("Pointer tracking started")

    def leave(self) -> None:
        """Pointer left the surface: stop listening, then clear everything.

        Tracking ends before the state is cleared, so listeners reacting to
        the cleared values already see the IDLE phase.
        """
        was_tracking = self._tracking
        self._tracking = False
        self._throttle.cancel()
        if was_tracking:
            self._source.disconnect_move(self.move)
            logger.debug("Pointer tracking stopped")
        self._state.clear_interaction()

    def teardown(self) -> None:
        """Detach from the source when the chart goes away."""
        self.leave()
        self._points = []
        self._xs = []

    def move(self, sample: PointerSample) -> None:
        """Queue a sample for the next frame."""
        if not self._tracking:
            return
        self._throttle.push(sample)

    def on_frame(self) -> bool:
        """Apply the latest queued sample (display refresh tick).

        Returns:
            True if a sample was applied
        """
        return self._throttle.tick()

    def _apply(self, sample: PointerSample) -> None:
        self._state.set_interaction(sample, self.hit_test(sample.local_x, sample.local_y))

    def hit_test(self, x: float, y: float) -> Optional[ChartPoint]:
        """Nearest point whose circulating or combined marker is within hit_radius.

        Points are sorted by x, so only those in [x - r, x + r] are checked.
        """
        radius = self.hit_radius
        lo = bisect_left(self._xs, x - radius)
        hi = bisect_right(self._xs, x + radius)

        best: Optional[ChartPoint] = None
        best_distance = math.inf
        for point in self._points[lo:hi]:
            for marker_y in (point.circulating_y, point.bank_jewel_y):
                distance = math.hypot(point.x - x, marker_y - y)
                if distance <= radius and distance < best_distance:
                    best, best_distance = point, distance
        return best

    def crosshair(self) -> Optional[Crosshair]:
        """Guide lines for the current pointer, or None.

        Lines are only produced while the pointer's local x lies within the
        date pixel range.
        """
        sample = self._state.pointer.value
        if sample is None:
            return None
        x_min, x_max = self._date_range
        if not (x_min <= sample.local_x <= x_max):
            return None

        y_min, y_max = self._value_range
        line_y = sample.local_y - 0.5
        line_x = sample.local_x - 0.5
        return Crosshair(
            horizontal=(x_min, line_y, x_max, line_y),
            vertical=(line_x, y_min, line_x, y_max),
        )

    def tooltip(self) -> Optional[TooltipAnchor]:
        """Tooltip anchor for the hovered point, or None."""
        point = self._state.hovered.value
        sample = self._state.pointer.value
        if point is None or sample is None:
            return None
        return TooltipAnchor(point=point, screen_x=sample.screen_x, screen_y=sample.screen_y)
