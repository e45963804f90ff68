"""Continuous scales with stable identity.

A scale maps a domain (dates or values) onto a pixel range. Scales are
created once per axis and afterwards only have their domain and range
mutated, so axis renderers holding a reference keep working across
updates. ScaleRegistry is the cache that guarantees one handle per axis.
Tick placement and labels are left to the axis items that display them.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Sequence, Union

logger = logging.getLogger(__name__)

DomainValue = Union[float, datetime]


class ContinuousScale:
    """Linear interpolation from a two-value domain onto a pixel range."""

    kind = "continuous"

    def __init__(
        self,
        domain: Sequence[DomainValue] = (0.0, 1.0),
        range: Sequence[float] = (0.0, 1.0),
    ):
        """Initialize scale.

        Args:
            domain: (min, max) input values; may be reversed
            range: (min, max) output pixels
        """
        self._domain = tuple(domain)
        self._range = tuple(range)

    @property
    def domain(self) -> tuple:
        """Current (start, end) domain."""
        return self._domain

    @property
    def range(self) -> tuple:
        """Current (start, end) pixel range."""
        return self._range

    def update(self, domain: Sequence[DomainValue], range: Sequence[float]) -> "ContinuousScale":
        """Mutate domain and range in place.

        Returns:
            self, so the caller keeps holding the same handle
        """
        self._domain = tuple(domain)
        self._range = tuple(range)
        return self

    def dependencies(self) -> tuple:
        """(domainMin, domainMax, rangeMin, rangeMax) for change detection."""
        return (self._domain[0], self._domain[-1], self._range[0], self._range[-1])

    def to_number(self, value: DomainValue) -> float:
        return float(value)

    def numeric_domain(self) -> tuple[float, float]:
        """Domain endpoints as plain floats, in domain order."""
        return (self.to_number(self._domain[0]), self.to_number(self._domain[-1]))

    def to_pixel(self, value: DomainValue) -> float:
        """Map a domain value to a pixel coordinate.

        A degenerate domain (start == end) maps everything to the middle of
        the range.
        """
        d0 = self.to_number(self._domain[0])
        d1 = self.to_number(self._domain[-1])
        r0, r1 = self._range[0], self._range[-1]
        span = d1 - d0
        t = (self.to_number(value) - d0) / span if span else 0.5
        return r0 + t * (r1 - r0)

    __call__ = to_pixel


class LinearScale(ContinuousScale):
    """Numeric domain scale."""

    kind = "linear"


class TimeScale(ContinuousScale):
    """Date domain scale; dates are placed by their POSIX timestamp."""

    kind = "time"

    def to_number(self, value: DomainValue) -> float:
        if isinstance(value, datetime):
            return value.timestamp()
        return float(value)


class AxisKey(Enum):
    """Identity key of each persistent scale."""

    DATE = "date"
    VALUE = "value"
    PRICE = "price"


SCALE_FACTORIES: dict[AxisKey, Callable[[], ContinuousScale]] = {
    AxisKey.DATE: TimeScale,
    AxisKey.VALUE: LinearScale,
    AxisKey.PRICE: LinearScale,
}


class ScaleRegistry:
    """Holds exactly one scale per axis for the lifetime of a chart.

    Example:
        >>> registry = ScaleRegistry()
        >>> scale = registry.get(AxisKey.VALUE)
        >>> registry.update(AxisKey.VALUE, (345, 0), (20, 280)) is scale
        True
    """

    def __init__(self, factories: Optional[dict[AxisKey, Callable[[], ContinuousScale]]] = None):
        self._factories = factories or SCALE_FACTORIES
        self._scales: dict[AxisKey, ContinuousScale] = {}

    def get(self, key: AxisKey) -> ContinuousScale:
        """Return the scale for key, creating it on first access."""
        scale = self._scales.get(key)
        if scale is None:
            scale = self._factories[key]()
            self._scales[key] = scale
            logger.debug("Created %s scale for %s axis", scale.kind, key.value)
        return scale

    def update(
        self, key: AxisKey, domain: Sequence[DomainValue], range: Sequence[float]
    ) -> ContinuousScale:
        """Mutate the scale for key in place and return the same handle."""
        scale = self.get(key)
        if scale.domain != tuple(domain) or scale.range != tuple(range):
            logger.debug("Updating %s scale: domain=%s range=%s", key.value, domain, range)
        return scale.update(domain, range)

    def __contains__(self, key: AxisKey) -> bool:
        return key in self._scales

    def clear(self) -> None:
        """Drop all scales (engine close)."""
        self._scales.clear()
