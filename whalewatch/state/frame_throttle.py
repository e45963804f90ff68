"""Per-frame coalescing of high-frequency samples.

Pointer move events arrive much faster than the display refreshes.
FrameThrottle keeps a single pending slot: each push overwrites it, and each
frame tick applies whatever is pending (at most one sample). Samples
overwritten before a tick are dropped, never queued.
"""

from typing import Callable, Generic, TypeVar

T = TypeVar("T")

_EMPTY = object()


class FrameThrottle(Generic[T]):
    """Single-slot buffer drained once per display frame.

    Example:
        >>> applied = []
        >>> throttle = FrameThrottle(applied.append)
        >>> throttle.push(1); throttle.push(2)
        >>> throttle.tick()
        True
        >>> applied
        [2]
    """

    def __init__(self, apply: Callable[[T], None]):
        """Initialize throttle.

        Args:
            apply: Called with the latest sample on each frame tick
        """
        self._apply = apply
        self._pending = _EMPTY
        self.dropped = 0

    @property
    def has_pending(self) -> bool:
        return self._pending is not _EMPTY

    def push(self, sample: T) -> None:
        """Replace the pending sample."""
        if self._pending is not _EMPTY:
            self.dropped += 1
        self._pending = sample

    def tick(self) -> bool:
        """Apply the pending sample, if any.

        Returns:
            True if a sample was applied
        """
        if self._pending is _EMPTY:
            return False
        sample, self._pending = self._pending, _EMPTY
        self._apply(sample)
        return True

    def cancel(self) -> None:
        """Discard the pending sample without applying it."""
        self._pending = _EMPTY
