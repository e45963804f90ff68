"""Value cells that announce changes through a Qt signal.

The chart inputs (points, prices, viewport) and the interaction state
(pointer, hovered point) each live in one Observable. Widgets subscribe
while they are alive and unsubscribe on teardown, because the cells may
be shared with, and outlive, the widget.
"""

from typing import Callable, Generic, Optional, TypeVar

from PySide6.QtCore import QObject, Signal

T = TypeVar("T")

Listener = Callable[[T], None]


class Observable(QObject, Generic[T]):
    """A value plus a `changed` signal carrying the new value.

    Equal assignments are ignored, so listeners only hear about real
    changes. Several cells can be assigned first and announced afterwards
    (set(..., notify=False) then notify()) when listeners must never see
    one of them updated without the other.

    Example:
        >>> hovered = Observable(None)
        >>> slot = hovered.subscribe(print)
        >>> hovered.set(point)          # prints the point
        >>> hovered.unsubscribe(slot)
    """

    changed = Signal(object)

    def __init__(self, initial: T, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._value = initial

    @property
    def value(self) -> T:
        return self._value

    def set(self, new_value: T, notify: bool = True) -> bool:
        """Store new_value.

        Args:
            new_value: Value to store
            notify: Emit `changed` right away; pass False to announce later

        Returns:
            True if the stored value changed
        """
        if new_value == self._value:
            return False
        self._value = new_value
        if notify:
            self.changed.emit(new_value)
        return True

    def notify(self) -> None:
        """Emit `changed` with the current value."""
        self.changed.emit(self._value)

    def subscribe(self, listener: Listener) -> Listener:
        """Call listener with every new value; returns it for unsubscribe()."""
        self.changed.connect(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        self.changed.disconnect(listener)
