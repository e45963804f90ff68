"""Floating tooltip panel for the hovered data point."""

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFrame, QGridLayout, QLabel, QWidget

from whalewatch.ui.theme.engine import get_theme_engine

# Keeps the panel from sitting under the pointer
TOOLTIP_OFFSET = 12


class ChartTooltip(QFrame):
    """Frameless tool window listing label/value rows.

    Positioned in absolute (desktop) coordinates, so it is a top-level
    window rather than a child of the chart.
    """

    def __init__(self, parent: QWidget = None):
        super().__init__(
            parent,
            Qt.ToolTip | Qt.FramelessWindowHint | Qt.WindowTransparentForInput,
        )
        self.setObjectName("chartTooltip")
        self.setAttribute(Qt.WA_ShowWithoutActivating)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)

        self._layout = QGridLayout(self)
        self._layout.setContentsMargins(8, 6, 8, 6)
        self._layout.setHorizontalSpacing(12)
        self._layout.setVerticalSpacing(2)
        self._keys: list[QLabel] = []
        self._values: list[QLabel] = []
        self.refresh_theme()

    def refresh_theme(self) -> None:
        """Apply the current theme's tooltip colors."""
        self.setStyleSheet(get_theme_engine().tooltip_stylesheet())

    def rows(self) -> list[tuple[str, str]]:
        """Currently displayed (label, value) rows."""
        return [(k.text(), v.text()) for k, v in zip(self._keys, self._values)]

    def show_rows(self, rows: list[tuple[str, str]], screen_x: float, screen_y: float) -> None:
        """Fill the panel and show it next to the given absolute position."""
        self._ensure_row_count(len(rows))
        for (key, value), key_label, value_label in zip(rows, self._keys, self._values):
            key_label.setText(key)
            value_label.setText(value)
        self.adjustSize()
        self.move(int(screen_x) + TOOLTIP_OFFSET, int(screen_y) + TOOLTIP_OFFSET)
        self.show()

    def _ensure_row_count(self, count: int) -> None:
        while len(self._keys) < count:
            row = len(self._keys)
            key_label = QLabel()
            key_label.setObjectName("tooltipKey")
            value_label = QLabel()
            value_label.setObjectName("tooltipValue")
            value_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
            self._layout.addWidget(key_label, row, 0)
            self._layout.addWidget(value_label, row, 1)
            self._keys.append(key_label)
            self._values.append(value_label)
        while len(self._keys) > count:
            key_label = self._keys.pop()
            value_label = self._values.pop()
            self._layout.removeWidget(key_label)
            self._layout.removeWidget(value_label)
            key_label.deleteLater()
            value_label.deleteLater()
