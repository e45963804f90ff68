"""Main application window: chart plus legend key."""

from typing import TYPE_CHECKING

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QVBoxLayout, QWidget

if TYPE_CHECKING:
    from whalewatch.app import ChartContext

from whalewatch.ui.components.chart import WhaleWatchChart
from whalewatch.ui.theme.engine import get_theme_engine


class MainWindow(QMainWindow):
    """Window hosting the WhaleWatch chart.

    The chart shares the context's ChartState, so loading a dataset into
    the context redraws it.
    """

    def __init__(self, context: "ChartContext"):
        """Initialize main window.

        Args:
            context: Application context providing settings and state
        """
        super().__init__()
        self._ctx = context
        self.setWindowTitle("WhaleWatch")
        self._setup_ui()

    def _setup_ui(self) -> None:
        """Set up the UI."""
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)

        self.chart = WhaleWatchChart(self._ctx.settings.chart, self._ctx.state)
        layout.addWidget(self.chart, alignment=Qt.AlignHCenter)
        layout.addLayout(self._build_key())

        self.setCentralWidget(central)
        self.chart.redraw()

    def _build_key(self) -> QHBoxLayout:
        """Legend key naming the two bands."""
        theme = get_theme_engine()
        key = QHBoxLayout()
        key.addStretch()
        for label, color in (
            ("Circulating xJewel (in Jewel)", theme.get_color('bank_stroke')),
            ("Circulating Jewel", theme.get_color('circulating_stroke')),
        ):
            box = QLabel()
            box.setFixedSize(12, 12)
            box.setStyleSheet(f"background-color: {color}; border-radius: 2px;")
            text = QLabel(label)
            text.setStyleSheet(f"color: {theme.get_color('text_primary')};")
            key.addWidget(box)
            key.addWidget(text)
            key.addSpacing(24)
        key.addStretch()
        return key

    def closeEvent(self, event) -> None:
        """Tear the chart down and persist UI state before closing."""
        self.chart.teardown()
        self._ctx.save_settings()
        event.accept()
