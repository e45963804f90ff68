#!/usr/bin/env python
"""WhaleWatch application entry point.

Usage:
    python main.py [dataset.json]

Without an argument the last opened dataset is restored, falling back to
the bundled sample data.
"""

import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from whalewatch.app import ChartContext
from whalewatch.ui.main_window import MainWindow
from whalewatch.ui.theme.engine import Theme, get_theme_engine


def configure_logging(level: str) -> None:
    """Configure root logging from the settings level."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run() -> None:
    """Run the application."""
    app = QApplication(sys.argv)
    app.setApplicationName("WhaleWatch")

    context = ChartContext()
    configure_logging(context.settings.logging.level)
    get_theme_engine().set_theme(Theme(context.settings.theme.mode))

    # Priority: command line argument, last dataset, bundled sample
    requested = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    opened = context.open_first_available(requested)
    if opened is None:
        logging.getLogger(__name__).error("No dataset could be loaded")
        sys.exit(1)

    window = MainWindow(context)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    run()
