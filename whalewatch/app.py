"""Application context and dataset loading.

The ChartContext wires settings, persistence and chart state together and
provides them to the UI layer.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from whalewatch.domain.models import RawPoint, RawPricePoint
from whalewatch.domain.settings import AppSettings
from whalewatch.state.chart_state import ChartState
from whalewatch.state.persistence import SettingsStore

logger = logging.getLogger(__name__)

SAMPLE_DATASET = Path(__file__).parent / "resources" / "sample_data.json"


class DatasetError(ValueError):
    """Raised when a dataset file is missing records or malformed."""


def parse_dataset(data: Any) -> tuple[list[RawPoint], list[RawPricePoint]]:
    """Parse dataset JSON content.

    Accepts either a bare list of primary records or an object with a
    "data" list and an optional "prices" list.

    Raises:
        DatasetError: If there are no primary records or a record is malformed
    """
    if isinstance(data, list):
        records, price_records = data, []
    elif isinstance(data, dict):
        records = data.get("data") or []
        price_records = data.get("prices") or []
    else:
        raise DatasetError("Dataset must be a list or an object with a 'data' list")

    if not records:
        raise DatasetError("Dataset contains no data points")

    try:
        points = [RawPoint.from_dict(record) for record in records]
        prices = [RawPricePoint.from_dict(record) for record in price_records]
    except (KeyError, TypeError, ValueError) as e:
        raise DatasetError(f"Malformed dataset record: {e}") from e

    return points, prices


def load_dataset(path: Path) -> tuple[list[RawPoint], list[RawPricePoint]]:
    """Read and parse a dataset JSON file.

    Raises:
        DatasetError: If the file can't be read or parsed
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DatasetError(f"Could not read dataset {path}: {e}") from e
    return parse_dataset(data)


class ChartContext:
    """Application context providing settings and chart state.

    Example:
        >>> ctx = ChartContext()
        >>> ctx.open_dataset(Path("whale_watch.json"))
        >>> len(ctx.state.raw_points.value)
        120
    """

    def __init__(self, settings_store: Optional[SettingsStore] = None):
        """Initialize application context.

        Args:
            settings_store: Optional store; defaults to ~/.whalewatch_settings.json
        """
        self.settings_store = settings_store or SettingsStore()
        self.settings: AppSettings = self.settings_store.load()

        self.state = ChartState()
        self.state.viewport.set(self.settings.chart.viewport)

    def open_dataset(self, path: Path) -> None:
        """Load a dataset into the chart state and remember it.

        Raises:
            DatasetError: If the dataset can't be loaded
        """
        points, prices = load_dataset(path)
        self.state.raw_prices.set(prices)
        self.state.raw_points.set(points)
        if Path(path) != SAMPLE_DATASET:
            self.settings.ui_state.last_dataset = Path(path)
        logger.info("Loaded %d points and %d prices from %s", len(points), len(prices), path)

    def open_first_available(self, *candidates: Optional[Path]) -> Optional[Path]:
        """Open the first candidate that loads, falling back to the sample.

        Returns:
            Path that was opened, or None if even the sample failed
        """
        for path in (*candidates, self.settings.ui_state.last_dataset, SAMPLE_DATASET):
            if path is None:
                continue
            try:
                self.open_dataset(path)
                return Path(path)
            except DatasetError as e:
                logger.warning("Skipping dataset: %s", e)
        return None

    def save_settings(self) -> None:
        """Persist settings (including the last opened dataset)."""
        self.settings_store.save(self.settings)
