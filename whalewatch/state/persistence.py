"""JSON storage for AppSettings."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from whalewatch.domain.settings import AppSettings

logger = logging.getLogger(__name__)


class SettingsStore:
    """Reads and writes AppSettings as a JSON file.

    A missing or unreadable file is not an error: load() falls back to the
    defaults so the chart always starts.

    Example:
        >>> store = SettingsStore(Path("/tmp/whalewatch.json"))
        >>> settings = store.load()
        >>> settings.theme.mode = "light"
        >>> store.save(settings)
    """

    DEFAULT_PATH = Path.home() / ".whalewatch_settings.json"

    def __init__(self, path: Optional[Path] = None):
        self._path = path or self.DEFAULT_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AppSettings:
        """Settings from disk, or defaults if the file is absent or invalid."""
        if not self._path.is_file():
            logger.debug("No settings at %s, using defaults", self._path)
            return AppSettings()
        try:
            return AppSettings.model_validate(json.loads(self._path.read_text()))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Ignoring unreadable settings in %s: %s", self._path, e)
            return AppSettings()

    def save(self, settings: AppSettings) -> None:
        """Write settings, creating the parent directory if needed."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(settings.model_dump_json(indent=2))
        logger.debug("Saved settings to %s", self._path)
