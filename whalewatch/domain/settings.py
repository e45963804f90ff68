"""Application settings with Pydantic validation.

Settings are stored as JSON and validated using Pydantic models.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class MarginSettings(BaseModel):
    """Space reserved around the plotting rectangle for axis labels."""

    top: float = Field(default=20, ge=0)
    right: float = Field(default=20, ge=0)
    bottom: float = Field(default=20, ge=0)
    left: float = Field(default=65, ge=0)

    model_config = {"validate_assignment": True}


class ViewportSettings(BaseModel):
    """Target size of the chart surface in pixels."""

    width: float = Field(default=1176, gt=0)
    height: float = Field(default=640, gt=0)
    margin: MarginSettings = Field(default_factory=MarginSettings)

    model_config = {"validate_assignment": True}


class ChartSettings(BaseModel):
    """Rendering and interaction tuning.

    headroom_factor leaves space above the tallest stacked band, and
    frame_rate bounds how often pointer samples are applied.
    """

    viewport: ViewportSettings = Field(default_factory=ViewportSettings)
    headroom_factor: float = Field(default=1.15, ge=1.0, le=3.0)
    marker_radius: float = Field(default=4.0, gt=0, le=20)
    hit_radius: float = Field(default=4.0, gt=0, le=50)
    frame_rate: int = Field(default=60, ge=1, le=240)
    show_price_overlay: bool = True

    model_config = {"validate_assignment": True}


class ThemeSettings(BaseModel):
    """Theme configuration."""

    mode: str = Field(default="dark", pattern="^(dark|light)$")

    model_config = {"validate_assignment": True}


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    model_config = {"validate_assignment": True}


class UIStateSettings(BaseModel):
    """UI state to persist across sessions."""

    last_dataset: Optional[Path] = None

    model_config = {"validate_assignment": True}


class AppSettings(BaseModel):
    """Application settings with validation.

    All settings are validated using Pydantic. Invalid values will raise
    validation errors when loading from JSON.

    Example:
        >>> settings = AppSettings()
        >>> settings.chart.viewport.width = 800
        >>> settings.theme.mode = "light"
    """

    chart: ChartSettings = Field(default_factory=ChartSettings)
    theme: ThemeSettings = Field(default_factory=ThemeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    ui_state: UIStateSettings = Field(default_factory=UIStateSettings)

    model_config = {
        "validate_assignment": True,  # Validate on attribute assignment
        "extra": "forbid",  # Forbid extra fields
    }
