"""Theme engine providing chart colors and the tooltip stylesheet."""

from enum import Enum
from typing import Optional

from whalewatch.ui.theme.tokens import get_tokens, tokens_to_dict


class Theme(Enum):
    """Available themes."""
    LIGHT = "light"
    DARK = "dark"


TOOLTIP_QSS = """
QFrame#chartTooltip {{
    background-color: {tooltip_bg};
    border: 1px solid {tooltip_border};
    border-radius: 4px;
}}
QLabel#tooltipKey {{
    color: {text_secondary};
    font-weight: 600;
}}
QLabel#tooltipValue {{
    color: {text_primary};
}}
"""


class ThemeEngine:
    """Resolves theme tokens for pyqtgraph items and Qt widgets.

    Usage:
        engine = ThemeEngine()
        engine.set_theme(Theme.DARK)
        pen = pg.mkPen(engine.get_color('bank_stroke'))
    """

    def __init__(self, theme: Theme = Theme.DARK):
        """Initialize theme engine."""
        self._current_theme = theme

    @property
    def current_theme(self) -> Theme:
        """Get currently applied theme."""
        return self._current_theme

    def set_theme(self, theme: Theme) -> None:
        """Switch the active theme."""
        self._current_theme = theme

    def get_color(self, name: str) -> str:
        """Get a color value from the current theme.

        Args:
            name: Token name (e.g., 'bank_fill', 'hover_line')

        Returns:
            Hex color string (#RRGGBB or #RRGGBBAA); black for unknown names
        """
        colors = tokens_to_dict(get_tokens(self._current_theme.value))
        return colors.get(name, '#000000')

    def tooltip_stylesheet(self) -> str:
        """Stylesheet for the tooltip panel in the current theme."""
        return TOOLTIP_QSS.format(**tokens_to_dict(get_tokens(self._current_theme.value)))


# Global instance
_theme_engine: Optional[ThemeEngine] = None


def get_theme_engine() -> ThemeEngine:
    """Get the global theme engine instance.

    Returns:
        ThemeEngine singleton
    """
    global _theme_engine
    if _theme_engine is None:
        _theme_engine = ThemeEngine()
    return _theme_engine
