"""Semantic design tokens for theming.

Chart items reference tokens (e.g. bank_fill, hover_line) and never
hardcode colors.

Palette:
    - #23395B Navy
    - #0D1F2F Deep Navy
    - #BFA159 Gold
    - #D3D3D3 Light Gray
    - #A9A9A9 Mid Gray
"""

from dataclasses import asdict, dataclass
from typing import Dict


# Raw palette
NAVY = "#23395B"
DEEP_NAVY = "#0D1F2F"
GOLD = "#BFA159"
LIGHT_GRAY = "#D3D3D3"
MID_GRAY = "#A9A9A9"
TEAL = "#3FA7A0"


@dataclass(frozen=True)
class SemanticTokens:
    """Semantic token definitions for a theme."""

    # Surfaces and text
    canvas: str              # Chart background
    text_primary: str        # Tooltip values, legend
    text_secondary: str      # Tooltip keys
    axis: str                # Axis lines, ticks and labels

    # Bands
    bank_fill: str           # Combined band (circulating + bank)
    bank_stroke: str
    circulating_fill: str    # Circulating band
    circulating_stroke: str

    # Overlay and interaction
    price_line: str          # Price overlay line
    hover_line: str          # Crosshair
    marker_fill: str         # Data point markers

    # Tooltip
    tooltip_bg: str
    tooltip_border: str


LIGHT_TOKENS = SemanticTokens(
    canvas="#FFFFFF",
    text_primary=DEEP_NAVY,
    text_secondary=NAVY,
    axis=DEEP_NAVY,
    bank_fill="#BFA15966",
    bank_stroke=GOLD,
    circulating_fill="#23395B80",
    circulating_stroke=NAVY,
    price_line=TEAL,
    hover_line=MID_GRAY,
    marker_fill="#FFFFFF",
    tooltip_bg="#FFFFFF",
    tooltip_border=MID_GRAY,
)


DARK_TOKENS = SemanticTokens(
    canvas=DEEP_NAVY,
    text_primary=LIGHT_GRAY,
    text_secondary=MID_GRAY,
    axis=LIGHT_GRAY,
    bank_fill="#BFA15966",
    bank_stroke=GOLD,
    circulating_fill="#4A6FA580",
    circulating_stroke="#4A6FA5",
    price_line=TEAL,
    hover_line=MID_GRAY,
    marker_fill=DEEP_NAVY,
    tooltip_bg=NAVY,
    tooltip_border=GOLD,
)


def get_tokens(theme: str) -> SemanticTokens:
    """Get tokens for a theme.

    Args:
        theme: 'light' or 'dark'

    Returns:
        SemanticTokens for the theme
    """
    if theme == "dark":
        return DARK_TOKENS
    return LIGHT_TOKENS


def tokens_to_dict(tokens: SemanticTokens) -> Dict[str, str]:
    """Convert tokens to a dictionary for lookups and stylesheet substitution."""
    return asdict(tokens)
