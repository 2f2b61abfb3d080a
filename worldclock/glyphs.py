"""Block-character glyphs for the large clock digits.

Every glyph is five rows tall and five columns wide. Only the characters a
12-hour clock needs are defined: digits, colon, space and the letters of
"AM"/"PM".
"""

from __future__ import annotations

from types import MappingProxyType

GLYPH_HEIGHT = 5
GLYPH_WIDTH = 5

GLYPHS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "0": ("█████", "█   █", "█   █", "█   █", "█████"),
        "1": ("  █  ", " ██  ", "  █  ", "  █  ", "█████"),
        "2": ("█████", "    █", "█████", "█    ", "█████"),
        "3": ("█████", "    █", "█████", "    █", "█████"),
        "4": ("█   █", "█   █", "█████", "    █", "    █"),
        "5": ("█████", "█    ", "█████", "    █", "█████"),
        "6": ("█████", "█    ", "█████", "█   █", "█████"),
        "7": ("█████", "    █", "    █", "    █", "    █"),
        "8": ("█████", "█   █", "█████", "█   █", "█████"),
        "9": ("█████", "█   █", "█████", "    █", "█████"),
        ":": ("     ", "  █  ", "     ", "  █  ", "     "),
        " ": ("     ", "     ", "     ", "     ", "     "),
        "A": ("     ", " ██  ", "█  █ ", "████ ", "█  █ "),
        "M": ("     ", "█ █ █", "█████", "█ █ █", "█   █"),
        "P": ("     ", "████ ", "█  █ ", "████ ", "█    "),
    }
)


def glyph_rows(char: str) -> tuple[str, ...] | None:
    """Return the five rows for *char*, or ``None`` if it has no glyph."""
    return GLYPHS.get(char)
