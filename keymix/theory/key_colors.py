"""
Display colours for the Open Key wheel.

Both modes of a wheel number share one colour, so relative major/minor
pairs read as the same family.
"""

from typing import Dict

from keymix.theory.open_key import parse_key

# Wheel number -> hex colour
KEY_COLORS: Dict[int, str] = {
    1: "#FF1AF1",
    2: "#B85FFF",
    3: "#068CFF",
    4: "#00CDFF",
    5: "#00EBE9",
    6: "#00D989",
    7: "#00FF00",
    8: "#70FF00",
    9: "#FFD400",
    10: "#FF8500",
    11: "#FF5500",
    12: "#FF2F3E",
}

UNKNOWN_KEY_COLOR = "#9ca3af"


def key_color(key_text: str) -> str:
    """
    Get the display colour for key text.

    Args:
        key_text: Open Key or Camelot text (e.g., "8m", "8A")

    Returns:
        Hex colour, or neutral grey for unreadable text
    """
    key = parse_key(key_text.strip()) if isinstance(key_text, str) else None
    if key is None:
        return UNKNOWN_KEY_COLOR
    return KEY_COLORS[key.number]
