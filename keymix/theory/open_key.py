"""
Open Key notation - the 24-position key wheel used for harmonic mixing.

Every key is a number (1-12) plus a mode letter:
- "m" = MINOR keys (inner circle)
- "d" = MAJOR keys (outer circle)

Neighbouring numbers are a fifth apart, so moving around the wheel is plain
modular arithmetic over 12 positions. Camelot letters are accepted as legacy
aliases when parsing ("A" = minor, "B" = major).
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

MAJOR = "d"
MINOR = "m"

LETTERS = (MINOR, MAJOR)

# Lowercase letter -> canonical letter (Camelot A/B map onto m/d)
_LETTER_ALIASES: Dict[str, str] = {
    "a": MINOR,
    "m": MINOR,
    "b": MAJOR,
    "d": MAJOR,
}

_KEY_PATTERN = re.compile(r"^([0-9]{1,2})([abdm])$", re.IGNORECASE)

_MAX_KEY_TEXT_LENGTH = 3


def wrap_number(value: int) -> int:
    """Wrap any integer onto the 1-12 wheel positions."""
    return ((value - 1) % 12) + 1


@dataclass(frozen=True)
class OpenKey:
    """A position on the Open Key wheel."""

    number: int
    letter: str

    def __post_init__(self):
        if self.letter not in LETTERS:
            raise ValueError(f"Invalid Open Key letter: {self.letter!r}")
        object.__setattr__(self, "number", wrap_number(int(self.number)))

    @property
    def is_major(self) -> bool:
        return self.letter == MAJOR

    @property
    def is_minor(self) -> bool:
        return self.letter == MINOR

    def shift(self, delta: int) -> "OpenKey":
        """Move around the wheel by a signed number of positions."""
        return OpenKey(self.number + delta, self.letter)

    def with_letter(self, letter: str) -> "OpenKey":
        """Same wheel number in the given mode."""
        return OpenKey(self.number, letter)

    def to_dict(self) -> Dict[str, Any]:
        return {"number": self.number, "letter": self.letter}

    def __str__(self) -> str:
        return format_key(self)


KeyLike = Union[OpenKey, str]

# Seed key for empty timelines and unreadable input
DEFAULT_KEY = OpenKey(8, MINOR)


def parse_key(text: Any) -> Optional[OpenKey]:
    """
    Parse Open Key text into a key.

    Accepts a 1-2 digit number followed by one letter, case-insensitive.
    Camelot letters are normalized ("8A" -> 8m, "8B" -> 8d).

    Args:
        text: Key text (e.g., "8m", "12d", "8A")

    Returns:
        OpenKey or None if the text is not a valid key
    """
    if not text or not isinstance(text, str) or len(text) > _MAX_KEY_TEXT_LENGTH:
        return None

    match = _KEY_PATTERN.match(text.strip())
    if not match:
        return None

    number = int(match.group(1))
    if not 1 <= number <= 12:
        return None

    return OpenKey(number, _LETTER_ALIASES[match.group(2).lower()])


def format_key(key: OpenKey) -> str:
    """
    Format a key as canonical Open Key text.

    Args:
        key: Key to format

    Returns:
        Lowercase canonical text (e.g., "8m")
    """
    return f"{key.number}{key.letter}"


def is_key(value: Any) -> bool:
    """
    Check whether a value of unknown shape is a valid key.

    Used when rehydrating stored or imported data. Accepts OpenKey instances
    and mappings with a canonical "letter" and an integer "number" in 1-12.
    """
    if isinstance(value, OpenKey):
        return True
    if not isinstance(value, Mapping):
        return False

    number = value.get("number")
    letter = value.get("letter")
    if isinstance(number, bool) or not isinstance(number, int):
        return False
    return letter in LETTERS and 1 <= number <= 12


def coerce_key(value: Any, default: Optional[OpenKey] = DEFAULT_KEY) -> Optional[OpenKey]:
    """
    Turn a stored or user-supplied key of any shape into an OpenKey.

    Args:
        value: OpenKey, key text, or a {"number", "letter"} mapping
        default: Returned when the value is not a valid key

    Returns:
        The parsed key, or the default
    """
    if isinstance(value, OpenKey):
        return value
    if isinstance(value, str):
        parsed = parse_key(value)
        return parsed if parsed is not None else default
    if is_key(value):
        return OpenKey(value["number"], value["letter"])
    return default


def all_keys() -> List[OpenKey]:
    """
    Get all 24 keys for a start-key picker.

    Returns:
        Minor keys 1m-12m followed by major keys 1d-12d
    """
    return [OpenKey(number, letter) for letter in LETTERS for number in range(1, 13)]
