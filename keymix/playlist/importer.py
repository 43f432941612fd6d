"""
Playlist import - turns external track records into a mix.

Traktor stores each track's key as a MUSICAL_KEY value between 0 and 23.
This module maps those codes onto the Open Key wheel and builds one track
per record, in playlist order.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import structlog

from keymix.theory.open_key import DEFAULT_KEY, MAJOR, MINOR, OpenKey
from keymix.timeline.mix import Mix, create_mix, new_track, with_tracks

logger = structlog.get_logger()

# Traktor MUSICAL_KEY value -> Open Key
EXTERNAL_KEY_CODES: Dict[int, OpenKey] = {
    0: OpenKey(1, MAJOR),
    1: OpenKey(8, MAJOR),
    2: OpenKey(3, MAJOR),
    3: OpenKey(10, MAJOR),
    4: OpenKey(5, MAJOR),
    5: OpenKey(12, MAJOR),
    6: OpenKey(7, MAJOR),
    7: OpenKey(2, MAJOR),
    8: OpenKey(9, MAJOR),
    9: OpenKey(4, MAJOR),
    10: OpenKey(11, MAJOR),
    11: OpenKey(6, MAJOR),
    12: OpenKey(10, MINOR),
    13: OpenKey(5, MINOR),
    14: OpenKey(12, MINOR),
    15: OpenKey(7, MINOR),
    16: OpenKey(2, MINOR),
    17: OpenKey(9, MINOR),
    18: OpenKey(4, MINOR),
    19: OpenKey(11, MINOR),
    20: OpenKey(6, MINOR),
    21: OpenKey(1, MINOR),
    22: OpenKey(8, MINOR),
    23: OpenKey(3, MINOR),
}


@dataclass
class ImportRecord:
    """One track as extracted from an external playlist."""
    title: str = ""
    artist: str = ""
    tempo: Optional[float] = None
    raw_key_code: Optional[int] = None


def map_external_key_code(code: Any) -> Optional[OpenKey]:
    """
    Convert an external key code to Open Key.

    Args:
        code: Integer key code (0-23)

    Returns:
        OpenKey, or None for anything outside the table
    """
    if isinstance(code, bool) or not isinstance(code, int):
        return None
    return EXTERNAL_KEY_CODES.get(code)


def round_tempo(tempo: float) -> int:
    """Round half up, so 127.5 BPM reads as 128."""
    return int(math.floor(tempo + 0.5))


def format_track_title(title: str, artist: str) -> str:
    """Combine title and artist as "<title> - <artist>"."""
    title = (title or "").strip()
    artist = (artist or "").strip()
    if title and artist:
        return f"{title} - {artist}"
    return title or artist


def format_tempo_details(tempo: Optional[float]) -> str:
    if isinstance(tempo, bool) or not isinstance(tempo, (int, float)) or not math.isfinite(tempo):
        return ""
    return f"{round_tempo(tempo)} BPM"


def build_mix_from_import(
    name: str,
    records: Sequence[ImportRecord],
    default_key: OpenKey = DEFAULT_KEY,
) -> Mix:
    """
    Build a mix from imported playlist records.

    Every record becomes a track, even when its key cannot be mapped, so the
    mix always has exactly one track per record.

    Args:
        name: Playlist name
        records: Track records in playlist order
        default_key: Key for records without a usable key code

    Returns:
        New Mix
    """
    tracks = []
    unmapped = 0
    for record in records:
        key = map_external_key_code(record.raw_key_code)
        if key is None:
            unmapped += 1
            key = default_key
        tracks.append(
            new_track(
                key,
                title=format_track_title(record.title, record.artist),
                details=format_tempo_details(record.tempo),
            )
        )

    if unmapped:
        logger.warning(
            "Imported tracks without a usable key",
            playlist=name,
            unmapped=unmapped,
            default_key=str(default_key),
        )

    mix = with_tracks(create_mix(name=name, default_key=default_key), tracks, default_key)

    logger.info("Imported playlist", playlist=mix.name, tracks=len(mix.tracks))
    return mix
