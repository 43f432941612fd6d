"""
Rehydration of stored mixes.

Stored data may come from older versions or be hand-edited, so every field
is checked and repaired instead of rejecting the whole mix.
"""

from dataclasses import replace
from typing import Any, Mapping, Optional

import structlog

from keymix.theory.open_key import DEFAULT_KEY, OpenKey, coerce_key
from keymix.timeline.mix import (
    OPENING_TRACK_TITLE,
    Mix,
    Track,
    generate_id,
    normalize_name,
    now_ms,
)

logger = structlog.get_logger()


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _legacy_bpm_details(bpm: Any) -> str:
    """Older versions stored tempo as a separate number."""
    if isinstance(bpm, bool) or not isinstance(bpm, (int, float)):
        return ""
    if isinstance(bpm, float) and bpm.is_integer():
        bpm = int(bpm)
    return f"{bpm} BPM"


def normalize_track(raw: Any, index: int, default_key: OpenKey = DEFAULT_KEY) -> Track:
    """
    Repair one stored track.

    Args:
        raw: Stored track data of unknown shape
        index: Position in the mix; the opening track gets a fallback title
        default_key: Key for tracks without a valid key

    Returns:
        Track
    """
    if not isinstance(raw, Mapping):
        raw = {}

    details = _text(raw.get("details"))
    if not details and "bpm" in raw:
        details = _legacy_bpm_details(raw.get("bpm"))

    track_id = raw.get("id")
    return Track(
        id=track_id if isinstance(track_id, str) and track_id else generate_id("track"),
        key=coerce_key(raw.get("key"), default_key),
        title=_text(raw.get("title")) or (OPENING_TRACK_TITLE if index == 0 else ""),
        details=details,
    )


def normalize_mix(raw: Any, default_key: OpenKey = DEFAULT_KEY) -> Optional[Mix]:
    """
    Repair one stored mix.

    Missing or repeated ids are generated, invalid keys fall back to the default key and
    missing tracks become an empty timeline.

    Args:
        raw: Stored mix data of unknown shape
        default_key: Key used for anything without a valid key

    Returns:
        Mix, or None when the data is not an object at all
    """
    if not isinstance(raw, Mapping):
        logger.warning("Skipped stored mix that is not an object", value_type=type(raw).__name__)
        return None

    raw_tracks = raw.get("tracks")
    tracks = []
    seen_ids = set()
    for index, entry in enumerate(raw_tracks if isinstance(raw_tracks, list) else []):
        track = normalize_track(entry, index, default_key)
        if track.id in seen_ids:
            logger.warning("Replaced duplicate track id", mix_id=raw.get("id"), track_id=track.id)
            track = replace(track, id=generate_id("track"))
        seen_ids.add(track.id)
        tracks.append(track)
    tracks = tuple(tracks)

    mix_id = raw.get("id")
    created_at = raw.get("createdAt")
    if tracks:
        start_key = tracks[0].key
    else:
        start_key = coerce_key(raw.get("startKey"), default_key)

    return Mix(
        id=mix_id if isinstance(mix_id, str) and mix_id else generate_id("mix"),
        name=normalize_name(raw.get("name")),
        start_key=start_key,
        tracks=tracks,
        created_at=(
            int(created_at)
            if isinstance(created_at, (int, float)) and not isinstance(created_at, bool) and created_at > 0
            else now_ms()
        ),
    )
