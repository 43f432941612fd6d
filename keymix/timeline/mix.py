"""
Mix timeline model.

A mix is an ordered run of tracks, each pinned to a key on the Open Key
wheel. Index 0 is the opening track and the mix start key always follows
it; an empty mix keeps a seed key instead.

All operations return a new Mix and leave the input untouched. Operations
addressing a track id that no longer exists return the same Mix, since the
editor may still send edits for a track it has just deleted.
"""

import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from keymix.theory.open_key import DEFAULT_KEY, KeyLike, OpenKey, coerce_key, format_key

DEFAULT_MIX_NAME = "Untitled Mix"
OPENING_TRACK_TITLE = "Opening Track"


def generate_id(prefix: str) -> str:
    """Generate an opaque id such as "track-1b4e28ba-..."."""
    return f"{prefix}-{uuid.uuid4()}"


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Track:
    """One track slot in a mix."""
    id: str
    key: OpenKey
    title: str = ""
    details: str = ""  # Free-form notes, e.g. "128 BPM"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "key": format_key(self.key),
            "title": self.title,
            "details": self.details,
        }


@dataclass(frozen=True)
class Mix:
    """An ordered sequence of keyed tracks."""
    id: str
    name: str
    start_key: OpenKey
    tracks: Tuple[Track, ...] = ()
    created_at: int = field(default_factory=now_ms)

    def find_track(self, track_id: str) -> Optional[Track]:
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON shape used by mix storage."""
        return {
            "id": self.id,
            "name": self.name,
            "startKey": format_key(self.start_key),
            "tracks": [track.to_dict() for track in self.tracks],
            "createdAt": self.created_at,
        }


def normalize_name(name: Optional[str]) -> str:
    """Trim a mix name, falling back to the default for blank input."""
    if not isinstance(name, str):
        return DEFAULT_MIX_NAME
    return name.strip() or DEFAULT_MIX_NAME


def new_track(key: OpenKey, title: str = "", details: str = "") -> Track:
    return Track(id=generate_id("track"), key=key, title=title, details=details)


def track_index(mix: Mix, track_id: str) -> int:
    """Position of a track in the mix, or -1 if it is not there."""
    for index, track in enumerate(mix.tracks):
        if track.id == track_id:
            return index
    return -1


def with_tracks(mix: Mix, tracks: Iterable[Track], default_key: OpenKey) -> Mix:
    """Replace the tracks and resync the start key with the opening track."""
    tracks = tuple(tracks)
    start_key = tracks[0].key if tracks else default_key
    return replace(mix, tracks=tracks, start_key=start_key)


def create_mix(
    name: Optional[str] = None,
    seed_keys: Optional[Sequence[KeyLike]] = None,
    default_key: OpenKey = DEFAULT_KEY,
) -> Mix:
    """
    Create a new mix, optionally pre-filled with one track per seed key.

    Args:
        name: Mix name; blank names become "Untitled Mix"
        seed_keys: Keys (OpenKey or key text) for the initial tracks.
            Unreadable entries use the default key.
        default_key: Start key when there are no seed keys

    Returns:
        New Mix; the first seeded track is titled "Opening Track"
    """
    keys = [coerce_key(entry, default_key) for entry in (seed_keys or [])]
    tracks = tuple(
        new_track(key, title=OPENING_TRACK_TITLE if index == 0 else "")
        for index, key in enumerate(keys)
    )

    return Mix(
        id=generate_id("mix"),
        name=normalize_name(name),
        start_key=tracks[0].key if tracks else default_key,
        tracks=tracks,
    )


def append_track(mix: Mix, key: OpenKey, title: str = "", details: str = "") -> Mix:
    """Add a track with the given key at the end of the mix."""
    # The start key follows the opening track when this is the first one
    return with_tracks(mix, mix.tracks + (new_track(key, title, details),), mix.start_key)


def remove_track(mix: Mix, track_id: str, default_key: OpenKey = DEFAULT_KEY) -> Mix:
    """
    Delete a track.

    Removing the opening track moves the start key to the new first track,
    or back to the default key when the mix becomes empty.
    """
    if track_index(mix, track_id) < 0:
        return mix
    remaining = [track for track in mix.tracks if track.id != track_id]
    return with_tracks(mix, remaining, default_key)


def move_track(mix: Mix, track_id: str, to_index: int) -> Mix:
    """
    Move a track to a new position, shifting the others.

    Args:
        mix: Mix to reorder
        track_id: Track to move
        to_index: Target position, clamped to the valid range

    Returns:
        Reordered Mix, or the same Mix if nothing moves
    """
    from_index = track_index(mix, track_id)
    if from_index < 0:
        return mix

    to_index = max(0, min(to_index, len(mix.tracks) - 1))
    if to_index == from_index:
        return mix

    tracks = list(mix.tracks)
    track = tracks.pop(from_index)
    tracks.insert(to_index, track)
    return with_tracks(mix, tracks, mix.start_key)


def rename_mix(mix: Mix, name: str) -> Mix:
    return replace(mix, name=normalize_name(name))


def update_track_fields(
    mix: Mix,
    track_id: str,
    title: Optional[str] = None,
    details: Optional[str] = None,
) -> Mix:
    """
    Update the title and/or details of one track.

    Fields left as None are not touched.
    """
    track = mix.find_track(track_id)
    if track is None:
        return mix

    changes: Dict[str, str] = {}
    if title is not None:
        changes["title"] = title
    if details is not None:
        changes["details"] = details
    if not changes:
        return mix

    updated = replace(track, **changes)
    return replace(
        mix,
        tracks=tuple(updated if entry.id == track_id else entry for entry in mix.tracks),
    )


def clear_mix(mix: Mix, default_key: OpenKey = DEFAULT_KEY) -> Mix:
    """Remove every track and reset the start key."""
    return with_tracks(mix, (), default_key)
