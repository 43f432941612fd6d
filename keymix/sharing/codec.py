"""
Share links - packs a mix into a compact, URL-safe token.

Token format: JSON `{"name": ..., "tracks": [{"key": "8m", "title": ..., "details": ...}]}`
encoded as base64 with the URL-safe alphabet ("-" and "_") and without
trailing "=" padding. Empty titles and details are left out. Tokens whose
JSON was percent-encoded before base64 are also accepted.
"""

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

import structlog
from pydantic import BaseModel, ValidationError, field_validator

from keymix.theory.open_key import DEFAULT_KEY, OpenKey, format_key, parse_key
from keymix.timeline.mix import Mix, create_mix, new_track, with_tracks

logger = structlog.get_logger()


class SharedTrackModel(BaseModel):
    """Wire shape of one shared track."""
    key: Any = None
    title: Optional[str] = None
    details: Optional[str] = None

    @field_validator("title", "details", mode="before")
    @classmethod
    def text_or_none(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None


class ShareTokenModel(BaseModel):
    """Wire shape of a decoded share token."""
    name: Optional[str] = None
    tracks: List[SharedTrackModel]

    @field_validator("name", mode="before")
    @classmethod
    def text_or_none(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("tracks", mode="before")
    @classmethod
    def blank_non_objects(cls, value: Any) -> Any:
        # Entries that are not objects end up without a key and get dropped
        if isinstance(value, list):
            return [entry if isinstance(entry, dict) else {} for entry in value]
        return value


@dataclass
class SharedTrack:
    key: OpenKey
    title: str = ""
    details: str = ""


@dataclass
class SharePayload:
    """A decoded share token."""
    name: Optional[str] = None
    tracks: List[SharedTrack] = field(default_factory=list)


def encode_share_token(mix: Mix) -> str:
    """
    Serialize a mix into a share token.

    Args:
        mix: Mix to share

    Returns:
        URL-safe base64 token without padding
    """
    tracks: List[Dict[str, str]] = []
    for track in mix.tracks:
        entry = {"key": format_key(track.key)}
        if track.title:
            entry["title"] = track.title
        if track.details:
            entry["details"] = track.details
        tracks.append(entry)

    payload = {"name": mix.name, "tracks": tracks}
    raw = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_share_token(token: str) -> Optional[SharePayload]:
    """
    Decode a share token.

    Tracks whose key cannot be parsed are dropped; the rest of the payload
    is kept.

    Args:
        token: Token produced by encode_share_token

    Returns:
        SharePayload, or None if the token is unreadable
    """
    if not isinstance(token, str):
        logger.warning("Failed to decode share token", error="token is not a string")
        return None

    try:
        normalized = token.strip().replace("-", "+").replace("_", "/")
        padded = normalized + "=" * (-len(normalized) % 4)
        text = base64.b64decode(padded, validate=True).decode("utf-8")
        if text.startswith("%"):
            # Browser-made links percent-encode the JSON before base64
            text = unquote(text)
        model = ShareTokenModel.model_validate(json.loads(text))
    except (binascii.Error, ValueError, ValidationError, RecursionError) as e:
        logger.warning("Failed to decode share token", error=str(e))
        return None

    tracks = []
    for entry in model.tracks:
        key = parse_key(entry.key)
        if key is None:
            logger.debug("Dropped shared track with invalid key", key=entry.key)
            continue
        tracks.append(SharedTrack(key=key, title=entry.title or "", details=entry.details or ""))

    return SharePayload(name=model.name, tracks=tracks)


def mix_from_share_payload(payload: SharePayload, default_key: OpenKey = DEFAULT_KEY) -> Mix:
    """Build a new mix (fresh ids) from a decoded share payload."""
    tracks = [new_track(track.key, track.title, track.details) for track in payload.tracks]
    return with_tracks(create_mix(name=payload.name, default_key=default_key), tracks, default_key)
