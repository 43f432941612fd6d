"""
Mix storage backends.

A store loads and saves the whole list of mixes as one JSON blob. Loading
never fails: a missing or corrupt blob yields an empty list and a log line,
so the editor always starts.
"""

import json
import os
from pathlib import Path
from typing import Any, List, Optional, Protocol, Sequence

import structlog

from keymix.storage.normalize import normalize_mix
from keymix.theory.open_key import DEFAULT_KEY, OpenKey
from keymix.timeline.mix import Mix

logger = structlog.get_logger()


class MixStore(Protocol):
    """Load/save port for the list of saved mixes."""

    def load(self) -> List[Mix]:
        ...

    def save(self, mixes: Sequence[Mix]) -> None:
        ...


def mixes_from_blob(data: Any, default_key: OpenKey = DEFAULT_KEY) -> List[Mix]:
    """Normalize a decoded storage blob into mixes."""
    if not isinstance(data, list):
        logger.warning("Stored mixes are not a list", value_type=type(data).__name__)
        return []

    mixes = []
    for entry in data:
        mix = normalize_mix(entry, default_key)
        if mix is not None:
            mixes.append(mix)
    return mixes


def mixes_to_blob(mixes: Sequence[Mix]) -> List[dict]:
    return [mix.to_dict() for mix in mixes]


class JsonFileMixStore:
    """Keeps all mixes in a single JSON file."""

    def __init__(self, path: str, default_key: OpenKey = DEFAULT_KEY):
        self.path = Path(path).expanduser()
        self.default_key = default_key

    def load(self) -> List[Mix]:
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            logger.error("Failed to load mixes from storage", path=str(self.path), error=str(e))
            return []

        mixes = mixes_from_blob(data, self.default_key)
        logger.debug("Loaded mixes", path=str(self.path), count=len(mixes))
        return mixes

    def save(self, mixes: Sequence[Mix]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(mixes_to_blob(mixes), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("Failed to persist mixes", path=str(self.path), error=str(e))
            return

        logger.debug("Saved mixes", path=str(self.path), count=len(mixes))


class MemoryMixStore:
    """Keeps the serialized blob in memory."""

    def __init__(self, blob: Optional[str] = None, default_key: OpenKey = DEFAULT_KEY):
        self.blob = blob
        self.default_key = default_key

    def load(self) -> List[Mix]:
        if not self.blob:
            return []
        try:
            data = json.loads(self.blob)
        except (ValueError, RecursionError) as e:
            logger.error("Failed to load mixes from storage", error=str(e))
            return []
        return mixes_from_blob(data, self.default_key)

    def save(self, mixes: Sequence[Mix]) -> None:
        self.blob = json.dumps(mixes_to_blob(mixes))
