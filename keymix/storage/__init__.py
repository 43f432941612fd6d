"""Mix storage module"""

from keymix.storage.library import MixLibrary
from keymix.storage.normalize import normalize_mix, normalize_track
from keymix.storage.store import JsonFileMixStore, MemoryMixStore, MixStore

__all__ = [
    "MixLibrary",
    "normalize_mix",
    "normalize_track",
    "JsonFileMixStore",
    "MemoryMixStore",
    "MixStore",
]
