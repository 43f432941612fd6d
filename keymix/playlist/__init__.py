"""Playlist import module"""

from keymix.playlist.importer import (
    ImportRecord,
    build_mix_from_import,
    map_external_key_code,
)
from keymix.playlist.nml import NmlPlaylist, parse_nml

__all__ = [
    "ImportRecord",
    "build_mix_from_import",
    "map_external_key_code",
    "NmlPlaylist",
    "parse_nml",
]
