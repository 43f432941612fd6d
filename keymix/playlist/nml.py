"""
Traktor NML playlist reader.

An NML file keeps track metadata in COLLECTION/ENTRY elements and the
playlist order in a PLAYLIST node whose entries point back into the
collection by file location:

    <NML>
      <COLLECTION>
        <ENTRY TITLE="..." ARTIST="...">
          <LOCATION VOLUME="C:" DIR="/:Music/:" FILE="track.mp3"/>
          <TEMPO BPM="128.000"/>
          <MUSICAL_KEY VALUE="21"/>
        </ENTRY>
      </COLLECTION>
      <PLAYLISTS>
        <NODE TYPE="PLAYLIST" NAME="Friday">
          <PLAYLIST>
            <ENTRY><PRIMARYKEY KEY="C:/:Music/:track.mp3"/></ENTRY>
          </PLAYLIST>
        </NODE>
      </PLAYLISTS>
    </NML>
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import structlog

from keymix.errors import PlaylistParseError
from keymix.playlist.importer import ImportRecord

logger = structlog.get_logger()

DEFAULT_PLAYLIST_NAME = "Imported Mix"


@dataclass
class NmlPlaylist:
    """Playlist name plus its records in play order."""
    name: str
    records: List[ImportRecord] = field(default_factory=list)


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _read_entry(entry: ET.Element) -> ImportRecord:
    tempo = entry.find("TEMPO")
    musical_key = entry.find("MUSICAL_KEY")
    return ImportRecord(
        title=entry.get("TITLE", ""),
        artist=entry.get("ARTIST", ""),
        tempo=_parse_float(tempo.get("BPM")) if tempo is not None else None,
        raw_key_code=_parse_int(musical_key.get("VALUE")) if musical_key is not None else None,
    )


def _location_key(location: ET.Element) -> str:
    return f"{location.get('VOLUME', '')}{location.get('DIR', '')}{location.get('FILE', '')}"


def parse_nml(xml_text: str) -> NmlPlaylist:
    """
    Extract the first playlist of an NML document.

    Args:
        xml_text: NML file contents

    Returns:
        NmlPlaylist; playlist entries missing from the collection are skipped

    Raises:
        PlaylistParseError: If the document is not well-formed XML
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise PlaylistParseError(f"Invalid NML file: {e}") from e

    # Collection entries by file location
    collection: Dict[str, ImportRecord] = {}
    for entry in root.findall("./COLLECTION/ENTRY"):
        location = entry.find("LOCATION")
        if location is None:
            continue
        collection[_location_key(location)] = _read_entry(entry)

    playlist_node = root.find(".//NODE[@TYPE='PLAYLIST']")
    if playlist_node is None:
        logger.warning("NML file has no playlist", collection_size=len(collection))
        return NmlPlaylist(name=DEFAULT_PLAYLIST_NAME)

    records = []
    skipped = 0
    for primary_key in playlist_node.findall("./PLAYLIST/ENTRY/PRIMARYKEY"):
        record = collection.get(primary_key.get("KEY", ""))
        if record is None:
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.warning("Skipped playlist entries missing from collection", skipped=skipped)

    return NmlPlaylist(
        name=playlist_node.get("NAME") or DEFAULT_PLAYLIST_NAME,
        records=records,
    )
