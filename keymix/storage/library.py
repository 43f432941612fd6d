"""
Mix library - owns the list of saved mixes for one editing session.

Every change goes through one of the timeline operations, replaces the
affected mix in the list and is written back through the injected store.
Unknown mix ids are ignored and return None.
"""

from typing import Callable, List, Optional, Sequence

import structlog

from keymix.config import Settings, get_settings
from keymix.errors import PlaylistParseError
from keymix.playlist.importer import ImportRecord, build_mix_from_import
from keymix.playlist.nml import parse_nml
from keymix.sharing.codec import decode_share_token, mix_from_share_payload
from keymix.storage.store import JsonFileMixStore, MixStore
from keymix.theory.open_key import DEFAULT_KEY, KeyLike, OpenKey, coerce_key
from keymix.timeline.mix import (
    Mix,
    append_track,
    clear_mix,
    create_mix,
    move_track,
    remove_track,
    rename_mix,
    update_track_fields,
)
from keymix.timeline.templates import create_mix_from_template

logger = structlog.get_logger()


class MixLibrary:
    """Saved mixes plus the operations the editor performs on them."""

    def __init__(self, store: MixStore, default_key: OpenKey = DEFAULT_KEY):
        self.store = store
        self.default_key = default_key
        self._mixes: List[Mix] = store.load()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "MixLibrary":
        """Open the library configured through KEYMIX_* settings."""
        settings = settings or get_settings()
        default_key = coerce_key(settings.default_start_key, DEFAULT_KEY)
        store = JsonFileMixStore(settings.storage_path, default_key=default_key)
        return cls(store, default_key=default_key)

    @property
    def mixes(self) -> List[Mix]:
        return list(self._mixes)

    def get(self, mix_id: str) -> Optional[Mix]:
        for mix in self._mixes:
            if mix.id == mix_id:
                return mix
        return None

    def _save(self):
        self.store.save(self._mixes)

    def _add(self, mix: Mix) -> Mix:
        self._mixes.append(mix)
        self._save()
        logger.info("Created mix", mix_id=mix.id, name=mix.name, tracks=len(mix.tracks))
        return mix

    def _update(self, mix_id: str, operation: Callable[[Mix], Mix]) -> Optional[Mix]:
        for index, mix in enumerate(self._mixes):
            if mix.id != mix_id:
                continue
            updated = operation(mix)
            if updated is not mix:
                self._mixes[index] = updated
                self._save()
            return updated
        return None

    # Creation

    def create(self, name: Optional[str] = None, seed_keys: Optional[Sequence[KeyLike]] = None) -> Mix:
        return self._add(create_mix(name=name, seed_keys=seed_keys, default_key=self.default_key))

    def create_from_template(self, template_id: str) -> Optional[Mix]:
        mix = create_mix_from_template(template_id, default_key=self.default_key)
        if mix is None:
            logger.warning("Unknown mix template", template_id=template_id)
            return None
        return self._add(mix)

    def import_records(self, name: str, records: Sequence[ImportRecord]) -> Mix:
        return self._add(build_mix_from_import(name, records, default_key=self.default_key))

    def import_nml(self, xml_text: str) -> Optional[Mix]:
        """
        Import the playlist of a Traktor NML file as a new mix.

        Returns:
            New Mix, or None if the file could not be read
        """
        try:
            playlist = parse_nml(xml_text)
        except PlaylistParseError as e:
            logger.error("Failed to import NML file", error=str(e))
            return None
        return self.import_records(playlist.name, playlist.records)

    def import_share_token(self, token: str) -> Optional[Mix]:
        """Save the mix carried by a share token as a new mix."""
        payload = decode_share_token(token)
        if payload is None:
            return None
        return self._add(mix_from_share_payload(payload, default_key=self.default_key))

    # Deletion

    def delete(self, mix_id: str) -> bool:
        remaining = [mix for mix in self._mixes if mix.id != mix_id]
        if len(remaining) == len(self._mixes):
            return False
        self._mixes = remaining
        self._save()
        logger.info("Deleted mix", mix_id=mix_id)
        return True

    def delete_all(self):
        self._mixes = []
        self._save()
        logger.info("Deleted all mixes")

    # Timeline edits

    def append_key(self, mix_id: str, key: OpenKey) -> Optional[Mix]:
        return self._update(mix_id, lambda mix: append_track(mix, key))

    def rename(self, mix_id: str, name: str) -> Optional[Mix]:
        return self._update(mix_id, lambda mix: rename_mix(mix, name))

    def update_track(
        self,
        mix_id: str,
        track_id: str,
        title: Optional[str] = None,
        details: Optional[str] = None,
    ) -> Optional[Mix]:
        return self._update(
            mix_id, lambda mix: update_track_fields(mix, track_id, title=title, details=details)
        )

    def remove_track(self, mix_id: str, track_id: str) -> Optional[Mix]:
        return self._update(mix_id, lambda mix: remove_track(mix, track_id, self.default_key))

    def move_track(self, mix_id: str, track_id: str, to_index: int) -> Optional[Mix]:
        return self._update(mix_id, lambda mix: move_track(mix, track_id, to_index))

    def clear(self, mix_id: str) -> Optional[Mix]:
        return self._update(mix_id, lambda mix: clear_mix(mix, self.default_key))
