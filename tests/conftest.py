"""
Shared fixtures for keymix tests.
"""

import pytest

from keymix.storage.library import MixLibrary
from keymix.storage.store import MemoryMixStore
from keymix.theory.open_key import MAJOR, MINOR, OpenKey
from keymix.timeline.mix import create_mix, update_track_fields


@pytest.fixture
def sample_mix():
    """Four-track mix: 8m -> 9m -> 9d -> 4d (+1, m->d, +7), with notes on the second track."""
    mix = create_mix(
        name="Friday Warmup",
        seed_keys=[OpenKey(8, MINOR), OpenKey(9, MINOR), OpenKey(9, MAJOR), OpenKey(4, MAJOR)],
    )
    return update_track_fields(mix, mix.tracks[1].id, title="Second", details="124 BPM")


@pytest.fixture
def memory_store():
    return MemoryMixStore()


@pytest.fixture
def library(memory_store):
    return MixLibrary(memory_store)
