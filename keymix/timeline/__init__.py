"""
Timeline module for building mixes.

Contains:
- Mix / Track model and its mutation operations
- Derived transition labels and next-key suggestions
- Starter templates
"""

from .mix import (
    DEFAULT_MIX_NAME,
    OPENING_TRACK_TITLE,
    Mix,
    Track,
    append_track,
    clear_mix,
    create_mix,
    move_track,
    remove_track,
    rename_mix,
    track_index,
    update_track_fields,
)

from .transitions import (
    EnergyClass,
    TransitionDescriptor,
    anchor_key,
    describe_timeline,
    describe_transition,
    suggest_next,
)

from .templates import (
    TEMPLATES,
    MixTemplate,
    create_mix_from_template,
    get_template,
)

__all__ = [
    # Mix
    "DEFAULT_MIX_NAME",
    "OPENING_TRACK_TITLE",
    "Mix",
    "Track",
    "append_track",
    "clear_mix",
    "create_mix",
    "move_track",
    "remove_track",
    "rename_mix",
    "track_index",
    "update_track_fields",
    # Transitions
    "EnergyClass",
    "TransitionDescriptor",
    "anchor_key",
    "describe_timeline",
    "describe_transition",
    "suggest_next",
    # Templates
    "TEMPLATES",
    "MixTemplate",
    "create_mix_from_template",
    "get_template",
]
