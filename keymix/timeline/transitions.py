"""
Transition labels and next-key suggestions for a mix timeline.

The relationship between a track and the one before it is never stored on
the track. It is derived here from the two keys every time the timeline is
displayed, so reordering or deleting tracks cannot leave stale labels.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from keymix.theory.open_key import OpenKey
from keymix.theory.rules import (
    CUSTOM_RULE,
    HarmonicRule,
    HarmonicSuggestion,
    RuleCategory,
    RuleMood,
    match_rule,
    suggest,
)
from keymix.timeline.mix import Mix, Track

START_LABEL = "Start"


class EnergyClass(str, Enum):
    """Energy indicator shown next to a transition."""
    SMOOTH = "smooth"
    IMPACT = "impact"
    TENSION = "tension"


@dataclass(frozen=True)
class TransitionDescriptor:
    """How a track relates to its predecessor."""
    relationship_label: str
    energy_class: EnergyClass
    rule: Optional[HarmonicRule] = None

    @property
    def is_start(self) -> bool:
        return self.relationship_label == START_LABEL

    @property
    def is_custom(self) -> bool:
        return self.rule is None and not self.is_start


START_TRANSITION = TransitionDescriptor(
    relationship_label=START_LABEL,
    energy_class=EnergyClass.SMOOTH,
)


def energy_for_rule(rule: HarmonicRule) -> EnergyClass:
    """Tension moods win over the rule category."""
    if rule.mood == RuleMood.TENSION:
        return EnergyClass.TENSION
    if rule.category == RuleCategory.IMPACT:
        return EnergyClass.IMPACT
    return EnergyClass.SMOOTH


def describe_transition(
    previous_key: Optional[OpenKey],
    next_key: OpenKey,
) -> TransitionDescriptor:
    """
    Label the move from one key to the next.

    Args:
        previous_key: Key of the previous track, or None for the opening track
        next_key: Key of the track being labelled

    Returns:
        TransitionDescriptor. Transitions no rule explains are labelled
        "Custom" with smooth energy.
    """
    if previous_key is None:
        return START_TRANSITION

    rule = match_rule(previous_key, next_key)
    if rule is None:
        return TransitionDescriptor(
            relationship_label=CUSTOM_RULE.name,
            energy_class=EnergyClass.SMOOTH,
        )

    return TransitionDescriptor(
        relationship_label=rule.name,
        energy_class=energy_for_rule(rule),
        rule=rule,
    )


def describe_timeline(mix: Mix) -> List[Tuple[Track, TransitionDescriptor]]:
    """Pair every track with the transition from the track before it."""
    described = []
    previous_key: Optional[OpenKey] = None
    for track in mix.tracks:
        described.append((track, describe_transition(previous_key, track.key)))
        previous_key = track.key
    return described


def anchor_key(mix: Mix) -> OpenKey:
    """Key the next track should follow: the last track, or the start key."""
    if mix.tracks:
        return mix.tracks[-1].key
    return mix.start_key


def suggest_next(mix: Mix) -> List[HarmonicSuggestion]:
    return suggest(anchor_key(mix))
