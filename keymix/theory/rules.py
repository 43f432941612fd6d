"""
Harmonic rule catalogue for choosing the next key in a mix.

Each rule moves a key around the Open Key wheel by one primitive step:
shift the number (with wraparound) or switch the mode letter.

| Rule                      | Move    | Category | Mood     | Example    |
|---------------------------|---------|----------|----------|------------|
| maintain                  | same    | smooth   | neutral  | 8m -> 8m   |
| adjacent-number-uplift    | +1      | smooth   | tension  | 8m -> 9m   |
| adjacent-number-downlift  | -1      | smooth   | darker   | 8m -> 7m   |
| adjacent-letter-uplift    | m -> d  | smooth   | brighter | 8m -> 8d   |
| adjacent-letter-downlift  | d -> m  | smooth   | darker   | 8d -> 8m   |
| boost-one-semitone        | +7      | impact   | tension  | 8m -> 3m   |
| boost-two-semitone        | +2      | impact   | tension  | 8m -> 10m  |
| parallel-key-minor        | -3      | impact   | darker   | 8d -> 5d   |
| parallel-key-major        | +3      | impact   | brighter | 8m -> 11m  |

Catalogue order is significant: suggestions are listed in this order and
rule matching returns the first rule that fits.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from keymix.errors import UnknownRuleError
from keymix.theory.open_key import MAJOR, MINOR, OpenKey, format_key


class RuleCategory(str, Enum):
    """How noticeable a transition is on the dancefloor."""
    SMOOTH = "smooth"
    IMPACT = "impact"


class RuleMood(str, Enum):
    """Emotional direction of a transition."""
    NEUTRAL = "neutral"
    TENSION = "tension"
    DARKER = "darker"
    BRIGHTER = "brighter"


@dataclass(frozen=True)
class HarmonicRule:
    """One named transformation of the key wheel."""
    id: str
    name: str
    label: str
    category: RuleCategory
    mood: RuleMood
    description: str
    transform: Callable[[OpenKey], OpenKey]

    def apply(self, key: OpenKey) -> OpenKey:
        return self.transform(key)


@dataclass(frozen=True)
class CustomRule:
    """Marker for a key the user picked by hand; it predicts nothing."""
    id: str
    name: str
    label: str
    description: str


@dataclass(frozen=True)
class HarmonicSuggestion:
    """A candidate next key produced by one catalogue rule."""
    rule_id: str
    name: str
    label: str
    category: RuleCategory
    mood: RuleMood
    description: str
    from_key_text: str
    to_key_text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ruleId": self.rule_id,
            "displayName": self.name,
            "shortLabel": self.label,
            "category": self.category.value,
            "mood": self.mood.value,
            "description": self.description,
            "fromKeyText": self.from_key_text,
            "toKeyText": self.to_key_text,
        }


def _shift(delta: int) -> Callable[[OpenKey], OpenKey]:
    return lambda key: key.shift(delta)


def _set_letter(letter: str) -> Callable[[OpenKey], OpenKey]:
    return lambda key: key.with_letter(letter)


RULES: Tuple[HarmonicRule, ...] = (
    HarmonicRule(
        id="maintain",
        name="Maintain",
        label="same key",
        category=RuleCategory.SMOOTH,
        mood=RuleMood.NEUTRAL,
        description="Identical keys (e.g., 8m -> 8m) keep the blend seamless and neutral.",
        transform=_shift(0),
    ),
    HarmonicRule(
        id="adjacent-number-uplift",
        name="Adjacent Number Uplift",
        label="+1",
        category=RuleCategory.SMOOTH,
        mood=RuleMood.TENSION,
        description="Move one number up (e.g., 8m -> 9m) to add drive and tension.",
        transform=_shift(1),
    ),
    HarmonicRule(
        id="adjacent-number-downlift",
        name="Adjacent Number Downlift",
        label="-1",
        category=RuleCategory.SMOOTH,
        mood=RuleMood.DARKER,
        description="Move one number down (e.g., 8m -> 7m) for a softer, moodier feel.",
        transform=_shift(-1),
    ),
    HarmonicRule(
        id="adjacent-letter-uplift",
        name="Adjacent Letter Uplift",
        label="m -> d",
        category=RuleCategory.SMOOTH,
        mood=RuleMood.BRIGHTER,
        description="Switch minor to relative major (e.g., 8m -> 8d) to brighten.",
        transform=_set_letter(MAJOR),
    ),
    HarmonicRule(
        id="adjacent-letter-downlift",
        name="Adjacent Letter Downlift",
        label="d -> m",
        category=RuleCategory.SMOOTH,
        mood=RuleMood.DARKER,
        description="Switch major to relative minor (e.g., 8d -> 8m) to add depth.",
        transform=_set_letter(MINOR),
    ),
    HarmonicRule(
        id="boost-one-semitone",
        name="Boost One Semitone",
        label="+7",
        category=RuleCategory.IMPACT,
        mood=RuleMood.TENSION,
        description="Jump a semitone (e.g., 8m -> 3m) for dramatic, dissonant tension.",
        transform=_shift(7),
    ),
    HarmonicRule(
        id="boost-two-semitone",
        name="Boost Two Semitone",
        label="+2",
        category=RuleCategory.IMPACT,
        mood=RuleMood.TENSION,
        description="Go up two semitones (e.g., 8m -> 10m) for an intense energy spike.",
        transform=_shift(2),
    ),
    HarmonicRule(
        id="parallel-key-minor",
        name="Parallel Key Minor",
        label="-3",
        category=RuleCategory.IMPACT,
        mood=RuleMood.DARKER,
        description="Subtract three numbers (e.g., 8d -> 5d) to keep the mode but darken the tone.",
        transform=_shift(-3),
    ),
    HarmonicRule(
        id="parallel-key-major",
        name="Parallel Key Major",
        label="+3",
        category=RuleCategory.IMPACT,
        mood=RuleMood.BRIGHTER,
        description="Add three numbers (e.g., 8m -> 11m) to keep the mode but lift the mood.",
        transform=_shift(3),
    ),
)

RULE_IDS: Tuple[str, ...] = tuple(rule.id for rule in RULES)

_RULES_BY_ID: Dict[str, HarmonicRule] = {rule.id: rule for rule in RULES}

CUSTOM_RULE_ID = "custom"

CUSTOM_RULE = CustomRule(
    id=CUSTOM_RULE_ID,
    name="Custom",
    label="custom",
    description="A key chosen by hand that no harmonic rule predicts.",
)


def get_rule(rule_id: str) -> HarmonicRule:
    """
    Look up a catalogue rule by id.

    Raises:
        UnknownRuleError: If the id is not in the catalogue
    """
    try:
        return _RULES_BY_ID[rule_id]
    except KeyError:
        raise UnknownRuleError(rule_id) from None


def apply_rule(rule_id: str, key: OpenKey) -> OpenKey:
    """
    Project a key forward through one rule.

    Args:
        rule_id: Catalogue rule id (e.g., "adjacent-number-uplift")
        key: Key to transform

    Returns:
        The transformed key

    Raises:
        UnknownRuleError: If the id is not in the catalogue
    """
    return get_rule(rule_id).apply(key)


def suggest(anchor: OpenKey) -> List[HarmonicSuggestion]:
    """
    Get one next-key suggestion per rule, in catalogue order.

    Args:
        anchor: Key the next track should follow

    Returns:
        Nine suggestions, always in the same order
    """
    from_text = format_key(anchor)
    return [
        HarmonicSuggestion(
            rule_id=rule.id,
            name=rule.name,
            label=rule.label,
            category=rule.category,
            mood=rule.mood,
            description=rule.description,
            from_key_text=from_text,
            to_key_text=format_key(rule.apply(anchor)),
        )
        for rule in RULES
    ]


def match_rule(from_key: OpenKey, to_key: OpenKey) -> Optional[HarmonicRule]:
    """
    Find the rule that explains a transition between two keys.

    Several rules can land on the same key (e.g., "adjacent-letter-uplift"
    on a major key gives the same result as "maintain"); the rule declared
    first in the catalogue wins.

    Args:
        from_key: Key of the previous track
        to_key: Key of the next track

    Returns:
        The first matching rule, or None for a custom transition
    """
    for rule in RULES:
        if rule.apply(from_key) == to_key:
            return rule
    return None
