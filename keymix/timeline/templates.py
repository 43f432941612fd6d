"""
Starter templates for new mixes.

Each template seeds a mix with a short run of keys that demonstrates one
harmonic idea.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from keymix.theory.open_key import DEFAULT_KEY, OpenKey
from keymix.timeline.mix import Mix, create_mix


@dataclass(frozen=True)
class MixTemplate:
    """A named set of seed keys."""
    id: str
    name: str
    description: str
    keys: Tuple[str, ...]


TEMPLATES: Tuple[MixTemplate, ...] = (
    MixTemplate(
        id="adjacent-flow",
        name="Adjacent Flow",
        description="Ride clockwise neighbors (+1) for smooth phrasing and steady tension.",
        keys=("7m", "8m", "9m", "10m"),
    ),
    MixTemplate(
        id="relative-lift",
        name="Relative Mood Lift",
        description="Alternate minor and relative major (same number) to brighten vocals without clashes.",
        keys=("8m", "8d", "9d", "9m"),
    ),
    MixTemplate(
        id="energy-boost",
        name="Energy Boost",
        description="Use +7/+2 jumps for semitone cross-wheel spikes, made for peak-time drops.",
        keys=("8m", "3m", "10m", "5m"),
    ),
    MixTemplate(
        id="tension-release",
        name="Tension & Release",
        description="Creep through minors, then resolve into relative majors for payoff.",
        keys=("9m", "10m", "10d", "9d"),
    ),
)

_TEMPLATES_BY_ID: Dict[str, MixTemplate] = {template.id: template for template in TEMPLATES}


def get_template(template_id: str) -> Optional[MixTemplate]:
    return _TEMPLATES_BY_ID.get(template_id)


def create_mix_from_template(
    template_id: str,
    default_key: OpenKey = DEFAULT_KEY,
) -> Optional[Mix]:
    """
    Create a mix seeded with a template's keys.

    Returns:
        New Mix named after the template, or None for an unknown template id
    """
    template = get_template(template_id)
    if template is None:
        return None
    return create_mix(name=template.name, seed_keys=template.keys, default_key=default_key)
