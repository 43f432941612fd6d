"""
Theory module for harmonic mixing.

Contains:
- Open Key wheel values and their text codec
- Harmonic rule catalogue (apply, suggest, match)
- Key display colours
"""

from .open_key import (
    DEFAULT_KEY,
    MAJOR,
    MINOR,
    OpenKey,
    all_keys,
    coerce_key,
    format_key,
    is_key,
    parse_key,
)

from .rules import (
    CUSTOM_RULE,
    CUSTOM_RULE_ID,
    RULES,
    RULE_IDS,
    HarmonicRule,
    HarmonicSuggestion,
    RuleCategory,
    RuleMood,
    apply_rule,
    get_rule,
    match_rule,
    suggest,
)

from .key_colors import key_color

__all__ = [
    # Open Key
    "DEFAULT_KEY",
    "MAJOR",
    "MINOR",
    "OpenKey",
    "all_keys",
    "coerce_key",
    "format_key",
    "is_key",
    "parse_key",
    # Rules
    "CUSTOM_RULE",
    "CUSTOM_RULE_ID",
    "RULES",
    "RULE_IDS",
    "HarmonicRule",
    "HarmonicSuggestion",
    "RuleCategory",
    "RuleMood",
    "apply_rule",
    "get_rule",
    "match_rule",
    "suggest",
    # Colours
    "key_color",
]
