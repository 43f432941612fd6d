"""
Tests for theory module - Open Key values and the harmonic rule catalogue.
"""

import pytest

from keymix.errors import UnknownRuleError
from keymix.theory.key_colors import UNKNOWN_KEY_COLOR, key_color
from keymix.theory.open_key import (
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
from keymix.theory.rules import (
    CUSTOM_RULE,
    CUSTOM_RULE_ID,
    RULE_IDS,
    RULES,
    RuleCategory,
    RuleMood,
    apply_rule,
    get_rule,
    match_rule,
    suggest,
)


class TestOpenKey:
    """Test Open Key parsing and formatting."""

    def test_parse_valid_keys(self):
        """Canonical key text parses into number and letter."""
        assert parse_key("8m") == OpenKey(8, MINOR)
        assert parse_key("1d") == OpenKey(1, MAJOR)
        assert parse_key("12m") == OpenKey(12, MINOR)

    def test_parse_is_case_insensitive(self):
        """Upper-case letters are accepted."""
        assert parse_key("8M") == OpenKey(8, MINOR)
        assert parse_key("11D") == OpenKey(11, MAJOR)

    def test_parse_camelot_letters(self):
        """Camelot A/B letters map onto minor/major."""
        assert parse_key("8A") == OpenKey(8, MINOR)
        assert parse_key("8b") == OpenKey(8, MAJOR)

    def test_parse_rejects_invalid_text(self):
        """Malformed key text yields None."""
        for text in ["", "0d", "13m", "d1", "1", "d", "8x", "100m", "8mm", " 8m ", "\u0668m", "\uff18d"]:
            assert parse_key(text) is None, text

    def test_parse_rejects_non_strings(self):
        """Non-string input yields None instead of raising."""
        for value in [None, 8, {}, [], OpenKey(8, MINOR)]:
            assert parse_key(value) is None

    def test_format_is_lowercase_canonical(self):
        """Formatting always uses the canonical letters."""
        assert format_key(OpenKey(8, MINOR)) == "8m"
        assert format_key(parse_key("3B")) == "3d"
        assert str(OpenKey(12, MAJOR)) == "12d"

    def test_round_trip_all_keys(self):
        """Every key survives format then parse."""
        for key in all_keys():
            assert parse_key(format_key(key)) == key

    def test_all_keys_order(self):
        """24 keys: all minors 1-12 then all majors 1-12."""
        keys = all_keys()
        assert len(keys) == 24
        assert len(set(keys)) == 24
        assert keys[0] == OpenKey(1, MINOR)
        assert keys[11] == OpenKey(12, MINOR)
        assert keys[12] == OpenKey(1, MAJOR)
        assert keys[23] == OpenKey(12, MAJOR)

    def test_number_wraps_into_range(self):
        """Constructed numbers are wrapped onto the 12-position wheel."""
        assert OpenKey(13, MINOR).number == 1
        assert OpenKey(0, MAJOR).number == 12
        assert OpenKey(-3, MINOR).number == 9

    def test_invalid_letter_raises(self):
        """Only canonical letters can be constructed."""
        with pytest.raises(ValueError):
            OpenKey(8, "A")

    def test_is_key(self):
        """Structural check for rehydrated data."""
        assert is_key({"number": 1, "letter": "d"})
        assert is_key({"number": 12, "letter": "m"})
        assert is_key(OpenKey(6, MAJOR))
        assert not is_key({"number": 1, "letter": "a"})
        assert not is_key({"number": 0, "letter": "d"})
        assert not is_key({"number": 13, "letter": "d"})
        assert not is_key({"number": True, "letter": "d"})
        assert not is_key({"letter": "d"})
        assert not is_key("1d")
        assert not is_key(None)

    def test_coerce_key(self):
        """Keys of any stored shape become OpenKey or the default."""
        assert coerce_key("9d") == OpenKey(9, MAJOR)
        assert coerce_key({"number": 3, "letter": "m"}) == OpenKey(3, MINOR)
        assert coerce_key("nope") == DEFAULT_KEY
        assert coerce_key(None, OpenKey(1, MAJOR)) == OpenKey(1, MAJOR)

    def test_default_key_is_8m(self):
        assert DEFAULT_KEY == OpenKey(8, MINOR)


class TestRuleCatalogue:
    """Test the harmonic rule catalogue."""

    def test_catalogue_order(self):
        """Nine rules in a fixed order."""
        assert RULE_IDS == (
            "maintain",
            "adjacent-number-uplift",
            "adjacent-number-downlift",
            "adjacent-letter-uplift",
            "adjacent-letter-downlift",
            "boost-one-semitone",
            "boost-two-semitone",
            "parallel-key-minor",
            "parallel-key-major",
        )

    def test_rule_categories_and_moods(self):
        """Each rule carries its category and mood."""
        expected = {
            "maintain": (RuleCategory.SMOOTH, RuleMood.NEUTRAL),
            "adjacent-number-uplift": (RuleCategory.SMOOTH, RuleMood.TENSION),
            "adjacent-number-downlift": (RuleCategory.SMOOTH, RuleMood.DARKER),
            "adjacent-letter-uplift": (RuleCategory.SMOOTH, RuleMood.BRIGHTER),
            "adjacent-letter-downlift": (RuleCategory.SMOOTH, RuleMood.DARKER),
            "boost-one-semitone": (RuleCategory.IMPACT, RuleMood.TENSION),
            "boost-two-semitone": (RuleCategory.IMPACT, RuleMood.TENSION),
            "parallel-key-minor": (RuleCategory.IMPACT, RuleMood.DARKER),
            "parallel-key-major": (RuleCategory.IMPACT, RuleMood.BRIGHTER),
        }
        for rule in RULES:
            assert (rule.category, rule.mood) == expected[rule.id]

    def test_apply_from_8m(self):
        """Projected keys from 8m."""
        key = OpenKey(8, MINOR)
        assert apply_rule("maintain", key) == OpenKey(8, MINOR)
        assert apply_rule("adjacent-number-uplift", key) == OpenKey(9, MINOR)
        assert apply_rule("adjacent-number-downlift", key) == OpenKey(7, MINOR)
        assert apply_rule("adjacent-letter-uplift", key) == OpenKey(8, MAJOR)
        assert apply_rule("adjacent-letter-downlift", key) == OpenKey(8, MINOR)
        assert apply_rule("boost-one-semitone", key) == OpenKey(3, MINOR)
        assert apply_rule("boost-two-semitone", key) == OpenKey(10, MINOR)
        assert apply_rule("parallel-key-minor", key) == OpenKey(5, MINOR)
        assert apply_rule("parallel-key-major", key) == OpenKey(11, MINOR)

    def test_apply_wraps_around_wheel(self):
        """Number shifts wrap past 12 and below 1."""
        assert apply_rule("adjacent-number-uplift", OpenKey(12, MAJOR)) == OpenKey(1, MAJOR)
        assert apply_rule("adjacent-number-downlift", OpenKey(1, MINOR)) == OpenKey(12, MINOR)
        assert apply_rule("parallel-key-minor", OpenKey(2, MAJOR)) == OpenKey(11, MAJOR)

    def test_transforms_stay_on_wheel(self):
        """Every rule maps every key to a number in 1-12."""
        for rule in RULES:
            for key in all_keys():
                assert 1 <= rule.apply(key).number <= 12

    def test_unknown_rule_raises(self):
        """Unknown rule ids are a programming error."""
        with pytest.raises(UnknownRuleError):
            apply_rule("does-not-exist", OpenKey(8, MINOR))
        with pytest.raises(KeyError):
            get_rule(CUSTOM_RULE_ID)

    def test_suggest_returns_nine_in_order(self):
        """Suggestions follow catalogue order for every anchor."""
        for key in all_keys():
            suggestions = suggest(key)
            assert [s.rule_id for s in suggestions] == list(RULE_IDS)
            assert all(s.from_key_text == format_key(key) for s in suggestions)

    def test_suggest_wire_shape(self):
        """Suggestions serialize with their display fields."""
        first = suggest(OpenKey(8, MINOR))[1].to_dict()
        assert first == {
            "ruleId": "adjacent-number-uplift",
            "displayName": "Adjacent Number Uplift",
            "shortLabel": "+1",
            "category": "smooth",
            "mood": "tension",
            "description": first["description"],
            "fromKeyText": "8m",
            "toKeyText": "9m",
        }

    def test_match_scenario(self):
        """8m -> 9m is an adjacent number uplift."""
        rule = match_rule(parse_key("8m"), OpenKey(9, MINOR))
        assert rule is not None
        assert rule.id == "adjacent-number-uplift"

    def test_match_maintain_for_every_key(self):
        """A key matched against itself is always maintain."""
        for key in all_keys():
            assert match_rule(key, apply_rule("maintain", key)).id == "maintain"

    def test_match_prefers_earlier_rule(self):
        """Letter uplift on a major key lands on the same key; maintain wins."""
        key = OpenKey(8, MAJOR)
        assert apply_rule("adjacent-letter-uplift", key) == key
        assert match_rule(key, key).id == "maintain"

    def test_match_returns_none_for_custom_move(self):
        """Transitions no rule predicts have no match."""
        assert match_rule(OpenKey(8, MINOR), OpenKey(2, MAJOR)) is None

    def test_custom_rule_is_outside_catalogue(self):
        """The custom marker is never part of the catalogue."""
        assert CUSTOM_RULE.id == "custom"
        assert CUSTOM_RULE.id not in RULE_IDS
        assert not hasattr(CUSTOM_RULE, "transform")


class TestKeyColors:
    """Test key display colours."""

    def test_modes_share_colour(self):
        assert key_color("8m") == key_color("8d") == "#70FF00"

    def test_camelot_text_accepted(self):
        assert key_color("1A") == "#FF1AF1"

    def test_unknown_text_is_grey(self):
        assert key_color("13m") == UNKNOWN_KEY_COLOR
        assert key_color("") == UNKNOWN_KEY_COLOR
