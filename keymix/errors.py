"""
Exception types raised by keymix.

Untrusted input (key text, share tokens, imported records, stored blobs) never
raises; these exceptions mark caller mistakes or unreadable files.
"""


class KeymixError(Exception):
    """Base class for keymix errors."""


class UnknownRuleError(KeymixError, KeyError):
    """A rule id that is not part of the harmonic rule catalogue."""

    def __init__(self, rule_id: str):
        super().__init__(rule_id)
        self.rule_id = rule_id

    def __str__(self) -> str:
        return f"Unknown harmonic rule: {self.rule_id!r}"


class PlaylistParseError(KeymixError):
    """A playlist file that could not be read at all."""
