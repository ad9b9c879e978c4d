"""
Language-specific extension points of the spelling rule.

LanguageHooks bundles the operations a language variant may override.
Every default is a no-op, so the base class is usable as-is.

Example:
    >>> class GermanHooks(LanguageHooks):
    ...     def additional_top_suggestions(self, suggestions, word):
    ...         return [word.replace("ss", "ß")] if "ss" in word else []
    >>> rule = SpellerRule(config, hooks=GermanHooks())
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spellrule.models import Token


class LanguageHooks:
    """Default (no-op) language strategy."""

    def tokenizing_pattern(self) -> re.Pattern[str] | None:
        """
        Pattern used to split tokens into dictionary words.

        Useful when the dictionary has no hyphenated entries, for example.
        None means tokens are checked whole.
        """
        return None

    def ignore_token(self, tokens: list[Token], idx: int) -> bool:
        """Return True to skip the token at ``idx``."""
        return False

    def order_suggestions(self, suggestions: list[str], word: str) -> list[str]:
        """Baseline ordering of the default suggestions."""
        return suggestions

    def additional_top_suggestions(self, suggestions: list[str], word: str) -> list[str]:
        """Candidates placed before the dictionary suggestions."""
        return []

    def additional_suggestions(self, suggestions: list[str], word: str) -> list[str]:
        """Candidates placed after the dictionary suggestions."""
        return []
