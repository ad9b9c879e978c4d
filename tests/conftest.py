"""
Pytest configuration and fixtures for spellrule tests.
"""

from collections import Counter

import pytest

from spellrule.config import RuleConfig
from spellrule.spelling.dictionary import SpellerTier
from spellrule.spelling.rule import SpellerRule


class FakeTier(SpellerTier):
    """In-memory speller tier that counts how often it is queried."""

    def __init__(self, tier, words, default=None, user=None):
        self.tier = tier
        self.words = words  # word -> frequency (0..21)
        self.default = default or {}
        self.user = user or {}
        self.calls = Counter()

    def is_misspelled(self, word):
        self.calls["is_misspelled"] += 1
        return any(ch.isalpha() for ch in word) and word not in self.words

    def frequency(self, word):
        return self.words.get(word, 0)

    def suggestions_default(self, word):
        self.calls["default"] += 1
        return list(self.default.get(word, []))

    def suggestions_user(self, word):
        self.calls["user"] += 1
        return list(self.user.get(word, []))


@pytest.fixture
def make_tiers():
    """Factory for three fake tiers sharing one vocabulary.

    ``default``/``user`` map tier index (1..3) to {word: [suggestions]}.
    """

    def _make(words, default=None, user=None):
        default = default or {}
        user = user or {}
        return [FakeTier(i, words, default.get(i), user.get(i)) for i in (1, 2, 3)]

    return _make


@pytest.fixture
def make_rule(make_tiers):
    """Factory for a SpellerRule backed by fake tiers.

    Returns (rule, tiers).
    """

    def _make(words, default=None, user=None, config=None, user_config=None, **kwargs):
        tiers = make_tiers(words, default, user)
        rule = SpellerRule(
            config or RuleConfig(),
            user_config,
            tier_factory=lambda rule_config, user_cfg: tiers,
            resource_check=lambda rule_config: True,
            **kwargs,
        )
        return rule, tiers

    return _make


@pytest.fixture
def vocabulary():
    """Small vocabulary with frequencies on the 0..21 scale."""
    return {
        "I": 21,
        "the": 21,
        "to": 21,
        "go": 20,
        "you": 20,
        "going": 19,
        "than": 18,
        "thank": 15,
        "receive": 14,
        "throw": 12,
        "world": 16,
        "hello": 13,
        "well": 17,
        "known": 16,
        "famous": 10,
    }
