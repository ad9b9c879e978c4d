"""
Speller tiers backed by word-frequency dictionaries.

A tier answers four questions about a word: is it misspelled, how frequent
is it, and which corrections exist in the default and the user dictionary.
Tiers are ordered by the edit distance they tolerate:

- Tier 1: edit distance 1 (pyspellchecker edit generator)
- Tier 2: edit distance 2 (pyspellchecker edit generator)
- Tier 3: Levenshtein distance <= 3 (rapidfuzz over the vocabulary)

All tiers built by create_tiers() share the same loaded dictionaries and
are read-only after construction.
"""

from __future__ import annotations

import importlib.resources
import logging
import math
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein
from spellchecker import SpellChecker

from spellrule.exceptions import DictionaryLoadError

if TYPE_CHECKING:
    from spellrule.config import RuleConfig, UserConfig

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Frequencies are reported on a 0..21 scale (0 = unknown word)
MAX_FREQUENCY = 21

# Highest edit distance handled by pyspellchecker's generators
MAX_GENERATED_DISTANCE = 2

LETTER_PATTERN = re.compile(r"[^\W\d_]")
DIGIT_PATTERN = re.compile(r"\d")


# =============================================================================
# TIER INTERFACE
# =============================================================================


class SpellerTier(ABC):
    """
    One level of the spelling cascade.

    Implementations must be internally consistent: a word that is not
    misspelled has a frequency > 0.
    """

    tier: int = 1

    @abstractmethod
    def is_misspelled(self, word: str) -> bool:
        """Return True if the word is not in any dictionary of this tier."""

    @abstractmethod
    def frequency(self, word: str) -> int:
        """Return the word frequency on a 0..MAX_FREQUENCY scale (0 = unknown)."""

    @abstractmethod
    def suggestions_default(self, word: str) -> list[str]:
        """Return ordered corrections from the default dictionaries."""

    @abstractmethod
    def suggestions_user(self, word: str) -> list[str]:
        """Return ordered corrections from the user dictionary."""


# =============================================================================
# DICTIONARY SPELLER
# =============================================================================


def _restore_case(template: str, word: str) -> str:
    """Apply the capitalization of ``template`` to a lower-case ``word``."""
    if len(template) > 1 and template.isupper():
        return word.upper()
    if template[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


class DictionarySpeller(SpellerTier):
    """
    SpellerTier over pyspellchecker dictionaries.

    Attributes:
        spell: SpellChecker holding the default dictionaries.
        user_spell: Optional SpellChecker holding only the user's words.
        tier: Tier index, equal to the tolerated edit distance.
        max_suggestions: Maximum candidates returned per lookup.

    Example:
        >>> from spellchecker import SpellChecker
        >>> tier2 = DictionarySpeller(SpellChecker(), tier=2)
        >>> tier2.is_misspelled("recieve")
        True
        >>> "receive" in tier2.suggestions_default("recieve")
        True
    """

    def __init__(
        self,
        spell: SpellChecker,
        user_spell: SpellChecker | None = None,
        tier: int = 1,
        max_suggestions: int = 10,
    ):
        if tier < 1:
            raise ValueError(f"tier must be >= 1, got {tier}")
        self.spell = spell
        self.user_spell = user_spell
        self.tier = tier
        self.max_suggestions = max_suggestions

        counts = spell.word_frequency.dictionary
        self._max_count = max(counts.values(), default=0)

        # rapidfuzz needs a materialized vocabulary for distances above 2
        self._vocabulary: list[str] = []
        self._user_vocabulary: list[str] = []
        if tier > MAX_GENERATED_DISTANCE:
            self._vocabulary = list(counts.keys())
            if user_spell is not None:
                self._user_vocabulary = list(user_spell.word_frequency.dictionary.keys())

    def _is_checkable(self, word: str) -> bool:
        # Words without letters or with digits are never reported
        return bool(LETTER_PATTERN.search(word)) and not DIGIT_PATTERN.search(word)

    def _in_user_dictionary(self, word: str) -> bool:
        return self.user_spell is not None and word.lower() in self.user_spell

    def is_misspelled(self, word: str) -> bool:
        if not word or not self._is_checkable(word):
            return False
        w = word.lower()
        if w in self.spell:
            return False
        return not self._in_user_dictionary(w)

    def frequency(self, word: str) -> int:
        if not word:
            return 0
        count = self.spell.word_frequency.dictionary.get(word.lower(), 0)
        if count <= 0:
            return 1 if self._in_user_dictionary(word) else 0
        if self._max_count <= 1:
            return MAX_FREQUENCY
        scaled = round(MAX_FREQUENCY * math.log1p(count) / math.log1p(self._max_count))
        return max(1, min(MAX_FREQUENCY, scaled))

    def _candidates(self, spell: SpellChecker, vocabulary: list[str], word: str) -> list[str]:
        w = word.lower()
        if self.tier == 1:
            found = spell.known(spell.edit_distance_1(w))
        elif self.tier == 2:
            found = spell.known(spell.edit_distance_2(w))
        else:
            found = {
                choice
                for choice, _, _ in process.extract(
                    w,
                    vocabulary,
                    scorer=Levenshtein.distance,
                    score_cutoff=self.tier,
                    limit=None,
                )
            }
        found.discard(w)
        counts = spell.word_frequency.dictionary
        ranked = sorted(found, key=lambda c: (-counts.get(c, 0), c))
        return [_restore_case(word, c) for c in ranked[: self.max_suggestions]]

    def suggestions_default(self, word: str) -> list[str]:
        if not word:
            return []
        suggestions = self._candidates(self.spell, self._vocabulary, word)
        logger.debug("Tier %d: %d default suggestions for '%s'", self.tier, len(suggestions), word)
        return suggestions

    def suggestions_user(self, word: str) -> list[str]:
        if not word or self.user_spell is None:
            return []
        return self._candidates(self.user_spell, self._user_vocabulary, word)


# =============================================================================
# CONSTRUCTION
# =============================================================================


def _bundled_dictionary_exists(language: str) -> bool:
    resource = importlib.resources.files("spellchecker") / "resources" / f"{language}.json.gz"
    return resource.is_file()


def dictionary_exists(config: RuleConfig) -> bool:
    """
    Check whether the main dictionary resource is available.

    An explicit dictionary_path takes precedence over the bundled
    pyspellchecker resource for config.language.
    """
    if config.dictionary_path is not None:
        return config.dictionary_path.exists()
    if config.language:
        return _bundled_dictionary_exists(config.language)
    return False


def _load_word_list(spell: SpellChecker, path: Path | None, label: str) -> None:
    if path is None:
        return
    if not path.exists():
        logger.debug("No %s word list at %s", label, path)
        return
    spell.word_frequency.load_text_file(str(path))
    logger.info("Loaded %s word list from %s", label, path)


def load_dictionary(config: RuleConfig) -> SpellChecker:
    """
    Load the default dictionaries described by ``config``.

    Raises:
        DictionaryLoadError: If a present resource cannot be read or parsed.
    """
    try:
        if config.dictionary_path is not None:
            spell = SpellChecker(language=None)
            spell.word_frequency.load_dictionary(str(config.dictionary_path))
        else:
            spell = SpellChecker(language=config.language)
        _load_word_list(spell, config.spelling_path, "spelling")
        _load_word_list(spell, config.variant_spelling_path, "language variant")
    except (OSError, ValueError) as e:
        raise DictionaryLoadError(f"Failed to load dictionary: {e}") from e

    logger.info(
        "Loaded dictionary with %d words (%s)",
        len(spell.word_frequency.dictionary),
        config.dictionary_path or config.language,
    )
    return spell


def create_tiers(config: RuleConfig, user_config: UserConfig | None = None) -> list[SpellerTier]:
    """
    Build the ordered speller tiers sharing one set of dictionaries.

    Args:
        config: Rule configuration naming the dictionary resources.
        user_config: Optional user settings (user words, tier count).

    Returns:
        Tiers ordered by increasing edit distance.
    """
    spell = load_dictionary(config)

    user_spell = None
    if user_config is not None and user_config.user_words:
        user_spell = SpellChecker(language=None)
        user_spell.word_frequency.load_words(user_config.user_words)

    tier_count = user_config.max_edit_distance if user_config else 3
    max_suggestions = user_config.suggestions_per_tier if user_config else 10
    return [
        DictionarySpeller(spell, user_spell, tier=tier, max_suggestions=max_suggestions)
        for tier in range(1, tier_count + 1)
    ]
