"""
Unit tests for the pyspellchecker-backed speller tiers.
"""

import json

import pytest
from spellchecker import SpellChecker

from spellrule.config import RuleConfig, UserConfig
from spellrule.exceptions import DictionaryLoadError
from spellrule.spelling.dictionary import (
    MAX_FREQUENCY,
    DictionarySpeller,
    create_tiers,
    dictionary_exists,
    load_dictionary,
)

COUNTS = {
    "the": 1000,
    "you": 200,
    "thank": 50,
    "world": 40,
    "receive": 30,
    "relieve": 5,
    "rare": 1,
}


@pytest.fixture
def spell():
    """SpellChecker over a small word-frequency dictionary."""
    checker = SpellChecker(language=None)
    checker.word_frequency.load_json(COUNTS)
    return checker


@pytest.fixture
def user_spell():
    """SpellChecker holding only user words."""
    checker = SpellChecker(language=None)
    checker.word_frequency.load_words(["spellrule"])
    return checker


@pytest.fixture(scope="module")
def english():
    """The bundled English dictionary (loaded once)."""
    return SpellChecker(language="en")


class TestIsMisspelled:
    """Test word lookups."""

    def test_known_and_unknown(self, spell):
        """Dictionary words pass; others are misspelled."""
        speller = DictionarySpeller(spell)

        assert not speller.is_misspelled("thank")
        assert speller.is_misspelled("thanky")

    def test_case_insensitive(self, spell):
        """Capitalized dictionary words are accepted."""
        speller = DictionarySpeller(spell)
        assert not speller.is_misspelled("Thank")
        assert not speller.is_misspelled("THE")

    @pytest.mark.parametrize("word", ["", "123", "abc123", "...", "x2"])
    def test_unchecked_words(self, spell, word):
        """Words without letters or with digits are never misspelled."""
        assert not DictionarySpeller(spell).is_misspelled(word)

    def test_user_dictionary(self, spell, user_spell):
        """User words are accepted."""
        speller = DictionarySpeller(spell, user_spell)
        assert not speller.is_misspelled("spellrule")

    def test_invalid_tier(self, spell):
        """Tier indices start at 1."""
        with pytest.raises(ValueError):
            DictionarySpeller(spell, tier=0)


class TestFrequency:
    """Test the 0..21 frequency scale."""

    def test_most_frequent_word_is_max(self, spell):
        """The most frequent word maps to the top of the scale."""
        assert DictionarySpeller(spell).frequency("the") == MAX_FREQUENCY

    def test_scale_is_monotonic(self, spell):
        """More frequent words never score lower."""
        speller = DictionarySpeller(spell)
        scores = [speller.frequency(w) for w in ("rare", "relieve", "thank", "you", "the")]

        assert scores == sorted(scores)
        assert scores[0] >= 1

    def test_unknown_word(self, spell):
        """Unknown words have frequency 0."""
        assert DictionarySpeller(spell).frequency("thanky") == 0

    def test_user_only_word(self, spell, user_spell):
        """Words only in the user dictionary get the lowest known frequency."""
        assert DictionarySpeller(spell, user_spell).frequency("spellrule") == 1


class TestSuggestions:
    """Test per-tier candidate generation."""

    def test_tier_one(self, spell):
        """Tier 1 finds edit-distance-1 words, most frequent first."""
        suggestions = DictionarySpeller(spell, tier=1).suggestions_default("recieve")

        assert suggestions[0] == "receive"
        assert "relieve" in suggestions

    def test_tier_one_misses_distance_two(self, spell):
        """Tier 1 does not reach two edits away."""
        assert "thank" not in DictionarySpeller(spell, tier=1).suggestions_default("tnk")

    def test_tier_two(self, spell):
        """Tier 2 finds edit-distance-2 words."""
        assert "thank" in DictionarySpeller(spell, tier=2).suggestions_default("tnk")

    def test_tier_three(self, spell):
        """Tier 3 reaches Levenshtein distance 3."""
        assert DictionarySpeller(spell, tier=2).suggestions_default("rxcxxve") == []
        assert DictionarySpeller(spell, tier=3).suggestions_default("rxcxxve") == ["receive"]

    def test_case_restored(self, spell):
        """Suggestions follow the capitalization of the word."""
        speller = DictionarySpeller(spell)

        assert speller.suggestions_default("Recieve")[0] == "Receive"
        assert speller.suggestions_default("RECIEVE")[0] == "RECEIVE"

    def test_max_suggestions(self, spell):
        """Results are truncated to max_suggestions."""
        speller = DictionarySpeller(spell, max_suggestions=1)
        assert speller.suggestions_default("recieve") == ["receive"]

    def test_user_suggestions(self, spell, user_spell):
        """User candidates come only from the user dictionary."""
        speller = DictionarySpeller(spell, user_spell)

        assert speller.suggestions_user("spelrule") == ["spellrule"]
        assert speller.suggestions_default("spelrule") == []

    def test_no_user_dictionary(self, spell):
        """Without a user dictionary there are no user candidates."""
        assert DictionarySpeller(spell).suggestions_user("spelrule") == []

    def test_bundled_english(self, english):
        """The bundled English dictionary corrects a common typo."""
        speller = DictionarySpeller(english)

        assert speller.is_misspelled("recieve")
        assert "receive" in speller.suggestions_default("recieve")


class TestLoading:
    """Test dictionary resources and tier construction."""

    def test_dictionary_exists(self, tmp_path):
        """Explicit paths and bundled languages are checked."""
        assert dictionary_exists(RuleConfig(language="en"))
        assert not dictionary_exists(RuleConfig(language="xx"))
        assert not dictionary_exists(RuleConfig(language=None))
        assert not dictionary_exists(RuleConfig(dictionary_path=tmp_path / "missing.json"))

    def test_unreadable_dictionary(self, tmp_path):
        """A corrupt dictionary raises DictionaryLoadError."""
        path = tmp_path / "broken.json"
        path.write_text("not json")

        with pytest.raises(DictionaryLoadError):
            load_dictionary(RuleConfig(dictionary_path=path))

    def test_word_lists_added(self, tmp_path):
        """Spelling word lists extend the main dictionary."""
        dictionary = tmp_path / "words.json"
        dictionary.write_text(json.dumps(COUNTS))
        spelling = tmp_path / "spelling.txt"
        spelling.write_text("colour\nflavour\n")

        spell = load_dictionary(RuleConfig(dictionary_path=dictionary, spelling_path=spelling))

        assert "colour" in spell
        assert "thank" in spell

    def test_create_tiers(self, tmp_path):
        """Tiers share dictionaries and follow the user settings."""
        dictionary = tmp_path / "words.json"
        dictionary.write_text(json.dumps(COUNTS))

        tiers = create_tiers(
            RuleConfig(dictionary_path=dictionary),
            UserConfig(user_words=["spellrule"], max_edit_distance=2),
        )

        assert [t.tier for t in tiers] == [1, 2]
        assert tiers[0].spell is tiers[1].spell
        assert not tiers[0].is_misspelled("spellrule")
        assert tiers[1].frequency("spellrule") == 1

    def test_create_tiers_defaults(self, tmp_path):
        """Without user settings, three tiers are built."""
        dictionary = tmp_path / "words.json"
        dictionary.write_text(json.dumps(COUNTS))

        assert len(create_tiers(RuleConfig(dictionary_path=dictionary))) == 3
