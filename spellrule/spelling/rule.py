"""
Spelling rule orchestrator.

This module provides SpellerRule, which scans the tokens of a sentence and
wires together the spelling components for each checked word:

1. SplitWordDetector (misplaced space with the previous or next token)
2. CandidateAssembler (tier cascade + language hooks)
3. SuggestionRanker (baseline, model or experimental ordering)
4. MatchBuilder (final suggestions and offsets)

Speller tiers are loaded lazily, once per rule instance, on the first
sentence checked.
"""

from __future__ import annotations

import logging
import re
import threading
from collections.abc import Callable

from spellrule.config import RankingContext, RuleConfig, UserConfig
from spellrule.models import AnalyzedSentence, Match, MatchType, Messages, Token
from spellrule.spelling.candidates import CandidateAssembler
from spellrule.spelling.dictionary import SpellerTier, create_tiers, dictionary_exists
from spellrule.spelling.hooks import LanguageHooks
from spellrule.spelling.matches import MatchBuilder, adjust_for_hidden_chars
from spellrule.spelling.ranking import (
    SuggestionOrderer,
    SuggestionRanker,
    default_sampler,
)
from spellrule.spelling.split import SplitResult, SplitWordDetector

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

URL_PATTERN = re.compile(r"^(?:(?:https?|ftp)://|www\.)\S+$", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"^[\w.+-]+@[\w-]+(?:\.[\w-]+)+$")

# Code points above the Basic Multilingual Plane (UTF-16 surrogate pairs)
MAX_BMP_CODE_POINT = 0xFFFF


def is_url(text: str) -> bool:
    return bool(URL_PATTERN.match(text))


def is_email(text: str) -> bool:
    return bool(EMAIL_PATTERN.match(text))


def is_surrogate_pair_combination(word: str) -> bool:
    """
    Check whether a word consists only of astral-plane characters.

    Emoji such as "🙂" fall in this range and are never spell-checked.
    """
    return bool(word) and all(ord(ch) > MAX_BMP_CODE_POINT for ch in word)


# =============================================================================
# SPELLER RULE
# =============================================================================


class SpellerRule:
    """
    Detects misspelled words in a sentence and suggests corrections.

    Attributes:
        config: Rule configuration (dictionaries, ignore policy).
        user_config: Per-request user settings, or None.
        hooks: Language-specific strategy.
        messages: Message bundle for match texts.
        ranking: Experiment snapshot; derived from user_config when None.

    Example:
        >>> rule = SpellerRule(RuleConfig(language="en"))
        >>> sentence = AnalyzedSentence.from_text("I recieve it")
        >>> [(m.from_offset, m.to_offset) for m in rule.find_errors(sentence)]
        [(2, 9)]
    """

    def __init__(
        self,
        config: RuleConfig | None = None,
        user_config: UserConfig | None = None,
        *,
        hooks: LanguageHooks | None = None,
        messages: Messages | None = None,
        ranking: RankingContext | None = None,
        orderer: SuggestionOrderer | None = None,
        experimental_orderer: SuggestionOrderer | None = None,
        alternative_language: Callable[[str], str | None] | None = None,
        tier_factory: Callable[[RuleConfig, UserConfig | None], list[SpellerTier]] = create_tiers,
        resource_check: Callable[[RuleConfig], bool] = dictionary_exists,
        sampler: Callable[[], bool] = default_sampler,
    ):
        self.config = config or RuleConfig()
        self.user_config = user_config
        self.hooks = hooks or LanguageHooks()
        self.messages = messages or Messages()
        self.ranking = ranking
        self.alternative_language = alternative_language
        self.tier_factory = tier_factory
        self.resource_check = resource_check

        self.ranker = SuggestionRanker(
            model=orderer,
            experimental=experimental_orderer,
            hooks=self.hooks,
            sampler=sampler,
        )
        self.builder = MatchBuilder(self.ranker, self.messages)
        self._compound = re.compile(self.config.compound_pattern)

        # Set once under _init_lock; read without locking afterwards
        self._init_lock = threading.Lock()
        self._initialized = False
        self._tiers: list[SpellerTier] | None = None
        self._detector: SplitWordDetector | None = None
        self._assembler: CandidateAssembler | None = None

    # -------------------------------------------------------------------------
    # Lazy initialization
    # -------------------------------------------------------------------------

    def _ensure_tiers(self) -> list[SpellerTier] | None:
        """Load tiers on first use; None if the dictionary is unavailable."""
        if self._initialized:
            return self._tiers
        with self._init_lock:
            if self._initialized:
                return self._tiers
            if not self.resource_check(self.config):
                logger.warning(
                    "Dictionary not available (%s); spelling rule produces no matches",
                    self.config.dictionary_path or self.config.language,
                )
            else:
                tiers = self.tier_factory(self.config, self.user_config)
                tier1 = tiers[0]
                self._detector = SplitWordDetector(
                    lambda word: self.is_misspelled(tier1, word),
                    tier1.frequency,
                    self.messages,
                )
                self._assembler = CandidateAssembler(tiers, self.hooks, self.is_prohibited)
                self._tiers = tiers
            self._initialized = True
        return self._tiers

    # -------------------------------------------------------------------------
    # Word predicates
    # -------------------------------------------------------------------------

    def is_misspelled(self, speller: SpellerTier, word: str) -> bool:
        """
        Misspelling test with optional compound handling.

        With check_compound enabled, a word unknown as a whole is accepted
        when every part between compound separators is known.
        """
        if not speller.is_misspelled(word):
            return False
        if self.config.check_compound and self._compound.search(word):
            return any(speller.is_misspelled(part) for part in self._compound.split(word) if part)
        return True

    def is_prohibited(self, word: str) -> bool:
        return word in self.config.prohibited_words

    def ignore_word(self, word: str) -> bool:
        return word in self.config.ignored_words or is_surrogate_pair_combination(word)

    def can_be_ignored(self, tokens: list[Token], idx: int, token: Token) -> bool:
        return (
            token.is_sentence_start
            or token.is_immunized
            or token.is_ignored_by_speller
            or is_url(token.text)
            or is_email(token.text)
            or (
                self.config.ignore_tagged_words
                and token.is_tagged
                and not self.is_prohibited(token.text)
            )
            or self.ignore_word(token.word)
            or self.hooks.ignore_token(tokens, idx)
        )

    def ranking_snapshot(self) -> RankingContext:
        """Experiment settings for one word, read once."""
        ranking = self.ranking
        if ranking is not None:
            return ranking
        model = self.ranker.model
        return RankingContext.from_user_config(
            self.user_config,
            model_available=model is not None and model.is_ml_available(),
        )

    # -------------------------------------------------------------------------
    # Matching
    # -------------------------------------------------------------------------

    def find_errors(self, sentence: AnalyzedSentence) -> list[Match]:
        """
        Find spelling errors in a sentence.

        Args:
            sentence: Tokenized sentence.

        Returns:
            Non-overlapping matches in text order; empty if the dictionary
            resource is unavailable.

        Raises:
            ValueError: If sentence is None.
            DictionaryLoadError: If a dictionary resource cannot be read.
        """
        if sentence is None:
            raise ValueError("Input sentence cannot be None")

        if self._ensure_tiers() is None:
            return []

        matches: list[Match] = []
        tokens = sentence.tokens
        pattern = self.hooks.tokenizing_pattern()

        for idx, token in enumerate(tokens):
            if self.can_be_ignored(tokens, idx, token):
                continue

            word = token.word
            start = token.start_offset
            new_matches: list[Match] = []

            if pattern is None:
                new_matches += self._word_matches(word, start, sentence, matches, idx, tokens)
            else:
                index = 0
                for m in pattern.finditer(word):
                    piece = word[index : m.start()]
                    new_matches += self._word_matches(
                        piece, start + index, sentence, matches, idx, tokens
                    )
                    index = m.end()
                new_matches += self._word_matches(
                    word[index:], start + index, sentence, matches, idx, tokens
                )

            adjust_for_hidden_chars(new_matches, token)

        return matches

    def _word_matches(
        self,
        word: str,
        start: int,
        sentence: AnalyzedSentence,
        matches_so_far: list[Match],
        idx: int,
        tokens: list[Token],
    ) -> list[Match]:
        """Check one word; appends at most one match to ``matches_so_far``."""
        match = self._match_word(word, start, sentence, matches_so_far, idx, tokens)
        if match is None:
            return []
        matches_so_far.append(match)
        return [match]

    @staticmethod
    def _claimed_by_earlier_match(previous: Token, matches_so_far: list[Match]) -> bool:
        """True if the previous token is covered by a match that starts before it."""
        if not matches_so_far:
            return False
        last = matches_so_far[-1]
        return last.to_offset > previous.start_offset and last.from_offset != previous.start_offset

    def _match_word(
        self,
        word: str,
        start: int,
        sentence: AnalyzedSentence,
        matches_so_far: list[Match],
        idx: int,
        tokens: list[Token],
    ) -> Match | None:
        tier1 = self._tiers[0]
        if not word:
            return None
        if not self.is_misspelled(tier1, word) and not self.is_prohibited(word):
            return None

        # Already covered by the previous match
        if matches_so_far and matches_so_far[-1].to_offset > start:
            return None

        split = SplitResult()
        if idx > 0 and not self._claimed_by_earlier_match(tokens[idx - 1], matches_so_far):
            split = self._detector.check_previous(word, start, tokens[idx - 1], matches_so_far)
            if split.confirmed:
                return split.match
        if split.match is None and idx < len(tokens) - 1:
            split = self._detector.check_next(word, start, tokens[idx + 1], matches_so_far)
            if split.confirmed:
                return split.match

        match = split.match
        if match is None:
            language = self.alternative_language(word) if self.alternative_language else None
            if language:
                # e.g. "Der Typ ist in UK echt famous"
                return Match(
                    from_offset=start,
                    to_offset=start + len(word),
                    message=self.messages.get("accepted_in_alt_language", word, language),
                    kind=MatchType.HINT,
                )
            match = Match(
                from_offset=start,
                to_offset=start + len(word),
                message=self.messages.get("spelling"),
                short_message=self.messages.get("desc_spelling_short"),
            )

        limit = self.user_config.max_spelling_suggestions if self.user_config else 0
        if limit and len(matches_so_far) > limit:
            # Limited to save CPU
            return self.builder.too_many_errors(match)

        context = self.ranking_snapshot()
        candidates = self._assembler.assemble(word, context.full_results_experiment)
        strategy = self.ranker.select(context)
        logger.debug("Ranking '%s' with %s strategy", word, strategy.value)
        return self.builder.build(
            match,
            word,
            candidates,
            strategy,
            before=split.before,
            after=split.after,
            sentence=sentence,
        )
