"""
Ordering of correction candidates.

Candidates arrive in cascade order (the baseline). A SuggestionOrderer may
re-order them; which ordering applies to a word is decided from one
RankingContext snapshot:

1. "new suggestions pipeline" experiment: the experimental orderer, always
2. A/B test with a session identity and an available model: session parity
   picks the bucket ("SuggestionsRanker": odd = model,
   "SuggestionsOrderer": even = model)
3. Otherwise the model when available, else the baseline

Orderers only permute: nothing is ever added or dropped.
"""

from __future__ import annotations

import logging
import random
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from rapidfuzz import fuzz

from spellrule.config import AB_TEST_ORDERER, AB_TEST_RANKER
from spellrule.spelling.hooks import LanguageHooks

if TYPE_CHECKING:
    from spellrule.config import RankingContext
    from spellrule.models import AnalyzedSentence

logger = logging.getLogger(__name__)

# Share of A/B evaluations reported by the default diagnostic sampler
DIAGNOSTIC_SAMPLE_RATE = 0.01


class RankingStrategy(Enum):
    """Which ordering is applied to a word's candidates."""

    BASELINE = "baseline"
    MODEL = "model"
    EXPERIMENTAL = "experimental"


class SuggestionOrderer(ABC):
    """Re-orders candidates, typically with a trained model."""

    @abstractmethod
    def is_ml_available(self) -> bool:
        """Return True if the orderer can be used."""

    @abstractmethod
    def order_suggestions_using_model(
        self,
        suggestions: list[str],
        word: str,
        sentence: AnalyzedSentence | None,
        start_pos: int,
    ) -> list[str]:
        """Return the same candidates in model order."""


class SimilarityOrderer(SuggestionOrderer):
    """
    Orders candidates by string similarity to the misspelled word.

    Uses rapidfuzz's normalized Indel ratio, compared case-insensitively.
    Ties keep their cascade order.
    """

    def is_ml_available(self) -> bool:
        return True

    def order_suggestions_using_model(
        self,
        suggestions: list[str],
        word: str,
        sentence: AnalyzedSentence | None,
        start_pos: int,
    ) -> list[str]:
        w = word.lower()
        return sorted(suggestions, key=lambda s: -fuzz.ratio(w, s.lower()))


def default_sampler() -> bool:
    return random.random() < DIAGNOSTIC_SAMPLE_RATE


class SuggestionRanker:
    """
    Applies the ranking strategy selected for a word.

    Attributes:
        model: Orderer used for the MODEL strategy.
        experimental: Orderer used for the EXPERIMENTAL strategy
            (defaults to ``model``).
        hooks: Language hooks providing the baseline ordering.
        sampler: Decides whether an A/B decision is logged.
    """

    def __init__(
        self,
        model: SuggestionOrderer | None = None,
        experimental: SuggestionOrderer | None = None,
        hooks: LanguageHooks | None = None,
        sampler: Callable[[], bool] = default_sampler,
    ):
        self.model = model
        self.experimental = experimental or model
        self.hooks = hooks or LanguageHooks()
        self.sampler = sampler

    def model_available(self, context: RankingContext) -> bool:
        return context.model_available and self.model is not None and self.model.is_ml_available()

    def select(self, context: RankingContext) -> RankingStrategy:
        """Pick the strategy for one word from a context snapshot."""
        if context.new_suggestions_pipeline and self.experimental is not None:
            return RankingStrategy.EXPERIMENTAL

        has_model = self.model_available(context)
        ab_test = context.ab_test_name
        if ab_test in (AB_TEST_RANKER, AB_TEST_ORDERER) and has_model and context.session_id is not None:
            even = context.session_id % 2 == 0
            model_bucket = not even if ab_test == AB_TEST_RANKER else even
            strategy = RankingStrategy.MODEL if model_bucket else RankingStrategy.BASELINE
            if self.sampler():
                logger.info(
                    "Running A/B test %s: session %d uses %s ordering",
                    ab_test,
                    context.session_id,
                    strategy.value,
                )
            return strategy

        return RankingStrategy.MODEL if has_model else RankingStrategy.BASELINE

    def baseline(self, suggestions: list[str], word: str) -> list[str]:
        """Cascade order, adjusted by the language hook."""
        return _as_permutation(suggestions, self.hooks.order_suggestions(list(suggestions), word))

    def rank(
        self,
        suggestions: list[str],
        word: str,
        strategy: RankingStrategy,
        sentence: AnalyzedSentence | None = None,
        start_pos: int = 0,
    ) -> list[str]:
        """
        Order ``suggestions`` with ``strategy``.

        The input list is not modified; the result holds exactly the same
        candidates.
        """
        if not suggestions or strategy is RankingStrategy.BASELINE:
            return list(suggestions)

        orderer = self.experimental if strategy is RankingStrategy.EXPERIMENTAL else self.model
        if orderer is None:
            return list(suggestions)
        ordered = orderer.order_suggestions_using_model(list(suggestions), word, sentence, start_pos)
        return _as_permutation(suggestions, ordered)


def _as_permutation(original: list[str], ordered: list[str]) -> list[str]:
    """Restrict ``ordered`` to the candidates of ``original``, appending any it lost."""
    allowed = set(original)
    result = [s for s in dict.fromkeys(ordered) if s in allowed]
    if len(result) != len(allowed):
        seen = set(result)
        missing = [s for s in original if s not in seen]
        logger.warning("Orderer dropped %d candidates; appending them in cascade order", len(missing))
        result.extend(dict.fromkeys(missing))
    return result
