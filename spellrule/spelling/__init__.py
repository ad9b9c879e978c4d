"""
Spelling suggestion pipeline.

This package detects misspelled words in tokenized sentences and ranks
correction candidates using:
- A cascade of speller tiers with growing edit distance
- Split/merge recovery for misplaced spaces between words
- Pluggable suggestion ordering with A/B bucketing

Example:
    >>> from spellrule.models import AnalyzedSentence
    >>> from spellrule.spelling import SpellerRule
    >>> rule = SpellerRule()
    >>> matches = rule.find_errors(AnalyzedSentence.from_text("I recieve it"))
    >>> matches[0].suggestions[0]
    'receive'
"""

from spellrule.spelling.candidates import (
    CandidateAssembler,
    CandidateLists,
    filter_dupes,
)
from spellrule.spelling.dictionary import (
    MAX_FREQUENCY,
    DictionarySpeller,
    SpellerTier,
    create_tiers,
    dictionary_exists,
)
from spellrule.spelling.hooks import LanguageHooks
from spellrule.spelling.matches import MatchBuilder
from spellrule.spelling.ranking import (
    RankingStrategy,
    SimilarityOrderer,
    SuggestionOrderer,
    SuggestionRanker,
)
from spellrule.spelling.rule import SpellerRule
from spellrule.spelling.split import (
    MAX_FREQUENCY_FOR_SPLITTING,
    SplitResult,
    SplitWordDetector,
)

__all__ = [
    # Rule
    "SpellerRule",
    "LanguageHooks",
    # Tiers
    "SpellerTier",
    "DictionarySpeller",
    "create_tiers",
    "dictionary_exists",
    "MAX_FREQUENCY",
    # Split detection
    "SplitWordDetector",
    "SplitResult",
    "MAX_FREQUENCY_FOR_SPLITTING",
    # Candidates
    "CandidateAssembler",
    "CandidateLists",
    "filter_dupes",
    # Ranking
    "SuggestionRanker",
    "SuggestionOrderer",
    "SimilarityOrderer",
    "RankingStrategy",
    "MatchBuilder",
]
