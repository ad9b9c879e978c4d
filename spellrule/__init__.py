"""
spellrule: Spelling error detection with ranked suggestions.

This library finds misspelled words in tokenized sentences and proposes
corrections, recovering from misplaced spaces ("thanky ou" -> "thank you")
and ordering candidates with optional model-based reranking.

Example:
    >>> import spellrule
    >>> rule = spellrule.SpellerRule()
    >>> sentence = spellrule.AnalyzedSentence.from_text("I recieve it")
    >>> for match in rule.find_errors(sentence):
    ...     print(match.from_offset, match.to_offset, match.suggestions[:3])
"""

from spellrule.check import check_batch, check_text
from spellrule.config import (
    RankingContext,
    RuleConfig,
    UserConfig,
    load_config,
)
from spellrule.exceptions import (
    ConfigurationError,
    DictionaryLoadError,
    SpellRuleError,
)
from spellrule.models import (
    AnalyzedSentence,
    Match,
    MatchType,
    Messages,
    SplitSuggestion,
    Token,
)
from spellrule.spelling import (
    LanguageHooks,
    SimilarityOrderer,
    SpellerRule,
    SpellerTier,
    SuggestionOrderer,
)

__version__ = "0.1.0"
__all__ = [
    # Main API
    "SpellerRule",
    "check_text",
    "check_batch",
    # Configuration
    "RuleConfig",
    "UserConfig",
    "RankingContext",
    "load_config",
    # Models
    "Token",
    "AnalyzedSentence",
    "Match",
    "MatchType",
    "Messages",
    "SplitSuggestion",
    # Extension points
    "LanguageHooks",
    "SpellerTier",
    "SuggestionOrderer",
    "SimilarityOrderer",
    # Exceptions
    "SpellRuleError",
    "DictionaryLoadError",
    "ConfigurationError",
]
