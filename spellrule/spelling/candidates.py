"""
Assembly of correction candidates across the speller tiers.

Tiers are consulted in order and only while the previous tier found no
default-dictionary suggestion:

- tier 2 needs a word of at least 3 characters
- tier 3 needs a word of at least 5 characters

The "full results" experiment lifts the empty-result condition but not the
length conditions. Default and user candidates are kept apart throughout.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from spellrule.spelling.dictionary import SpellerTier
from spellrule.spelling.hooks import LanguageHooks

logger = logging.getLogger(__name__)

# Minimum word length required to consult each tier (index = tier - 1)
MIN_LENGTH_FOR_TIER = (0, 3, 5)


def filter_dupes(suggestions: list[str]) -> list[str]:
    """Remove exact duplicates, keeping the first occurrence."""
    return list(dict.fromkeys(suggestions))


@dataclass
class CandidateLists:
    """Default and user candidates for one word."""

    default: list[str] = field(default_factory=list)
    user: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.default and not self.user


class CandidateAssembler:
    """
    Gathers candidates from the speller tiers and the language hooks.

    Attributes:
        tiers: Speller tiers ordered by tolerated edit distance.
        hooks: Language hooks contributing extra candidates.
        is_prohibited: Predicate removing forbidden words from the results.

    Example:
        >>> assembler = CandidateAssembler(tiers)
        >>> assembler.assemble("recieve").default
        ['receive']
    """

    def __init__(
        self,
        tiers: Sequence[SpellerTier],
        hooks: LanguageHooks | None = None,
        is_prohibited: Callable[[str], bool] | None = None,
    ):
        if not tiers:
            raise ValueError("At least one speller tier is required")
        self.tiers = list(tiers)
        self.hooks = hooks or LanguageHooks()
        self.is_prohibited = is_prohibited or (lambda word: False)

    def gather(self, word: str, full_results: bool = False) -> CandidateLists:
        """
        Collect tier suggestions, escalating per the length/empty-result rule.

        Args:
            word: The misspelled word.
            full_results: Query every eligible tier even if earlier ones
                already produced suggestions.
        """
        candidates = CandidateLists()
        for index, tier in enumerate(self.tiers):
            if index > 0:
                min_length = MIN_LENGTH_FOR_TIER[min(index, len(MIN_LENGTH_FOR_TIER) - 1)]
                if len(word) < min_length:
                    break
                if candidates.default and not full_results:
                    break
            default = tier.suggestions_default(word)
            user = tier.suggestions_user(word)
            logger.debug(
                "Tier %d for '%s': %d default, %d user", index + 1, word, len(default), len(user)
            )
            candidates.default.extend(default)
            candidates.user.extend(user)
        return candidates

    def assemble(self, word: str, full_results: bool = False) -> CandidateLists:
        """
        Gather, extend with hook candidates and deduplicate.

        The original word and prohibited words never appear in the result.
        """
        candidates = self.gather(word, full_results)

        top = self.hooks.additional_top_suggestions(candidates.default, word)
        candidates.default[:0] = top
        candidates.default.extend(self.hooks.additional_suggestions(candidates.default, word))

        candidates.default = filter_dupes(
            [s for s in candidates.default if s != word and not self.is_prohibited(s)]
        )
        candidates.user = filter_dupes([s for s in candidates.user if s != word])
        return candidates
