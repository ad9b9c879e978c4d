"""
Recovery of errors caused by a misplaced space between two words.

Three shapes are recognized, each judged by dictionary membership and by
word frequency:

- "thanky ou" -> "thank you"  (last letter of the left word moves right)
- "than kyou" -> "thank you"  (first letter of the right word moves left)
- "g oing"    -> "going"      (the space is removed)

A candidate is only plausible when the corrected words are, together,
more frequent than the neighbor they replace. Very frequent neighbors are
never split ("to thow" is not "tot how").
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from spellrule.models import Match, Messages, SplitSuggestion, Token
from spellrule.spelling.dictionary import MAX_FREQUENCY

logger = logging.getLogger(__name__)

# Neighbors at or above this frequency are not considered for splitting
MAX_FREQUENCY_FOR_SPLITTING = MAX_FREQUENCY

DIGIT_PATTERN = re.compile(r"\d")


@dataclass
class SplitResult:
    """Outcome of one split/merge pass."""

    match: Match | None = None
    before: str = ""  # Prefixed to every later suggestion
    after: str = ""  # Suffixed to every later suggestion
    confirmed: bool = False  # Neighbor is misspelled too; no further search needed


class SplitWordDetector:
    """
    Searches for a single split or merge point between two adjacent tokens.

    Args:
        is_misspelled: Misspelling test of the first speller tier.
        frequency: Frequency lookup of the first speller tier.
        messages: Message bundle for the created matches.

    Example:
        >>> detector = SplitWordDetector(tier1.is_misspelled, tier1.frequency)
        >>> result = detector.check_next("thanky", 0, Token("ou", 7), [])
        >>> result.match.suggestions
        ['thank you']
    """

    def __init__(
        self,
        is_misspelled: Callable[[str], bool],
        frequency: Callable[[str], int],
        messages: Messages | None = None,
    ):
        self.is_misspelled = is_misspelled
        self.frequency = frequency
        self.messages = messages or Messages()

    def _can_split_with(self, neighbor: str) -> bool:
        if not neighbor or DIGIT_PATTERN.search(neighbor):
            return False
        return self.frequency(neighbor) < MAX_FREQUENCY_FOR_SPLITTING

    def _is_plausible(self, split: SplitSuggestion) -> bool:
        return (
            len(split.first) > 1
            and len(split.second) > 2
            and not self.is_misspelled(split.first)
            and not self.is_misspelled(split.second)
        )

    def _more_frequent(self, split: SplitSuggestion, neighbor: str) -> bool:
        return self.frequency(split.first) + self.frequency(split.second) > self.frequency(neighbor)

    def _new_match(
        self,
        matches_so_far: list[Match],
        left_start: int,
        right_end: int,
    ) -> Match:
        # The previous match on the left word is replaced by the combined one
        if matches_so_far and matches_so_far[-1].from_offset == left_start:
            removed = matches_so_far.pop()
            logger.debug(
                "Replacing match at %d-%d with split match", removed.from_offset, removed.to_offset
            )
        return Match(
            from_offset=left_start,
            to_offset=right_end,
            message=self.messages.get("spelling"),
            short_message=self.messages.get("desc_spelling_short"),
        )

    def _search(
        self,
        left: str,
        right: str,
        left_start: int,
        right_end: int,
        neighbor: str,
        matches_so_far: list[Match],
    ) -> Match | None:
        """
        Try all three split shapes for the pair (left, right).

        ``right_end`` is the end of the right word in the original text, so a
        match spanning two tokens covers characters hidden from the speller.
        """
        match = None

        if left and right:
            # "thanky ou" -> "thank you"
            moved_right = SplitSuggestion(left[:-1], left[-1:] + right)
            if self._is_plausible(moved_right) and self._more_frequent(moved_right, neighbor):
                match = self._new_match(matches_so_far, left_start, right_end)
                match.set_suggestion(moved_right.display)

            # "than kyou" -> "thank you", but not "She awaked" -> "Shea waked"
            moved_left = SplitSuggestion(left + right[0], right[1:])
            if self._is_plausible(moved_left):
                if match is None:
                    if self._more_frequent(moved_left, neighbor):
                        match = self._new_match(matches_so_far, left_start, right_end)
                        match.set_suggestion(moved_left.display)
                else:
                    match.add_suggestion(moved_left.display)

        # "g oing" -> "going"; the right word must be lower-case in both directions
        merged = left + right
        if merged and right == right.lower() and not self.is_misspelled(merged):
            if match is None:
                if self.frequency(merged) >= self.frequency(neighbor):
                    match = self._new_match(matches_so_far, left_start, right_end)
                    match.set_suggestion(merged)
            else:
                match.add_suggestion(merged)

        return match

    def check_previous(
        self,
        word: str,
        start: int,
        previous: Token,
        matches_so_far: list[Match],
    ) -> SplitResult:
        """Look for a split between the previous token and ``word``."""
        prev_word = previous.word
        if not self._can_split_with(prev_word):
            return SplitResult()

        match = self._search(
            prev_word, word, previous.start_offset, start + len(word), prev_word, matches_so_far
        )
        if match is None:
            return SplitResult()

        logger.debug("Split with previous word: '%s %s' -> %s", prev_word, word, match.suggestions)
        return SplitResult(
            match=match,
            before=prev_word + " ",
            confirmed=self.is_misspelled(prev_word),
        )

    def check_next(
        self,
        word: str,
        start: int,
        following: Token,
        matches_so_far: list[Match],
    ) -> SplitResult:
        """Look for a split between ``word`` and the next token."""
        next_word = following.word
        if not self._can_split_with(next_word):
            return SplitResult()

        match = self._search(
            word, next_word, start, following.end_offset, next_word, matches_so_far
        )
        if match is None:
            return SplitResult()

        logger.debug("Split with next word: '%s %s' -> %s", word, next_word, match.suggestions)
        return SplitResult(
            match=match,
            after=" " + next_word,
            confirmed=self.is_misspelled(next_word),
        )
