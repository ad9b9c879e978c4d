"""
Final assembly of matches: suggestion lists and offsets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from spellrule.models import Match, Messages, Token
from spellrule.spelling.ranking import RankingStrategy, SuggestionRanker

if TYPE_CHECKING:
    from spellrule.models import AnalyzedSentence
    from spellrule.spelling.candidates import CandidateLists


def join_context(suggestions: list[str], before: str, after: str) -> list[str]:
    """
    Reattach the uninvolved neighbor word to each suggestion.

    Used when a split match covers two tokens but the suggestions only
    correct one of them ("to thow" -> "to throw").
    """
    if not before and not after:
        return list(suggestions)
    return [" ".join(f"{before}{s}{after}".split()) for s in suggestions]


def adjust_for_hidden_chars(matches: list[Match], token: Token) -> None:
    """
    Extend matches created for ``token`` over characters the speller never saw.

    Matches already reaching past the token (two-token split matches) are
    left alone.
    """
    hidden = token.hidden_chars
    if hidden <= 0:
        return
    for match in matches:
        if token.end_offset < match.to_offset:
            continue
        match.to_offset += hidden


class MatchBuilder:
    """Fills a match with ranked suggestions."""

    def __init__(self, ranker: SuggestionRanker, messages: Messages | None = None):
        self.ranker = ranker
        self.messages = messages or Messages()

    def too_many_errors(self, match: Match) -> Match:
        """Replace suggestions with the cost-control placeholder."""
        match.set_suggestion(self.messages.get("too_many_errors"))
        return match

    def build(
        self,
        match: Match,
        word: str,
        candidates: CandidateLists,
        strategy: RankingStrategy,
        *,
        before: str = "",
        after: str = "",
        sentence: AnalyzedSentence | None = None,
    ) -> Match:
        """
        Append ranked default suggestions, then ranked user suggestions.

        Suggestions already on the match (from split detection) stay first.
        """
        if candidates.is_empty():
            return match

        default = self.ranker.baseline(candidates.default, word)
        default = join_context(default, before, after)
        user = join_context(candidates.user, before, after)

        ranked = self.ranker.rank(default, word, strategy, sentence, match.from_offset)
        ranked += self.ranker.rank(user, word, strategy, sentence, match.from_offset)
        match.add_suggestions([s for s in ranked if s != word])
        return match
