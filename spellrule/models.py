"""
Data models for spellrule.

These models describe the input (tokens of an analyzed sentence) and the
output (matches with ranked suggestions) of the spelling rule.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class MatchType(Enum):
    """Kind of reported match."""

    MISSPELLING = "misspelling"
    HINT = "hint"  # Word is valid in another configured language


@dataclass(frozen=True)
class Token:
    """
    Immutable view of one sentence token.

    ``text`` is the token as it appears in the original text. ``normalized``
    is the speller-visible form with invisible characters (soft hyphens and
    the like) removed; it is None when normalization changed nothing.
    """

    text: str
    start_offset: int
    end_offset: int = -1
    normalized: str | None = None
    is_sentence_start: bool = False
    is_immunized: bool = False
    is_ignored_by_speller: bool = False
    is_tagged: bool = False

    def __post_init__(self) -> None:
        if self.end_offset < 0:
            object.__setattr__(self, "end_offset", self.start_offset + len(self.text))

    @property
    def word(self) -> str:
        """Text handed to the speller."""
        return self.normalized if self.normalized is not None else self.text

    @property
    def hidden_chars(self) -> int:
        """Number of characters removed by normalization."""
        return len(self.text) - len(self.word)


# Stand-in tokenizer: URLs and e-mails, words with inner apostrophes/hyphens,
# then any other single non-space character.
_TOKEN_PATTERN = re.compile(
    r"https?://\S+|[\w.+-]+@[\w-]+\.[\w.-]+|\w+(?:['\u2019\u00ad-]\w+)*|[^\w\s]"
)
SOFT_HYPHEN = "\u00ad"


@dataclass
class AnalyzedSentence:
    """An ordered token sequence with the text it was produced from."""

    tokens: list[Token]
    text: str = ""

    @classmethod
    def from_text(cls, text: str) -> AnalyzedSentence:
        """
        Build a sentence with a simple regex tokenizer.

        The first token is an empty sentence-start marker, as produced by
        full tokenizers. Soft hyphens are removed from the speller-visible
        form of each token.

        Example:
            >>> sentence = AnalyzedSentence.from_text("thanky ou")
            >>> [t.text for t in sentence.tokens]
            ['', 'thanky', 'ou']
        """
        tokens = [Token(text="", start_offset=0, is_sentence_start=True)]
        for m in _TOKEN_PATTERN.finditer(text):
            raw = m.group(0)
            clean = raw.replace(SOFT_HYPHEN, "")
            tokens.append(
                Token(
                    text=raw,
                    start_offset=m.start(),
                    end_offset=m.end(),
                    normalized=clean if clean != raw else None,
                )
            )
        return cls(tokens=tokens, text=text)

    def __len__(self) -> int:
        return len(self.tokens)


@dataclass
class SplitSuggestion:
    """A correction that moves or removes the space between two words."""

    first: str
    second: str = ""

    @property
    def display(self) -> str:
        """Combined string shown to the user."""
        return f"{self.first} {self.second}".strip()


@dataclass
class Match:
    """A reported spelling problem with its ordered suggestions."""

    from_offset: int
    to_offset: int
    message: str
    short_message: str = ""
    suggestions: list[str] = field(default_factory=list)
    kind: MatchType = MatchType.MISSPELLING

    def set_suggestion(self, suggestion: str) -> None:
        """Replace all suggestions with a single one."""
        self.suggestions = [suggestion]

    def add_suggestion(self, suggestion: str) -> None:
        """Append a suggestion unless already present."""
        if suggestion not in self.suggestions:
            self.suggestions.append(suggestion)

    def add_suggestions(self, suggestions: list[str]) -> None:
        for suggestion in suggestions:
            self.add_suggestion(suggestion)

    def overlaps(self, other: Match) -> bool:
        return self.from_offset < other.to_offset and other.from_offset < self.to_offset


DEFAULT_MESSAGES = {
    "spelling": "Possible spelling mistake found.",
    "desc_spelling_short": "Spelling mistake",
    "accepted_in_alt_language": (
        "This word is not valid here, but it is correct in {1}: “{0}”"
    ),
    "too_many_errors": "(too many errors, no suggestions computed)",
}


class Messages:
    """
    Message bundle with English defaults.

    Localized bundles are supplied by the caller; a key missing from every
    bundle resolves to the key itself.
    """

    def __init__(self, overrides: dict[str, str] | None = None, *, defaults: bool = True):
        self._messages = dict(DEFAULT_MESSAGES) if defaults else {}
        if overrides:
            self._messages.update(overrides)

    def get(self, key: str, *args: object) -> str:
        template = self._messages.get(key, key)
        return template.format(*args) if args else template
