"""
Convenience entry points for checking plain text.

SpellerRule works on tokenized sentences supplied by an external
tokenizer. For quick use, these helpers tokenize with
AnalyzedSentence.from_text() and run a (cached) default rule.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Iterator

from spellrule.config import RuleConfig
from spellrule.models import AnalyzedSentence, Match
from spellrule.spelling.rule import SpellerRule

logger = logging.getLogger(__name__)

_default_rule: SpellerRule | None = None
_default_rule_lock = threading.Lock()


def default_rule() -> SpellerRule:
    """Return a shared English rule, created on first use."""
    global _default_rule
    if _default_rule is None:
        with _default_rule_lock:
            if _default_rule is None:
                _default_rule = SpellerRule(RuleConfig(language="en"))
    return _default_rule


def check_text(text: str, rule: SpellerRule | None = None) -> list[Match]:
    """
    Check one sentence of plain text.

    Args:
        text: Sentence to check.
        rule: Rule to use (default: shared English rule).

    Returns:
        Matches in text order.

    Example:
        >>> [m.suggestions[0] for m in check_text("I recieve it")]
        ['receive']
    """
    if text is None:
        raise ValueError("Input text cannot be None")
    rule = rule or default_rule()
    return rule.find_errors(AnalyzedSentence.from_text(text))


def check_batch(
    texts: Iterable[str],
    rule: SpellerRule | None = None,
) -> Iterator[tuple[str, list[Match]]]:
    """
    Check several sentences with one rule.

    Yields:
        Tuples of (text, matches).
    """
    rule = rule or default_rule()
    count = 0
    for text in texts:
        count += 1
        yield text, check_text(text, rule)
    logger.debug("Checked %d sentences", count)
