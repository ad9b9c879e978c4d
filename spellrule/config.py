"""
Configuration for the spelling rule.

Three layers of configuration feed the rule:

- RuleConfig: how the rule is built (dictionaries, ignore policy, compounds).
- UserConfig: read-only per-request settings supplied by the caller.
- RankingContext: experiment flags and A/B identity, read as one snapshot
  per evaluated word.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from spellrule.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# A/B test names understood by the suggestion ranker
AB_TEST_RANKER = "SuggestionsRanker"
AB_TEST_ORDERER = "SuggestionsOrderer"

# Number of speller tiers built by default (edit distance 1, 2 and 3)
DEFAULT_TIER_COUNT = 3


@dataclass
class RuleConfig:
    """
    Construction-time settings for a SpellerRule.

    Example:
        >>> config = RuleConfig(language="en", check_compound=True)
        >>> rule = SpellerRule(config)
    """

    # Dictionary resources
    language: str | None = "en"  # Bundled pyspellchecker dictionary
    dictionary_path: Path | None = None  # JSON/gz word-frequency dictionary
    spelling_path: Path | None = None  # Plain-text word list
    variant_spelling_path: Path | None = None  # Language-variant word list

    # Ignore policy
    ignore_tagged_words: bool = False
    ignored_words: set[str] = field(default_factory=set)
    prohibited_words: set[str] = field(default_factory=set)

    # Compound handling ("well-known" -> "well" + "known")
    check_compound: bool = False
    compound_pattern: str = "-"

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("dictionary_path", "spelling_path", "variant_spelling_path"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, Path):
                setattr(self, name, Path(value))
        try:
            re.compile(self.compound_pattern)
        except re.error as e:
            raise ConfigurationError(
                f"compound_pattern is not a valid regular expression: {self.compound_pattern!r}"
            ) from e
        self.ignored_words = set(self.ignored_words)
        self.prohibited_words = set(self.prohibited_words)


@dataclass
class UserConfig:
    """
    Per-request user settings.

    Attributes:
        max_spelling_suggestions: Suggestions are computed only while the
            number of matches already found in the sentence does not exceed
            this value (0 = unlimited).
        ab_test: Name of the A/B test the request takes part in, if any.
        text_session_id: Stable session identity used for A/B bucketing.
        user_words: Words from the user's personal dictionary.
        max_edit_distance: Number of speller tiers to build (1..3).
        suggestions_per_tier: Maximum candidates returned by each tier lookup.
    """

    max_spelling_suggestions: int = 0
    ab_test: str | None = None
    text_session_id: int | None = None
    user_words: list[str] = field(default_factory=list)
    max_edit_distance: int = DEFAULT_TIER_COUNT
    suggestions_per_tier: int = 10

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_spelling_suggestions < 0:
            raise ConfigurationError(
                f"max_spelling_suggestions must be >= 0, got {self.max_spelling_suggestions}"
            )
        if not 1 <= self.max_edit_distance <= DEFAULT_TIER_COUNT:
            raise ConfigurationError(
                f"max_edit_distance must be between 1 and {DEFAULT_TIER_COUNT}, "
                f"got {self.max_edit_distance}"
            )
        if self.suggestions_per_tier < 1:
            raise ConfigurationError(
                f"suggestions_per_tier must be >= 1, got {self.suggestions_per_tier}"
            )
        if self.ab_test is not None and not isinstance(self.ab_test, str):
            raise ConfigurationError(f"ab_test must be a string, got {self.ab_test!r}")


@dataclass(frozen=True)
class RankingContext:
    """
    Experiment configuration for suggestion ranking.

    Set once by the enclosing application and treated as immutable; a new
    instance replaces the old one between requests.
    """

    session_id: int | None = None
    ab_test_name: str | None = None
    model_available: bool = False
    full_results_experiment: bool = False  # Query every tier, not only on empty results
    new_suggestions_pipeline: bool = False  # Always use the experimental orderer

    @classmethod
    def from_user_config(
        cls,
        user_config: UserConfig | None,
        *,
        model_available: bool = False,
        full_results_experiment: bool = False,
        new_suggestions_pipeline: bool = False,
    ) -> RankingContext:
        """Build a context from per-request user settings."""
        return cls(
            session_id=user_config.text_session_id if user_config else None,
            ab_test_name=user_config.ab_test if user_config else None,
            model_available=model_available,
            full_results_experiment=full_results_experiment,
            new_suggestions_pipeline=new_suggestions_pipeline,
        )


def _build(cls: type, data: dict[str, Any] | None, section: str) -> Any:
    """Instantiate a config dataclass from a YAML mapping, rejecting unknown keys."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Section '{section}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown keys in section '{section}': {sorted(unknown)}")
    return cls(**data)


def load_config(path: Path | str) -> tuple[RuleConfig, UserConfig, RankingContext]:
    """Load rule, user and ranking configuration from a YAML file.

    The file may contain the sections ``rule``, ``user`` and ``ranking``;
    missing sections use defaults.

    Args:
        path: Path to the YAML file.

    Returns:
        Tuple of (RuleConfig, UserConfig, RankingContext).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ConfigurationError: If the YAML is malformed or holds unknown keys.
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping in {path}")

    rule_data = dict(data.get("rule") or {})
    for key in ("ignored_words", "prohibited_words"):
        if key in rule_data:
            rule_data[key] = set(rule_data[key] or [])

    rule_config = _build(RuleConfig, rule_data, "rule")
    user_config = _build(UserConfig, data.get("user"), "user")
    ranking = _build(RankingContext, data.get("ranking"), "ranking")
    logger.debug("Loaded configuration from %s", path)
    return rule_config, user_config, ranking
