"""
Unit tests for spellrule configuration.
"""

import dataclasses
from pathlib import Path

import pytest

from spellrule.config import RankingContext, RuleConfig, UserConfig, load_config
from spellrule.exceptions import ConfigurationError


class TestRuleConfig:
    """Test RuleConfig validation."""

    def test_defaults(self):
        """Default config uses the bundled English dictionary."""
        config = RuleConfig()

        assert config.language == "en"
        assert config.dictionary_path is None
        assert config.check_compound is False
        assert config.compound_pattern == "-"

    def test_paths_converted(self):
        """String paths become Path objects."""
        config = RuleConfig(dictionary_path="dicts/en.json", spelling_path="spelling.txt")

        assert config.dictionary_path == Path("dicts/en.json")
        assert isinstance(config.spelling_path, Path)

    def test_word_lists_become_sets(self):
        """Ignored and prohibited words are stored as sets."""
        config = RuleConfig(ignored_words=["foo", "foo"], prohibited_words=("bar",))

        assert config.ignored_words == {"foo"}
        assert config.prohibited_words == {"bar"}

    def test_invalid_compound_pattern(self):
        """A broken compound regex is rejected."""
        with pytest.raises(ConfigurationError, match="compound_pattern"):
            RuleConfig(compound_pattern="[")


class TestUserConfig:
    """Test UserConfig validation."""

    def test_defaults(self):
        """Defaults mean unlimited suggestions and three tiers."""
        config = UserConfig()

        assert config.max_spelling_suggestions == 0
        assert config.max_edit_distance == 3
        assert config.user_words == []

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_spelling_suggestions": -1},
            {"max_edit_distance": 0},
            {"max_edit_distance": 4},
            {"suggestions_per_tier": 0},
            {"ab_test": 5},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Out-of-range values raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            UserConfig(**kwargs)


class TestRankingContext:
    """Test RankingContext construction."""

    def test_from_user_config(self):
        """Session and A/B name come from the user config."""
        user = UserConfig(ab_test="SuggestionsRanker", text_session_id=42)
        context = RankingContext.from_user_config(user, model_available=True)

        assert context.session_id == 42
        assert context.ab_test_name == "SuggestionsRanker"
        assert context.model_available is True
        assert context.full_results_experiment is False

    def test_from_missing_user_config(self):
        """Without user config there is no A/B identity."""
        context = RankingContext.from_user_config(None)
        assert context.session_id is None
        assert context.ab_test_name is None

    def test_is_frozen(self):
        """Contexts are immutable snapshots."""
        context = RankingContext()
        with pytest.raises(dataclasses.FrozenInstanceError):
            context.model_available = True


class TestLoadConfig:
    """Test YAML configuration loading."""

    def test_full_file(self, tmp_path):
        """All three sections are parsed."""
        path = tmp_path / "spellrule.yaml"
        path.write_text(
            """
rule:
  language: en
  check_compound: true
  ignored_words: [LanguageTool, spellrule]
  prohibited_words: [damn]
user:
  max_spelling_suggestions: 5
  user_words: [grounding]
ranking:
  full_results_experiment: true
"""
        )

        rule, user, ranking = load_config(path)

        assert rule.check_compound is True
        assert rule.ignored_words == {"LanguageTool", "spellrule"}
        assert rule.prohibited_words == {"damn"}
        assert user.max_spelling_suggestions == 5
        assert user.user_words == ["grounding"]
        assert ranking.full_results_experiment is True

    def test_empty_file_gives_defaults(self, tmp_path):
        """An empty file yields default configuration."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        rule, user, ranking = load_config(path)

        assert rule == RuleConfig()
        assert user == UserConfig()
        assert ranking == RankingContext()

    def test_unknown_key(self, tmp_path):
        """Unknown keys are reported with their section."""
        path = tmp_path / "bad.yaml"
        path.write_text("user:\n  max_suggestions: 3\n")

        with pytest.raises(ConfigurationError, match="user"):
            load_config(path)

    def test_malformed_yaml(self, tmp_path):
        """Invalid YAML raises ConfigurationError."""
        path = tmp_path / "broken.yaml"
        path.write_text("rule: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Malformed"):
            load_config(path)

    def test_root_must_be_mapping(self, tmp_path):
        """A top-level list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- rule\n- user\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")
