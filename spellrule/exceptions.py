"""
Exception classes for spellrule.

All spellrule exceptions inherit from SpellRuleError,
making it easy to catch all library errors.

Example:
    >>> try:
    ...     matches = rule.find_errors(sentence)
    ... except spellrule.DictionaryLoadError as e:
    ...     print(f"Dictionary could not be loaded: {e}")
    ... except spellrule.SpellRuleError as e:
    ...     print(f"spellrule error: {e}")
"""


class SpellRuleError(Exception):
    """
    Base exception for all spellrule errors.

    Catch this to handle any spellrule-specific error.
    """

    pass


class DictionaryLoadError(SpellRuleError):
    """
    Raised when a dictionary resource exists but cannot be read or parsed.

    A *missing* dictionary is not an error: the rule simply reports no
    matches. This is raised for I/O failures during tier construction and
    aborts evaluation of the current sentence.
    """

    pass


class ConfigurationError(SpellRuleError):
    """
    Raised for invalid configuration.

    Example:
        >>> UserConfig(max_spelling_suggestions=-1)
        ConfigurationError: max_spelling_suggestions must be >= 0, got -1
    """

    pass
