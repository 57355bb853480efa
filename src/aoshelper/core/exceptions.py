"""Custom exceptions for AOS CLI Helper."""


class AosHelperError(Exception):
    """Base exception for all AOS CLI Helper errors."""


class NormalizationError(AosHelperError):
    """The raw command dictionary cannot be turned into a command tree."""


class DictionaryLoadError(AosHelperError):
    """The command dictionary file is missing or unreadable."""


class ConfigError(AosHelperError):
    """Configuration error."""


class NotFoundError(AosHelperError):
    """Command not found in the dictionary."""


class TreeFrozenError(AosHelperError):
    """Attempt to modify a command tree after construction."""
