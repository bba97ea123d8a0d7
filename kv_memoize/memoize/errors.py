"""
Memoizer exceptions.

Every error derives from both MemoizeError and TypeError, so code that
expects misuse to surface as a TypeError keeps working.
"""


class MemoizeError(Exception):
    """Base class for all memoizer errors."""


class ConfigurationError(MemoizeError, TypeError):
    """Raised at wrap time when options are malformed or incomplete."""


class MissingClientError(ConfigurationError):
    """Raised when no usable store client was configured."""


class KeyContractError(MemoizeError, TypeError):
    """Raised when a key function returns neither a string nor SKIP."""


class ArgumentCountError(MemoizeError, TypeError):
    """Raised when set() is called without the value to store."""
