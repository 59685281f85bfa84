"""
Exceptions raised by the rule engine.

Both concrete errors also derive from a builtin so callers that only know
about ValueError / RuntimeError keep working.
"""


class IdiomleError(Exception):
    """Base class for every error raised by idiomle."""


class InvalidLengthError(IdiomleError, ValueError):
    """An idiom, guess, syllable list or query does not have exactly 4 slots."""


class PhoneticDecompositionError(IdiomleError, RuntimeError):
    """The phonetic provider broke its contract (wrong count, unknown character)."""
