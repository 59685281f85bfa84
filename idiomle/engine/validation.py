"""
Shape checks for idioms and per-position sequences.

The engine does not decide whether a string is a *real* idiom (that is the
dictionary's job). It only enforces the structural contract: exactly
IDIOM_LENGTH characters, never truncated or padded.
"""

from typing import Sequence

from .errors import InvalidLengthError

# Every idiom, result row and query has this many slots.
IDIOM_LENGTH = 4


def check_idiom(word: str) -> str:
    """
    Return `word` stripped of surrounding whitespace, or raise
    InvalidLengthError if it is not a string of exactly IDIOM_LENGTH characters.
    """
    if not isinstance(word, str):
        raise InvalidLengthError(f"Idiom must be a string; got {type(word).__name__}")
    w = word.strip()
    if len(w) != IDIOM_LENGTH:
        raise InvalidLengthError(f"Idiom must have {IDIOM_LENGTH} characters; got {w!r} ({len(w)})")
    return w


def check_slots(items: Sequence, what: str) -> Sequence:
    """Guardrail for per-position sequences (results, syllables, query slots)."""
    if len(items) != IDIOM_LENGTH:
        raise InvalidLengthError(f"{what} must have {IDIOM_LENGTH} entries; got {len(items)}")
    return items
