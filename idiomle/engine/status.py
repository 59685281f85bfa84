"""
Match statuses and query slot states.

Conventions (character axis, mirrored by the phonetic axis):
  - EXACT   ('G') : value and position both match
  - PARTIAL ('Y') : value occurs in the target, but not at this position
  - NONE    ('-') : value not present (or present fewer times than guessed)

Patterns are the compact string form of four statuses, e.g. "GY-G".
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional, Union


class MatchStatus(str, Enum):
    EXACT = "exact"
    PARTIAL = "partial"
    NONE = "none"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, ch: str) -> "MatchStatus":
        try:
            return _BY_SYMBOL[ch]
        except KeyError as e:
            raise ValueError(f"Unknown pattern symbol: {ch!r}") from e


_SYMBOLS = {MatchStatus.EXACT: "G", MatchStatus.PARTIAL: "Y", MatchStatus.NONE: "-"}
_BY_SYMBOL = {v: k for k, v in _SYMBOLS.items()}


def pattern_string(statuses: Iterable[MatchStatus]) -> str:
    """[EXACT, PARTIAL, NONE, EXACT] -> "GY-G"."""
    return "".join(s.symbol for s in statuses)


def parse_pattern(pattern: str) -> List[MatchStatus]:
    """"GY-G" -> [EXACT, PARTIAL, NONE, EXACT]."""
    return [MatchStatus.from_symbol(ch) for ch in pattern]


class SlotState(str, Enum):
    """Desired state of one free-form query slot; UNSET means "no constraint"."""

    CORRECT = "correct"
    PARTIAL = "partial"
    ABSENT = "absent"
    UNSET = "unset"

    @classmethod
    def coerce(cls, value: Optional[Union[str, "SlotState"]]) -> "SlotState":
        if value is None:
            return cls.UNSET
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise ValueError(f"Unknown slot state: {value!r}") from e
