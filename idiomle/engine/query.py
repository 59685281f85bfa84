"""
Free-form pinyin query matching.

A query is four slots, one per character. Each slot is either a wildcard
(None / empty value) or a typed syllable such as "zeng1", "lo" or "3" plus
the state the player assigned to it:

  pinyin_state (letters of the syllable)
    CORRECT : bases are equal
    PARTIAL : the target base starts with the query base ("lo" ~ "long")
    ABSENT  : no syllable of the idiom has this base (rejects the idiom)
    UNSET   : no check

  tone_state (only when the value ends with a digit)
    CORRECT / PARTIAL : this slot's tone equals the digit
    ABSENT            : no syllable of the idiom carries this tone
    UNSET             : no check

A digits-only value is a tone suffix: the slot matches when the target
syllable text ends with those digits, whatever the states say. A value of
any other shape never matches; half-typed input is expected and must not
raise.

The dictionary side comes from the syllable table (IdiomEntry), not from the
phonetic provider.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .normalize import Syllable, parse_syllable
from .status import SlotState
from .validation import check_idiom, check_slots


@dataclass(frozen=True)
class IdiomEntry:
    word: str
    syllables: Tuple[Syllable, ...]

    @classmethod
    def from_strings(cls, word: str, pinyin: Union[str, Sequence[str]]) -> "IdiomEntry":
        """
        IdiomEntry.from_strings("爱憎分明", "ai4 zeng1 fen1 ming2")
        IdiomEntry.from_strings("爱憎分明", ["ai4", "zeng1", "fen1", "ming2"])
        """
        w = check_idiom(word)
        parts = pinyin.split() if isinstance(pinyin, str) else list(pinyin)
        check_slots(parts, f"pinyin of {w}")
        syllables = tuple(parse_syllable(p) for p in parts)
        bad = [s.text for s in syllables if not s.valid or s.tone_only]
        if bad:
            raise ValueError(f"Malformed syllables for {w}: {bad}")
        return cls(word=w, syllables=syllables)

    @property
    def pinyin(self) -> List[str]:
        return [s.text for s in self.syllables]


@dataclass(frozen=True)
class QuerySlot:
    value: str
    pinyin_state: SlotState = SlotState.UNSET
    tone_state: SlotState = SlotState.UNSET
    syllable: Syllable = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Validate once here; matching never re-parses.
        object.__setattr__(self, "pinyin_state", SlotState.coerce(self.pinyin_state))
        object.__setattr__(self, "tone_state", SlotState.coerce(self.tone_state))
        object.__setattr__(self, "syllable", parse_syllable(self.value or ""))

    @property
    def is_wildcard(self) -> bool:
        return not (self.value or "").strip()

    @classmethod
    def coerce(cls, slot: Union[None, "QuerySlot", Mapping]) -> Optional["QuerySlot"]:
        """Accept None, a QuerySlot, or a mapping with camelCase or snake_case keys."""
        if slot is None or isinstance(slot, cls):
            return slot
        return cls(
            value=slot.get("value") or "",
            pinyin_state=slot.get("pinyinState", slot.get("pinyin_state")),
            tone_state=slot.get("toneState", slot.get("tone_state")),
        )


def _base_matches(slot: QuerySlot, entry: IdiomEntry, target: Syllable) -> bool:
    q = slot.syllable
    state = slot.pinyin_state
    if state is SlotState.CORRECT:
        return q.base == target.base
    if state is SlotState.PARTIAL:
        return target.base.startswith(q.base)
    if state is SlotState.ABSENT:
        return all(s.base != q.base for s in entry.syllables)
    return True


def _tone_matches(slot: QuerySlot, entry: IdiomEntry, target: Syllable) -> bool:
    q = slot.syllable
    if q.tone is None:
        return True
    state = slot.tone_state
    # PARTIAL is deliberately the same test as CORRECT here.
    if state in (SlotState.CORRECT, SlotState.PARTIAL):
        return q.tone == target.tone
    if state is SlotState.ABSENT:
        return all(s.tone != q.tone for s in entry.syllables)
    return True


def slot_matches(slot: Optional[QuerySlot], entry: IdiomEntry, position: int) -> bool:
    if slot is None or slot.is_wildcard:
        return True
    target = entry.syllables[position]
    q = slot.syllable
    if q.tone_only:
        return target.text.endswith(q.tone)
    if not q.valid:
        return False
    return _base_matches(slot, entry, target) and _tone_matches(slot, entry, target)


def find_by_query(dictionary: Iterable[IdiomEntry], query: Sequence) -> List[str]:
    """
    Return the words of every entry matching all four query slots, in
    dictionary order.

    Raises:
      InvalidLengthError if `query` does not have exactly 4 slots
      ValueError         if a slot carries an unknown state
    """
    slots = [QuerySlot.coerce(s) for s in check_slots(list(query), "query")]
    return [
        entry.word
        for entry in dictionary
        if all(slot_matches(slot, entry, i) for i, slot in enumerate(slots))
    ]
