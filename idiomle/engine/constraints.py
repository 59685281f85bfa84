"""
Candidate filtering given game history.

Given:
  - a dictionary of idioms (ordered)
  - a history of GuessRecords (guess + per-position statuses on both axes)
  - optionally, one PinyinHint per position (initial prefix, pinyin prefix,
    tone) typed by the player; hints are checked before the history

Return:
  - the idioms that could have produced every recorded status, in
    dictionary order, at most `limit` of them.

Unlike plain re-scoring, each recorded status is read as a constraint:

  Character axis
    EXACT   : candidate[i] == guess[i]
    PARTIAL : guess[i] occurs in the candidate, but not at i
    NONE    : guess[i] does not occur in the candidate, unless the same
              character is EXACT/PARTIAL at another position of the same
              guess ("no further copies", not "absent")

  Phonetic axis (initial, final, tone; each on its own)
    EXACT   : candidate value at i equals the guess value at i
    PARTIAL : candidate has the value somewhere, but not at i
    NONE    : candidate has the value nowhere

The result is capped at MAX_CANDIDATES by keeping the first matches in
dictionary order. That is a presentation bound, not a ranking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from .normalize import strip_tone_marks
from .scoring import GuessRecord, resolve_phonetics
from .status import MatchStatus
from .validation import check_idiom, check_slots

# Upper bound on the number of candidates returned to the caller.
MAX_CANDIDATES = 100

_MATCHED = (MatchStatus.EXACT, MatchStatus.PARTIAL)


@dataclass(frozen=True)
class PinyinHint:
    """
    What the player already knows about one position, all parts optional:
      initial : prefix of the initial ("s" also admits "sh")
      pinyin  : prefix of the romanization, tone marks ignored ("xi" ~ "xīn")
      tone    : exact tone number
    """
    pinyin: Optional[str] = None
    tone: Optional[int] = None
    initial: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.pinyin and self.tone is None and not self.initial

    @classmethod
    def coerce(cls, hint: Union[None, "PinyinHint", Mapping]) -> Optional["PinyinHint"]:
        """Accept None, a PinyinHint, or a mapping with pinyin/tone/initial keys."""
        if hint is None or isinstance(hint, cls):
            return hint
        tone = hint.get("tone")
        return cls(
            pinyin=hint.get("pinyin") or None,
            tone=int(tone) if tone not in (None, "") else None,
            initial=hint.get("initial") or None,
        )


def _bare_romanization(text: str) -> str:
    # "lǜ", "lv4" and "lu" all read as "lu..." here, like finals do.
    return strip_tone_marks(text).replace("v", "u")


def hint_matches(form, hint: Optional[PinyinHint]) -> bool:
    """True if one phonetic form satisfies every part of `hint`."""
    if hint is None or hint.is_empty:
        return True
    if hint.initial and not form.initial.lower().startswith(hint.initial.strip().lower()):
        return False
    if hint.pinyin and not _bare_romanization(form.romanization).startswith(
            _bare_romanization(hint.pinyin)):
        return False
    if hint.tone is not None and form.tone != hint.tone:
        return False
    return True


def _chars_consistent(candidate: str, record: GuessRecord) -> bool:
    guess = record.guess
    for i, r in enumerate(record.result):
        g = guess[i]
        if r.status is MatchStatus.EXACT:
            if candidate[i] != g:
                return False
        elif r.status is MatchStatus.PARTIAL:
            if g not in candidate or candidate[i] == g:
                return False
        elif g in candidate:
            accounted = any(
                j != i and other.character == g and other.status in _MATCHED
                for j, other in enumerate(record.result)
            )
            if not accounted:
                return False
    return True


def _attribute_consistent(status: MatchStatus, value, position: int, values: Sequence) -> bool:
    if status is MatchStatus.EXACT:
        return values[position] == value
    if status is MatchStatus.PARTIAL:
        return value in values and values[position] != value
    return value not in values


def _phonetics_consistent(forms: Sequence, record: GuessRecord) -> bool:
    initials = [f.initial for f in forms]
    finals = [f.bare_final for f in forms]
    tones = [f.tone for f in forms]

    for i, p in enumerate(record.pinyin):
        if not _attribute_consistent(p.initial_status, p.initial, i, initials):
            return False
        # Recorded finals are normally bare already; normalize anyway so both
        # sides always go through the same transformation.
        if not _attribute_consistent(p.final_status, strip_tone_marks(p.final), i, finals):
            return False
        if not _attribute_consistent(p.tone_status, p.tone, i, tones):
            return False
    return True


def is_consistent(candidate: str, record: GuessRecord, forms: Sequence) -> bool:
    """True if `candidate` (with phonetic `forms`) could have produced `record`."""
    return _chars_consistent(candidate, record) and _phonetics_consistent(forms, record)


def filter_candidates(
        dictionary: Iterable[str],
        history: Iterable[GuessRecord],
        phonetics=None,
        limit: Optional[int] = MAX_CANDIDATES,
        hints: Optional[Sequence] = None,
) -> List[str]:
    """
    Keep only idioms that satisfy `hints` and are consistent with every
    record in `history`.

    Args:
      dictionary : iterable of 4-character idioms (order is preserved)
      history    : iterable of GuessRecords seen so far
      phonetics  : PhoneticCache to reuse across calls, or any provider
                   (wrapped in a call-local cache); defaults to pypinyin
      limit      : maximum number of results (None = no cap)
      hints      : None, or 4 entries each None / PinyinHint / mapping

    Returns:
      List[str] of consistent candidates, first `limit` in dictionary order.

    Raises:
      InvalidLengthError          for a malformed idiom or a hints list not of 4
      PhoneticDecompositionError  if the provider cannot decompose a candidate
    """
    from idiomle.phonetics.cache import PhoneticCache  # deferred, see resolve_phonetics

    phonetics = resolve_phonetics(phonetics)
    cache = phonetics if isinstance(phonetics, PhoneticCache) else PhoneticCache(phonetics)
    records = list(history)
    slots: List[Optional[PinyinHint]] = []
    if hints is not None:
        slots = [PinyinHint.coerce(h) for h in check_slots(list(hints), "hints")]
    if all(h is None or h.is_empty for h in slots):
        slots = []

    out: List[str] = []
    if limit is not None and limit <= 0:
        return out

    for word in dictionary:
        c = check_idiom(word)

        if slots and not all(hint_matches(f, h) for f, h in zip(cache.forms(c), slots)):
            continue

        consistent = True
        for record in records:
            # Character axis first: forms are only derived for survivors.
            if not _chars_consistent(c, record):
                consistent = False
                break
            if not _phonetics_consistent(cache.forms(c), record):
                consistent = False
                break

        if consistent:
            out.append(c)
            if limit is not None and len(out) >= limit:
                break

    return out
