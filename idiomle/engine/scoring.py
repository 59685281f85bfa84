"""
Guess-vs-secret comparison for one (guess, target) idiom pair.

Two independent axes are judged per position:

  Character axis (duplicate-safe, canonical two-pass Wordle rule):
    1) First pass marks EXACT positions and counts the remaining (unmatched)
       characters of the target.
    2) Second pass marks PARTIAL only while the character still has a
       remaining count, consuming one occurrence each time; otherwise NONE.

  Phonetic axis (initial, final and tone judged separately, no shared pool):
    EXACT   if the value equals the target's value at the same position
    PARTIAL if the value equals the target's value at any position
    NONE    otherwise
  Finals are compared with tone marks stripped on both sides; the tone is
  only ever taken from the numeric tone field.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .status import MatchStatus, parse_pattern, pattern_string
from .validation import check_idiom, check_slots


@dataclass(frozen=True)
class CharResult:
    character: str
    status: MatchStatus


@dataclass(frozen=True)
class PinyinMatch:
    initial: str
    final: str          # tone marks already stripped
    tone: int
    initial_status: MatchStatus
    final_status: MatchStatus
    tone_status: MatchStatus


@dataclass(frozen=True)
class GuessRecord:
    """One history entry: the guess plus its statuses on both axes."""
    guess: str
    result: Tuple[CharResult, ...]
    pinyin: Tuple[PinyinMatch, ...]

    def __post_init__(self):
        object.__setattr__(self, "guess", check_idiom(self.guess))
        check_slots(self.result, "result")
        check_slots(self.pinyin, "pinyin")

    @property
    def pattern(self) -> str:
        """Character axis as "GY-G"."""
        return pattern_string(r.status for r in self.result)


def resolve_phonetics(phonetics):
    """Default to a fresh pypinyin provider when no phonetics source is given."""
    if phonetics is None:
        # Deferred: the phonetics package itself imports from idiomle.engine.
        from idiomle.phonetics.provider import PypinyinProvider
        return PypinyinProvider()
    return phonetics


def score_characters(guess: str, target: str) -> List[MatchStatus]:
    """
    Character-axis statuses for `guess` against `target`.

    Examples:
      score_characters("abab", "aabb") -> [EXACT, PARTIAL, PARTIAL, EXACT]
      score_characters("一心一意", "一马当先") -> [EXACT, NONE, NONE, NONE]
    """
    guess = check_idiom(guess)
    target = check_idiom(target)

    statuses = [MatchStatus.NONE] * len(guess)

    # Pass 1: EXACT, and count what is left of the target.
    remaining: Counter = Counter()
    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            statuses[i] = MatchStatus.EXACT
        else:
            remaining[t] += 1

    # Pass 2: PARTIAL capped by true multiplicity.
    for i, g in enumerate(guess):
        if statuses[i] is MatchStatus.EXACT:
            continue
        if remaining[g] > 0:
            statuses[i] = MatchStatus.PARTIAL
            remaining[g] -= 1

    return statuses


def _attribute_status(value, position: int, target_values: Sequence) -> MatchStatus:
    if target_values[position] == value:
        return MatchStatus.EXACT
    if value in target_values:
        return MatchStatus.PARTIAL
    return MatchStatus.NONE


def compare(guess: str, target: str, phonetics=None) -> GuessRecord:
    """
    Compare one guess idiom against the secret idiom.

    Args:
      guess     : 4-character idiom guessed by the player
      target    : 4-character secret idiom
      phonetics : anything with `forms(idiom)` (provider or PhoneticCache);
                  defaults to a PypinyinProvider

    Returns:
      GuessRecord with per-position character and pinyin statuses.

    Raises:
      InvalidLengthError, PhoneticDecompositionError
    """
    guess = check_idiom(guess)
    target = check_idiom(target)
    phonetics = resolve_phonetics(phonetics)

    char_statuses = score_characters(guess, target)
    guess_forms = phonetics.forms(guess)
    target_forms = phonetics.forms(target)

    t_initials = [f.initial for f in target_forms]
    t_finals = [f.bare_final for f in target_forms]
    t_tones = [f.tone for f in target_forms]

    pinyin = []
    for i, g in enumerate(guess_forms):
        final = g.bare_final
        pinyin.append(PinyinMatch(
            initial=g.initial,
            final=final,
            tone=g.tone,
            initial_status=_attribute_status(g.initial, i, t_initials),
            final_status=_attribute_status(final, i, t_finals),
            tone_status=_attribute_status(g.tone, i, t_tones),
        ))

    return GuessRecord(
        guess=guess,
        result=tuple(CharResult(ch, st) for ch, st in zip(guess, char_statuses)),
        pinyin=tuple(pinyin),
    )


def make_record(guess: str, pattern: str, pinyin: Sequence[PinyinMatch]) -> GuessRecord:
    """
    Build a GuessRecord from a character pattern ("GY-G") and ready-made
    pinyin matches, e.g. when replaying feedback recorded elsewhere.
    """
    guess = check_idiom(guess)
    statuses = check_slots(parse_pattern(pattern), "pattern")
    return GuessRecord(
        guess=guess,
        result=tuple(CharResult(ch, st) for ch, st in zip(guess, statuses)),
        pinyin=tuple(pinyin),
    )
