"""
Phonetic decomposition providers.

A provider turns text into one PhoneticForm per character:
  (initial, final, tone, romanization)

  - PypinyinProvider: the real service, backed by pypinyin. Phrase-level
    lookup is used so heteronyms inside idioms resolve the way the phrase
    dictionary says, tone sandhi included (e.g. 一心一意 -> yì xīn yí yì,
    while the bundled table keeps citation tones: yi1 xin1 yi1 yi4).
  - TableProvider:    a fixed {character: PhoneticForm} table, e.g. derived
    from the bundled syllable table. Deterministic and offline.

Every provider exposes `forms(idiom)`, which enforces the 4-forms contract.
The matchers only ever call `forms`, so a PhoneticCache can stand in for a
provider anywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Tuple, Union

from pypinyin import Style, lazy_pinyin

from idiomle.engine.errors import PhoneticDecompositionError
from idiomle.engine.normalize import Syllable, parse_syllable, split_initial, strip_tone_marks
from idiomle.engine.validation import IDIOM_LENGTH, check_idiom

NEUTRAL_TONE = 5


@dataclass(frozen=True)
class PhoneticForm:
    initial: str        # "" for zero-initial syllables
    final: str          # may carry a tone mark ("īng")
    tone: int           # 1..5, 5 = neutral
    romanization: str = ""

    @property
    def bare_final(self) -> str:
        return strip_tone_marks(self.final)


class PhoneticProvider:
    """Base class; subclasses implement decompose()."""

    def decompose(self, text: str) -> List[PhoneticForm]:
        raise NotImplementedError("Override in subclass")

    def forms(self, idiom: str) -> Tuple[PhoneticForm, ...]:
        """
        Phonetic forms of a 4-character idiom.

        Raises:
          InvalidLengthError          if `idiom` is not 4 characters
          PhoneticDecompositionError  if the provider does not return 4 forms
        """
        word = check_idiom(idiom)
        out = tuple(self.decompose(word))
        if len(out) != IDIOM_LENGTH:
            raise PhoneticDecompositionError(
                f"Expected {IDIOM_LENGTH} phonetic forms for {word!r}; got {len(out)}")
        return out


def _no_pinyin(chars: str):
    raise PhoneticDecompositionError(f"No pinyin for {chars!r}")


def _tone_of(numbered: str) -> int:
    return int(numbered[-1]) if numbered and numbered[-1].isdigit() else NEUTRAL_TONE


class PypinyinProvider(PhoneticProvider):
    """pypinyin-backed provider. Initials/finals use the non-strict convention (y/w are initials)."""

    def syllables(self, text: str) -> List[str]:
        """Table-format syllables: ["ai4", "zeng1", "fen1", "ming2"]; ü is written "v"."""
        return lazy_pinyin(text, style=Style.TONE3, errors=_no_pinyin,
                           neutral_tone_with_five=True)

    def decompose(self, text: str) -> List[PhoneticForm]:
        numbered = self.syllables(text)
        initials = lazy_pinyin(text, style=Style.INITIALS, strict=False, errors=_no_pinyin)
        finals = lazy_pinyin(text, style=Style.FINALS_TONE, strict=False, errors=_no_pinyin)
        marked = lazy_pinyin(text, style=Style.TONE, errors=_no_pinyin)
        if not (len(numbered) == len(initials) == len(finals) == len(marked)):
            raise PhoneticDecompositionError(f"Inconsistent pinyin segmentation for {text!r}")
        return [
            PhoneticForm(initial=ini, final=fin, tone=_tone_of(num), romanization=mark)
            for ini, fin, num, mark in zip(initials, finals, numbered, marked)
        ]


class TableProvider(PhoneticProvider):
    """Per-character lookup table. Unknown characters are a contract violation."""

    def __init__(self, table: Mapping[str, PhoneticForm]):
        self.table: Dict[str, PhoneticForm] = dict(table)

    def decompose(self, text: str) -> List[PhoneticForm]:
        try:
            return [self.table[ch] for ch in text]
        except KeyError as e:
            raise PhoneticDecompositionError(f"No phonetic form for {e.args[0]!r}") from e

    @staticmethod
    def form_from_syllable(syllable: Union[str, Syllable]) -> PhoneticForm:
        """
        "zhong1" -> PhoneticForm("zh", "ong", 1, "zhong1"), "lv4" -> final "ü".
        A syllable without a digit is neutral (tone 5).
        """
        syl = parse_syllable(syllable) if isinstance(syllable, str) else syllable
        if not syl.valid or syl.tone_only:
            raise ValueError(f"Not a romanized syllable: {syl.text!r}")
        initial, final = split_initial(syl.base)
        # Table syllables write ü as "v"; pypinyin finals use "ü".
        final = final.replace("v", "ü")
        tone = int(syl.tone) if syl.tone else NEUTRAL_TONE
        return PhoneticForm(initial=initial, final=final, tone=tone, romanization=syl.text)

    @classmethod
    def from_entries(cls, entries: Iterable) -> "TableProvider":
        """
        Build a table from syllable-table entries (anything with `.word` and
        `.syllables`). The first reading seen for a character wins.
        """
        table: Dict[str, PhoneticForm] = {}
        for entry in entries:
            for ch, syl in zip(entry.word, entry.syllables):
                if ch not in table:
                    table[ch] = cls.form_from_syllable(syl)
        return cls(table)
