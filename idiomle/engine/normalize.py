"""
Normalization helpers shared by all three matchers.

- strip_tone_marks: remove tone diacritics from a final (or any pinyin text)
  so that "āng" and "ang" compare equal. The whole combining-diacritics
  block goes, the diaeresis of "ü" included, so "lǜ" and "lù" share "u".
- parse_syllable:   split "zeng1" into base "zeng" + tone "1", once, at the
  boundary. Query values and table syllables go through the same parser.
- split_initial:    "zhong" -> ("zh", "ong").
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Optional, Tuple

# Letters, then an optional single tone digit.
_SYLLABLE_RE = re.compile(r"^([a-z]+)([0-9])?$")
_DIGITS_RE = re.compile(r"^[0-9]+$")

# Longest first so "zh" wins over "z". y/w are treated as initials
# (non-strict convention), matching what the pinyin provider returns.
INITIALS = (
    "zh", "ch", "sh",
    "b", "p", "m", "f", "d", "t", "n", "l",
    "g", "k", "h", "j", "q", "x", "r",
    "z", "c", "s", "y", "w",
)


def _is_tone_mark(ch: str) -> bool:
    return "\u0300" <= ch <= "\u036f"


def strip_tone_marks(text: str) -> str:
    """
    Lower-case, NFD-decompose and drop every combining diacritical mark.

    Examples:
      strip_tone_marks("āng") -> "ang"
      strip_tone_marks("ǜ")   -> "u"
    """
    decomposed = unicodedata.normalize("NFD", text.strip().lower())
    bare = "".join(ch for ch in decomposed if not _is_tone_mark(ch))
    return unicodedata.normalize("NFC", bare)


@dataclass(frozen=True)
class Syllable:
    """A parsed romanized syllable such as "zeng1", "lo" or the tone-only value "3"."""
    text: str                   # normalized input (lower-case, ü written as v)
    base: str = ""
    tone: Optional[str] = None  # digit string, None when no digit was given
    valid: bool = True

    @property
    def tone_only(self) -> bool:
        return self.valid and not self.base and self.tone is not None


def parse_syllable(text: str) -> Syllable:
    """
    Parse one syllable.

    Returns:
      - Syllable(base, tone)      for "zeng1" / "zeng"
      - a tone-only Syllable      for digit strings such as "1"
      - Syllable(valid=False)     for anything else (never raises)
    """
    t = text.strip().lower().replace("ü", "v")
    if _DIGITS_RE.match(t):
        return Syllable(text=t, base="", tone=t)
    m = _SYLLABLE_RE.match(t)
    if not m:
        return Syllable(text=t, valid=False)
    return Syllable(text=t, base=m.group(1), tone=m.group(2))


def split_initial(base: str) -> Tuple[str, str]:
    """Split a toneless syllable into (initial, final); zero-initial gives ("", base)."""
    for ini in INITIALS:
        if base.startswith(ini) and len(base) > len(ini):
            return ini, base[len(ini):]
    return "", base
