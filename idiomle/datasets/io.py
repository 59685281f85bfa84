"""
Dictionary sources.

- read_lines:                plain UTF-8 text files.
- read_idioms:               one idiom per line (blank lines dropped).
- read_syllable_table:       CSV `word,pinyin` where pinyin is four
                             space-separated syllables, e.g.
                               爱憎分明,ai4 zeng1 fen1 ming2
- write_syllable_table:      the inverse, used by script/build_syllable_table.
- load_bundled_table:        the small sample table shipped with the package.
                             It is hand-curated with citation tones (一 is
                             always yi1), so script/build_syllable_table.py
                             does not reproduce it exactly: pypinyin applies
                             phrase tone sandhi (一心一意 -> yi4 xin1 yi2 yi4).
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from idiomle.engine.errors import InvalidLengthError
from idiomle.engine.query import IdiomEntry

logger = logging.getLogger(__name__)

BUNDLED_TABLE = Path(__file__).parent / "data" / "idioms.csv"

TABLE_FIELDS = ("word", "pinyin")


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines, stripping trailing CR/LF.
    Raises FileNotFoundError if the path doesn't exist.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    return [ln.rstrip("\r\n") for ln in p.read_text(encoding="utf-8-sig").splitlines()]


def read_idioms(p: Path | str) -> List[str]:
    """Idioms from a one-per-line file, whitespace-stripped, blanks dropped, order kept."""
    return [ln.strip() for ln in read_lines(p) if ln.strip()]


def read_syllable_table(p: Path | str) -> List[IdiomEntry]:
    """
    Load a syllable table CSV into IdiomEntries (file order preserved).

    Raises:
      FileNotFoundError  if the file is missing
      ValueError         on a missing header or a malformed row (line number included)
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)

    entries: List[IdiomEntry] = []
    # utf-8-sig: tables exported from spreadsheets often start with a BOM
    with p.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None or any(k not in reader.fieldnames for k in TABLE_FIELDS):
            raise ValueError(f"{p}: expected header {','.join(TABLE_FIELDS)}")
        for row in reader:
            word = (row.get("word") or "").strip()
            pinyin = (row.get("pinyin") or "").strip()
            try:
                entries.append(IdiomEntry.from_strings(word, pinyin))
            except (InvalidLengthError, ValueError) as e:
                raise ValueError(f"{p}:{reader.line_num}: {e}") from e

    logger.info("loaded %d idioms from %s", len(entries), p)
    return entries


def write_syllable_table(rows: Iterable[Tuple[str, Sequence[str]]], p: Path | str) -> str:
    """
    Write (word, syllables) rows as a syllable table CSV.
    Returns the string path written.
    """
    p = Path(p)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(TABLE_FIELDS)
        for word, syllables in rows:
            w.writerow([word, " ".join(syllables)])
    return str(p)


def load_bundled_table() -> List[IdiomEntry]:
    return read_syllable_table(BUNDLED_TABLE)
