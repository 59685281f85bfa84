"""
Dataset validator for idiom dictionaries.

What this module does:
- Validate an idiom list (one idiom per line) and, optionally, the syllable
  table used by the free-form query matcher.
- Enforce formatting rules (exactly 4 CJK characters per line, no blanks).
- Detect duplicates and invalid lines; compute SHA-256 of the raw files.
- Check that every listed idiom has a syllable table row.
- Return a machine-readable dict and provide a pretty one-line summary.

This is shape hygiene only: whether a string is a genuine idiom is the
dictionary maintainer's call.

Typical use:
    from idiomle.datasets import validate_dictionary, pretty_summary
    rep = validate_dictionary("data/idioms.txt", "data/idioms.csv")
    print(pretty_summary(rep))
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from idiomle.engine.validation import IDIOM_LENGTH
from .io import read_syllable_table

# CJK Unified Ideographs + Extension A
_IDIOM_RE = re.compile(r"^[\u3400-\u4dbf\u4e00-\u9fff]{%d}$" % IDIOM_LENGTH)


@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str
    exists: bool
    count: int           # number of VALID idioms
    sha256: str          # empty string if missing
    unique_count: int
    invalid_lines: int


@dataclass
class DictionaryReport:
    idioms: FileReport
    table: Optional[FileReport]
    idioms_in_table: Optional[bool]    # None when no table was given
    passed: bool
    issues: List[str]


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def is_well_formed(word: str) -> bool:
    return bool(_IDIOM_RE.match(word))


def _load_and_check(path: Path) -> Tuple[List[str], int]:
    """(valid_idioms, invalid_count); blank lines count as invalid."""
    valid: List[str] = []
    invalid = 0
    with path.open("r", encoding="utf-8-sig") as f:
        for raw in f:
            w = raw.strip()
            if is_well_formed(w):
                valid.append(w)
            else:
                invalid += 1
    return valid, invalid


def _missing_report(path: str) -> FileReport:
    return FileReport(path, False, 0, "", 0, 0)


def validate_dictionary(idioms_path: str, table_path: Optional[str] = None) -> Dict:
    """
    Validate an idiom list and (optionally) its syllable table.

    Returns a JSON-serializable dict (DictionaryReport schema). `passed` is
    strict: non-empty list, no invalid lines, and full table coverage when a
    table is given. A malformed table is reported as an issue, not raised.
    """
    issues: List[str] = []
    ip = Path(idioms_path)

    if not ip.exists():
        issues.append(f"idiom list not found: {idioms_path}")
        table_rep = _missing_report(table_path) if table_path else None
        return asdict(DictionaryReport(_missing_report(idioms_path), table_rep, None, False, issues))

    idioms, invalid = _load_and_check(ip)
    unique = set(idioms)
    idioms_rep = FileReport(
        path=str(ip),
        exists=True,
        count=len(idioms),
        sha256=_sha256_file(ip),
        unique_count=len(unique),
        invalid_lines=invalid,
    )

    if idioms_rep.count == 0:
        issues.append("idiom list contains 0 valid idioms")
    if invalid:
        issues.append(f"idiom list has {invalid} invalid line(s)")
    if idioms_rep.count != idioms_rep.unique_count:
        issues.append("idiom list contains duplicate lines")

    table_rep: Optional[FileReport] = None
    covered: Optional[bool] = None
    if table_path:
        tp = Path(table_path)
        if not tp.exists():
            issues.append(f"syllable table not found: {table_path}")
            table_rep = _missing_report(table_path)
            covered = False
        else:
            try:
                words = [e.word for e in read_syllable_table(tp)]
                table_invalid = 0
            except ValueError as e:
                issues.append(f"syllable table is malformed ({e})")
                words, table_invalid = [], 1
            table_rep = FileReport(
                path=str(tp),
                exists=True,
                count=len(words),
                sha256=_sha256_file(tp),
                unique_count=len(set(words)),
                invalid_lines=table_invalid,
            )
            missing = sorted(unique - set(words))
            covered = not missing
            if missing:
                # A few examples are enough to debug
                issues.append(f"idioms missing from syllable table (e.g., {missing[:5]})")

    passed = (
            idioms_rep.count > 0
            and invalid == 0
            and covered is not False
            and (table_rep is None or table_rep.invalid_lines == 0)
    )
    return asdict(DictionaryReport(idioms_rep, table_rep, covered, passed, issues))


def pretty_summary(report: Dict) -> str:
    """
    Compact, human-friendly one-liner.

    Example:
        idioms=20 (uniq=20, sha=abc123...) | table=20 (sha=def456...) | idioms⊆table=True | OK
    """
    a = report["idioms"]
    parts = [f"idioms={a['count']} (uniq={a['unique_count']}, sha={(a.get('sha256') or '')[:12]})"]
    t = report.get("table")
    if t is not None:
        parts.append(f"table={t['count']} (sha={(t.get('sha256') or '')[:12]})")
        parts.append(f"idioms⊆table={report['idioms_in_table']}")
    parts.append("OK" if report["passed"] else "FAIL")
    return " | ".join(parts)
