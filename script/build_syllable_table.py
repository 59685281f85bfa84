"""
Build the free-form query syllable table from an idiom list.

What it does:
- Reads one idiom per line (blank lines dropped).
- De-duplicates while preserving order and skips malformed lines.
- Converts every idiom with pypinyin (phrase-aware, tone digits, neutral = 5).
- Writes `word,pinyin` CSV rows such as: 爱憎分明,ai4 zeng1 fen1 ming2

Usage:
    python -m script.build_syllable_table --in data/idioms.txt --out idiomle/datasets/data/idioms.csv
"""

import argparse
import sys

from tqdm import tqdm

from idiomle.datasets import read_idioms, write_syllable_table
from idiomle.datasets.validator import is_well_formed
from idiomle.engine.errors import PhoneticDecompositionError
from idiomle.phonetics import PypinyinProvider


def unique_preserve_order(words):
    seen = set()
    out = []
    for w in words:
        if w not in seen:
            seen.add(w)
            out.append(w)
    return out


def build_rows(idioms, provider, progress=True):
    rows, skipped = [], []
    iterator = tqdm(idioms, ncols=80, desc="Converting", unit="idiom") if progress else idioms
    for word in iterator:
        try:
            rows.append((word, provider.syllables(word)))
        except PhoneticDecompositionError:
            skipped.append(word)
    return rows, skipped


def main():
    ap = argparse.ArgumentParser(description="Build the idiom syllable table (CSV)")
    ap.add_argument("--in", dest="inp", required=True, help="idiom list, one per line")
    ap.add_argument("--out", default="idiomle/datasets/data/idioms.csv")
    ap.add_argument("--no-progress", action="store_true", help="disable the progress bar")
    args = ap.parse_args()

    words = unique_preserve_order(read_idioms(args.inp))
    idioms = [w for w in words if is_well_formed(w)]
    if len(idioms) != len(words):
        print(f"Skipping {len(words) - len(idioms)} malformed line(s)", file=sys.stderr)

    show = not args.no_progress and sys.stderr.isatty()
    rows, skipped = build_rows(idioms, PypinyinProvider(), progress=show)
    for w in skipped:
        print(f"No pinyin for {w}; skipped", file=sys.stderr)

    write_syllable_table(rows, args.out)
    print(f"Wrote {len(rows)} idioms -> {args.out}")


if __name__ == "__main__":
    main()
