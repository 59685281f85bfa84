from idiomle.datasets import load_bundled_table
from idiomle.engine import MatchStatus, PinyinMatch
from idiomle.phonetics import PhoneticForm, TableProvider

ENTRIES = load_bundled_table()
WORDS = [e.word for e in ENTRIES]

# Offline provider with the bundled readings.
TABLE = TableProvider.from_entries(ENTRIES)


def pm(initial, final, tone, pattern="---"):
    """PinyinMatch with (initial, final, tone) statuses given as e.g. "GY-"."""
    i, f, t = (MatchStatus.from_symbol(ch) for ch in pattern)
    return PinyinMatch(initial, final, tone, i, f, t)


def flat_provider(chars):
    """Every character reads ba1, so the phonetic axis never discriminates."""
    same = PhoneticForm("b", "a", 1, "ba1")
    return TableProvider({ch: same for ch in chars})
