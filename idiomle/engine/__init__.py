from .errors import IdiomleError, InvalidLengthError, PhoneticDecompositionError
from .status import MatchStatus, SlotState, parse_pattern, pattern_string
from .scoring import CharResult, GuessRecord, PinyinMatch, compare, make_record, score_characters
from .constraints import MAX_CANDIDATES, PinyinHint, filter_candidates, hint_matches, is_consistent
from .query import IdiomEntry, QuerySlot, find_by_query
from .validation import IDIOM_LENGTH, check_idiom

__all__ = [
    "IdiomleError", "InvalidLengthError", "PhoneticDecompositionError",
    "MatchStatus", "SlotState", "parse_pattern", "pattern_string",
    "CharResult", "GuessRecord", "PinyinMatch", "compare", "make_record", "score_characters",
    "MAX_CANDIDATES", "PinyinHint", "filter_candidates", "hint_matches", "is_consistent",
    "IdiomEntry", "QuerySlot", "find_by_query",
    "IDIOM_LENGTH", "check_idiom",
]
