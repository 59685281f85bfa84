"""
Guess session primitives.

- GuessSession: one game's append-only history plus the PhoneticCache that
  every candidate recomputation reuses (the dictionary is static, so cached
  forms never go stale).
- replay:       run a fixed list of guesses against a target and report how
                the candidate set shrinks turn by turn.

These are UI-agnostic so they can back a web view, a notebook or a bot
without changes. Winning, losing and turn budgets are the caller's business.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from idiomle.engine import GuessRecord, MAX_CANDIDATES, compare, filter_candidates
from idiomle.engine.validation import check_idiom
from idiomle.phonetics import PhoneticCache

logger = logging.getLogger(__name__)


class GuessSession:
    def __init__(
            self,
            dictionary: Iterable[str],
            *,
            phonetics=None,
            limit: Optional[int] = MAX_CANDIDATES,
    ):
        """
        Args:
          dictionary : ordered idioms the candidates are drawn from
          phonetics  : provider (wrapped in a session cache) or a ready PhoneticCache
          limit      : cap passed to filter_candidates (None = no cap)
        """
        self.dictionary: List[str] = [check_idiom(w) for w in dictionary]
        self.cache = phonetics if isinstance(phonetics, PhoneticCache) else PhoneticCache(phonetics)
        self.limit = limit
        self._history: List[GuessRecord] = []

    @property
    def history(self) -> Tuple[GuessRecord, ...]:
        return tuple(self._history)

    def record(self, entry: GuessRecord) -> GuessRecord:
        """Append feedback produced elsewhere (e.g. replayed from a client)."""
        if not isinstance(entry, GuessRecord):
            raise TypeError(f"expected GuessRecord; got {type(entry).__name__}")
        self._history.append(entry)
        logger.debug("turn %d: %s %s", len(self._history), entry.guess, entry.pattern)
        return entry

    def guess(self, guess: str, target: str) -> GuessRecord:
        """Compare `guess` with `target` and append the result."""
        return self.record(compare(guess, target, self.cache))

    def candidates(self, hints=None) -> List[str]:
        """Idioms consistent with the whole history (and `hints`), recomputed from scratch."""
        out = filter_candidates(self.dictionary, self._history, self.cache, self.limit, hints=hints)
        logger.debug("%d candidates after %d guesses (cache %s)",
                     len(out), len(self._history), self.cache.stats())
        return out


def replay(
        guesses: Iterable[str],
        target: str,
        dictionary: Iterable[str],
        *,
        phonetics=None,
        limit: Optional[int] = MAX_CANDIDATES,
) -> List[Dict]:
    """
    Play `guesses` in order against `target`.

    Returns:
      one dict per turn with keys:
        turn (int), guess (str), pattern (str), candidates_left (int)
    """
    session = GuessSession(dictionary, phonetics=phonetics, limit=limit)
    out: List[Dict] = []
    for turn, g in enumerate(guesses, start=1):
        rec = session.guess(g, target)
        out.append({
            "turn": turn,
            "guess": rec.guess,
            "pattern": rec.pattern,
            "candidates_left": len(session.candidates()),
        })
    return out
