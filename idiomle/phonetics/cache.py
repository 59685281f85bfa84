"""
Per-idiom memo of phonetic forms.

Deriving forms is the expensive step of candidate filtering (one provider
call per idiom), and the dictionary is static, so a session keeps one
PhoneticCache and hands it to every filter call.

Policy:
  - keyed by the exact (stripped) idiom string
  - entries are never evicted or invalidated for the cache's lifetime
  - population is lock-protected; two racing callers may both compute a
    key, the first stored value wins and both return it
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Tuple

from idiomle.engine.validation import check_idiom
from .provider import PhoneticForm, PhoneticProvider, PypinyinProvider

logger = logging.getLogger(__name__)


class PhoneticCache:
    def __init__(self, provider: Optional[PhoneticProvider] = None):
        self.provider = provider if provider is not None else PypinyinProvider()
        self._forms: Dict[str, Tuple[PhoneticForm, ...]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def forms(self, idiom: str) -> Tuple[PhoneticForm, ...]:
        key = check_idiom(idiom)
        with self._lock:
            cached = self._forms.get(key)
            if cached is not None:
                self.hits += 1
                return cached

        # Provider errors propagate; nothing is stored for a failed key.
        forms = self.provider.forms(key)
        with self._lock:
            self.misses += 1
            logger.debug("phonetic cache miss: %s (size=%d)", key, len(self._forms) + 1)
            return self._forms.setdefault(key, forms)

    def __contains__(self, idiom: str) -> bool:
        return idiom.strip() in self._forms

    def __len__(self) -> int:
        return len(self._forms)

    def stats(self) -> Dict[str, int]:
        """{"size", "hits", "misses"} snapshot."""
        with self._lock:
            return {"size": len(self._forms), "hits": self.hits, "misses": self.misses}
