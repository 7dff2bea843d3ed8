from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from renda.domain.models import QuoteRecord

log = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class CacheEntry:
    record: QuoteRecord
    timestamp: float  # ms, from the cache clock


class QuoteCache:
    """
    In-process TTL cache of quote records keyed by uppercase ticker.

    Bounded to max_entries; when full, the oldest *inserted* key is evicted.
    Overwriting a key keeps its original insertion position (plain dict
    ordering). Every failure is logged and treated as a miss so the fetch
    path is never blocked by the cache.
    """

    def __init__(
        self,
        ttl_ms: int = 300000,
        max_entries: int = 500,
        clock: Callable[[], float] = _now_ms,
    ) -> None:
        self.ttl_ms = max(0, int(ttl_ms))
        self.max_entries = max(1, int(max_entries))
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _key(ticker: str) -> str:
        return ticker.strip().upper()

    def get(self, ticker: str) -> Optional[QuoteRecord]:
        try:
            key = self._key(ticker)
            with self._lock:
                entry = self._entries.get(key)
                if entry is None:
                    self._misses += 1
                    log.debug("cache miss for %s", key)
                    return None
                age = self._clock() - entry.timestamp
                if age < self.ttl_ms:
                    self._hits += 1
                    log.debug("cache hit for %s (age=%.0fms)", key, age)
                    return entry.record
                del self._entries[key]
                self._misses += 1
                log.info("cache entry for %s expired (age=%.0fms, ttl=%sms)", key, age, self.ttl_ms)
                return None
        except Exception as e:
            log.warning("cache read failed for %s: %s", ticker, e)
            return None

    def put(self, ticker: str, record: QuoteRecord) -> None:
        try:
            key = self._key(ticker)
            with self._lock:
                self._entries[key] = CacheEntry(record=record, timestamp=self._clock())
                while len(self._entries) > self.max_entries:
                    oldest = next(iter(self._entries))
                    del self._entries[oldest]
                    log.debug("cache full, evicted %s", oldest)
            log.debug("cached %s", key)
        except Exception as e:
            log.warning("cache write failed for %s: %s", ticker, e)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "entries": len(self._entries),
                "max_entries": self.max_entries,
                "ttl_ms": self.ttl_ms,
            }
