from concurrent.futures import ThreadPoolExecutor

from renda.domain.models import QuoteRecord
from renda.services.quote_cache import QuoteCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _record(symbol: str) -> QuoteRecord:
    return QuoteRecord.model_validate({"symbol": symbol, "regularMarketPrice": 10.0})


def test_put_then_get_within_ttl_returns_same_record():
    clock = FakeClock()
    cache = QuoteCache(ttl_ms=300000, max_entries=10, clock=clock)
    rec = _record("PETR4")
    cache.put("PETR4", rec)

    clock.now = 299999
    assert cache.get("PETR4") is rec


def test_expired_entry_is_removed():
    clock = FakeClock()
    cache = QuoteCache(ttl_ms=1000, max_entries=10, clock=clock)
    cache.put("VALE3", _record("VALE3"))

    clock.now = 1000
    assert cache.get("VALE3") is None
    assert len(cache) == 0


def test_lookup_is_case_insensitive():
    cache = QuoteCache(clock=FakeClock())
    rec = _record("PETR4")
    cache.put("PETR4", rec)

    assert cache.get("petr4") is rec
    assert cache.get(" Petr4 ") is rec


def test_oldest_inserted_entry_is_evicted():
    cache = QuoteCache(max_entries=3, clock=FakeClock())
    for sym in ["AAAA3", "BBBB3", "CCCC3", "DDDD3"]:
        cache.put(sym, _record(sym))

    assert len(cache) == 3
    assert cache.get("AAAA3") is None
    for sym in ["BBBB3", "CCCC3", "DDDD3"]:
        assert cache.get(sym) is not None


def test_overwrite_keeps_insertion_position():
    cache = QuoteCache(max_entries=3, clock=FakeClock())
    for sym in ["AAAA3", "BBBB3", "CCCC3"]:
        cache.put(sym, _record(sym))
    fresh = _record("AAAA3")
    cache.put("aaaa3", fresh)
    assert len(cache) == 3
    assert cache.get("AAAA3") is fresh

    cache.put("DDDD3", _record("DDDD3"))
    assert cache.get("AAAA3") is None
    assert cache.get("BBBB3") is not None


def test_stats_count_hits_and_misses():
    clock = FakeClock()
    cache = QuoteCache(ttl_ms=100, max_entries=5, clock=clock)
    cache.get("ITUB4")
    cache.put("ITUB4", _record("ITUB4"))
    cache.get("ITUB4")
    cache.get("ITUB4")
    clock.now = 500
    cache.get("ITUB4")

    stats = cache.stats()
    assert stats["hits"] == 2
    assert stats["misses"] == 2
    assert stats["entries"] == 0
    assert stats["max_entries"] == 5
    assert stats["ttl_ms"] == 100


def test_failures_are_treated_as_miss():
    def broken_clock() -> float:
        raise RuntimeError("clock broke")

    cache = QuoteCache(clock=broken_clock)
    cache.put("BBAS3", _record("BBAS3"))  # must not raise
    assert cache.get("BBAS3") is None


def test_concurrent_writes_respect_the_bound():
    cache = QuoteCache(max_entries=50, clock=FakeClock())
    symbols = [f"T{i:04d}" for i in range(500)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda s: cache.put(s, _record(s)), symbols))

    assert len(cache) == 50
    assert cache.stats()["entries"] == 50
