"""TTLCache 단위 테스트 (주입한 시계로 만료/축출 검증)"""

import pytest

from partscout.engine.cache import TTLCache

from conftest import FakeClock


def test_get_returns_value_until_expiry(fake_clock: FakeClock):
    cache = TTLCache(max_size=10, default_ttl_ms=1000, clock=fake_clock)
    cache.set("k", "v")

    fake_clock.advance(1000)
    assert cache.get("k") == "v"  # 만료 시각과 같으면 아직 유효

    fake_clock.advance(1)
    assert cache.get("k") is None


def test_expired_entry_is_removed_on_read(fake_clock: FakeClock):
    cache = TTLCache(max_size=10, default_ttl_ms=100, clock=fake_clock)
    cache.set("a", 1)
    cache.set("b", 2, ttl_ms=10_000)

    fake_clock.advance(500)
    assert cache.size() == 2  # 조회 전에는 남아 있음
    assert cache.get("a", "missing") == "missing"
    assert cache.size() == 1


def test_full_cache_evicts_earliest_expiry_not_insertion_order(fake_clock: FakeClock):
    cache = TTLCache(max_size=2, default_ttl_ms=1000, clock=fake_clock)
    cache.set("long", 1, ttl_ms=5000)
    cache.set("short", 2, ttl_ms=100)

    cache.set("new", 3)

    assert cache.size() == 2
    assert cache.get("short") is None
    assert cache.get("long") == 1
    assert cache.get("new") == 3


def test_overwriting_existing_key_does_not_evict(fake_clock: FakeClock):
    cache = TTLCache(max_size=2, default_ttl_ms=1000, clock=fake_clock)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.set("a", 10)

    assert len(cache) == 2
    assert cache.get("a") == 10
    assert cache.get("b") == 2


def test_overwrite_refreshes_expiry(fake_clock: FakeClock):
    cache = TTLCache(max_size=2, default_ttl_ms=100, clock=fake_clock)
    cache.set("a", 1)
    fake_clock.advance(90)
    cache.set("a", 2)
    fake_clock.advance(90)

    assert cache.get("a") == 2


def test_size_never_exceeds_max(fake_clock: FakeClock):
    cache = TTLCache(max_size=3, default_ttl_ms=1000, clock=fake_clock)
    for i in range(20):
        fake_clock.advance(1)
        cache.set(f"k{i}", i)
        assert cache.size() <= 3


def test_delete_and_clear(fake_clock: FakeClock):
    cache = TTLCache(max_size=5, default_ttl_ms=1000, clock=fake_clock)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.delete("a")
    cache.delete("missing")
    assert cache.get("a") is None
    assert cache.size() == 1

    cache.clear()
    assert cache.size() == 0


def test_invalid_max_size():
    with pytest.raises(ValueError):
        TTLCache(max_size=0, default_ttl_ms=1000)
