"""
Tests for the key-value stores and the TLD cache.

Usage:
    pytest test_store.py
"""

from domain_checker_bot.models import Provider
from domain_checker_bot.store import FileStore, MemoryStore, open_store
from domain_checker_bot.tld_cache import TLD_CACHE_TTL, TLDCache


# =============================================================================
# MemoryStore
# =============================================================================

def test_memory_store_round_trip(store):
    store.set(("a", "b"), {"x": 1})
    assert store.get(("a", "b")) == {"x": 1}


def test_memory_store_missing_key(store):
    assert store.get(("nope",)) is None


def test_memory_store_expiry(store, clock):
    store.set(("k",), "v", ttl=10)

    clock.advance(9)
    assert store.get(("k",)) == "v"

    clock.advance(1)
    assert store.get(("k",)) is None


def test_memory_store_without_ttl_never_expires(store, clock):
    store.set(("k",), "v")
    clock.advance(10 ** 9)
    assert store.get(("k",)) == "v"


def test_memory_store_delete(store):
    store.set(("k",), "v")
    store.delete(("k",))
    store.delete(("k",))  # deleting twice is fine
    assert store.get(("k",)) is None


# =============================================================================
# FileStore
# =============================================================================

def test_file_store_persists_across_instances(tmp_path, clock):
    path = tmp_path / "state.json"
    FileStore(path, clock=clock).set(("tlds", "porkbun"), ["com", "net"], ttl=60)

    assert FileStore(path, clock=clock).get(("tlds", "porkbun")) == ["com", "net"]


def test_file_store_expiry(tmp_path, clock):
    s = FileStore(tmp_path / "state.json", clock=clock)
    s.set(("k",), "v", ttl=5)

    clock.advance(5)
    assert s.get(("k",)) is None


def test_file_store_drops_expired_entries_on_write(tmp_path, clock):
    path = tmp_path / "state.json"
    s = FileStore(path, clock=clock)
    s.set(("old",), 1, ttl=1)
    clock.advance(2)
    s.set(("new",), 2)

    assert "old" not in path.read_text()
    assert s.get(("new",)) == 2


def test_file_store_delete(tmp_path, clock):
    s = FileStore(tmp_path / "state.json", clock=clock)
    s.set(("k",), "v")
    s.delete(("k",))
    assert s.get(("k",)) is None


def test_file_store_corrupt_file_reads_as_empty(tmp_path, clock):
    path = tmp_path / "state.json"
    path.write_text("{not json")

    s = FileStore(path, clock=clock)
    assert s.get(("k",)) is None

    s.set(("k",), "v")
    assert s.get(("k",)) == "v"


def test_file_store_creates_parent_directory(tmp_path, clock):
    path = tmp_path / "nested" / "dir" / "state.json"
    FileStore(path, clock=clock).set(("k",), "v")
    assert path.exists()


def test_open_store_selection(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))

    assert isinstance(open_store(), MemoryStore)
    assert isinstance(open_store("memory"), MemoryStore)

    default_file = open_store("FILE")
    assert isinstance(default_file, FileStore)
    assert default_file.path == tmp_path / "domain-checker-bot" / "state.json"

    explicit = open_store(None, str(tmp_path / "custom.json"))
    assert isinstance(explicit, FileStore)
    assert explicit.path == tmp_path / "custom.json"


# =============================================================================
# TLDCache
# =============================================================================

def test_tld_cache_returns_what_was_stored(store):
    cache = TLDCache(store)
    cache.set_cached_tlds(Provider.PORKBUN, ["com", "net", "co.uk"])

    assert cache.get_cached_tlds(Provider.PORKBUN) == ["com", "net", "co.uk"]


def test_tld_cache_miss(store):
    assert TLDCache(store).get_cached_tlds(Provider.PORKBUN) is None


def test_tld_cache_empty_list_is_a_hit(store):
    cache = TLDCache(store)
    cache.set_cached_tlds(Provider.DOMAINR, [])
    assert cache.get_cached_tlds(Provider.DOMAINR) == []


def test_tld_cache_expires_after_a_day(store, clock):
    cache = TLDCache(store)
    cache.set_cached_tlds(Provider.PORKBUN, ["com"])

    clock.advance(TLD_CACHE_TTL - 1)
    assert cache.get_cached_tlds(Provider.PORKBUN) == ["com"]

    clock.advance(1)
    assert cache.get_cached_tlds(Provider.PORKBUN) is None


def test_tld_cache_is_provider_scoped(store):
    cache = TLDCache(store)
    cache.set_cached_tlds(Provider.PORKBUN, ["com"])
    cache.set_cached_tlds(Provider.CLOUDFLARE, ["net"])

    assert cache.get_cached_tlds(Provider.PORKBUN) == ["com"]
    assert cache.get_cached_tlds(Provider.CLOUDFLARE) == ["net"]
    assert cache.get_cached_tlds(Provider.DOMAINR) is None


def test_tld_cache_overwrites_without_merging(store):
    cache = TLDCache(store)
    cache.set_cached_tlds(Provider.PORKBUN, ["com", "net"])
    cache.set_cached_tlds(Provider.PORKBUN, ["org"])

    assert cache.get_cached_tlds(Provider.PORKBUN) == ["org"]
