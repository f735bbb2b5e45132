"""
TLD list cache.

Listing every TLD a registrar sells is an expensive call, so each
provider's list is kept for a day. Entries are replaced whole, never merged.
"""

from .models import Provider
from .store import KeyValueStore

# Default cache expiry (24 hours)
TLD_CACHE_TTL = 86400


class TLDCache:
    """Per-provider cache of supported TLDs."""

    def __init__(self, store: KeyValueStore, ttl: float = TLD_CACHE_TTL) -> None:
        self._store = store
        self.ttl = ttl

    def get_cached_tlds(self, provider: Provider) -> list[str] | None:
        """Cached list, or None if the caller must refetch."""
        tlds = self._store.get(("tlds", provider.value))
        if not isinstance(tlds, list):
            return None
        return list(tlds)

    def set_cached_tlds(self, provider: Provider, tlds: list[str]) -> None:
        self._store.set(("tlds", provider.value), list(tlds), ttl=self.ttl)
