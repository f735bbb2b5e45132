"""
Per-provider rate-limit backoff.

Each failure doubles the wait before the next request to that provider
(1s, 2s, 4s, ... capped at 5 minutes). Any success clears the state. State
lives in the key-value store and expires after twice the maximum backoff so
a stale entry can never lock a provider out for good.
"""

import logging
import time

from .models import Provider, RateLimitState
from .store import Clock, KeyValueStore

logger = logging.getLogger(__name__)

INITIAL_BACKOFF_MS = 1000
BACKOFF_MULTIPLIER = 2
MAX_BACKOFF_MS = 5 * 60 * 1000


class RateLimitGuard:
    """Tracks failures per provider and computes how long to wait."""

    def __init__(
        self,
        store: KeyValueStore,
        clock: Clock = time.time,
        initial_backoff_ms: int = INITIAL_BACKOFF_MS,
        multiplier: int = BACKOFF_MULTIPLIER,
        max_backoff_ms: int = MAX_BACKOFF_MS,
    ) -> None:
        self._store = store
        self._clock = clock
        self.initial_backoff_ms = initial_backoff_ms
        self.multiplier = multiplier
        self.max_backoff_ms = max_backoff_ms

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    @staticmethod
    def _key(provider: Provider) -> tuple[str, str]:
        return ("rate_limit", provider.value)

    def backoff_ms(self, failure_count: int) -> int:
        """Delay after the given number of consecutive failures."""
        backoff = self.initial_backoff_ms * self.multiplier ** (failure_count - 1)
        return min(backoff, self.max_backoff_ms)

    def get_state(self, provider: Provider) -> RateLimitState | None:
        """Stored state, or None when no backoff is in effect."""
        raw = self._store.get(self._key(provider))
        if raw is None:
            return None
        try:
            return RateLimitState.from_dict(raw)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed rate-limit state for %s: %r", provider.value, raw)
            return None

    def get_wait_time(self, provider: Provider) -> int:
        """Milliseconds to wait before the next request (0 if none)."""
        state = self.get_state(provider)
        if state is None:
            return 0
        return max(0, state.next_retry_after - self._now_ms())

    def record_failure(self, provider: Provider) -> RateLimitState:
        """Count a failure and push the next allowed request further out."""
        previous = self.get_state(provider)
        failure_count = previous.failure_count + 1 if previous else 1

        now = self._now_ms()
        backoff = self.backoff_ms(failure_count)
        state = RateLimitState(
            failure_count=failure_count,
            next_retry_after=now + backoff,
            last_failure_time=now,
        )
        self._store.set(
            self._key(provider),
            state.to_dict(),
            ttl=2 * self.max_backoff_ms / 1000,
        )

        logger.info(
            "%s rate limited (failure %d), backing off %d ms",
            provider.value, failure_count, backoff,
        )
        return state

    def record_success(self, provider: Provider) -> None:
        """Clear any backoff for the provider."""
        self._store.delete(self._key(provider))
