"""
Retry wrapper for providers behind a rate-limiting gateway.

One logical request gets up to ``max_retries`` extra attempts. Before each
attempt the shared backoff for the provider is honoured; 429 responses and
transport errors count as failures, a 2xx response clears the backoff.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from .models import Provider
from .rate_limit import RateLimitGuard

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429
MAX_RETRIES = 3

Sleep = Callable[[float], Awaitable[None]]


async def send_with_retry(
    client: httpx.AsyncClient,
    request: httpx.Request,
    guard: RateLimitGuard,
    provider: Provider,
    max_retries: int = MAX_RETRIES,
    sleep: Sleep = asyncio.sleep,
) -> httpx.Response:
    """
    Send ``request``, retrying on 429 and transport errors.

    Returns the last response when every attempt was rate limited, so the
    caller decides what a 429 means. Re-raises the last transport error when
    every attempt failed at the network level.
    """
    attempts = max_retries + 1
    attempt = 0

    while True:
        attempt += 1
        is_last = attempt >= attempts

        wait_ms = guard.get_wait_time(provider)
        if wait_ms > 0:
            logger.debug("Waiting %d ms before %s request", wait_ms, provider.value)
            await sleep(wait_ms / 1000)

        try:
            response = await client.send(request)
        except httpx.HTTPError as e:
            guard.record_failure(provider)
            if is_last:
                raise
            logger.warning(
                "%s request failed (attempt %d/%d): %s",
                provider.value, attempt, attempts, e,
            )
            continue

        if response.status_code == RATE_LIMIT_STATUS:
            guard.record_failure(provider)
            if is_last:
                return response
            await response.aclose()
            continue

        if response.is_success:
            guard.record_success(provider)
        return response
