"""
Domainr availability checks (via the RapidAPI gateway).

The gateway rate-limits aggressively, so every request goes through the
retry wrapper and the shared backoff. Domainr reports a zone status rather
than a yes/no answer and never returns pricing.
"""

import asyncio
import logging

import httpx

from ..models import DomainCheckResult, Provider
from ..rate_limit import RateLimitGuard
from ..retry import MAX_RETRIES, Sleep, send_with_retry
from ..tld_cache import TLDCache
from .base import BaseDomainChecker, ProviderError, parse_json

logger = logging.getLogger(__name__)

DOMAINR_API_BASE = "https://domainr.p.rapidapi.com/v2"
DOMAINR_RAPIDAPI_HOST = "domainr.p.rapidapi.com"

# inactive/undelegated = can register; everything else means taken
STATUS_AVAILABILITY = {
    "inactive": True,
    "undelegated": True,
    "undelegated inactive": True,
    "active": False,
    "claimed": False,
    "parked": False,
    "premium": False,
    "reserved": False,
    "expiring": False,
}


def resolve_status(status: str) -> bool | None:
    """
    Map a Domainr status string to availability.

    Statuses may hold several space-separated words ("undelegated inactive").
    The full string is tried first, then each word in order; None means no
    word was recognised.
    """
    key = status.strip().lower()
    if key in STATUS_AVAILABILITY:
        return STATUS_AVAILABILITY[key]

    for word in key.split():
        if word in STATUS_AVAILABILITY:
            return STATUS_AVAILABILITY[word]

    return None


class DomainrDomainChecker(BaseDomainChecker):
    provider = Provider.DOMAINR
    empty_tld_list_accepts_all = True

    def __init__(
        self,
        client: httpx.AsyncClient,
        tld_cache: TLDCache,
        guard: RateLimitGuard,
        api_key: str | None,
        max_retries: int = MAX_RETRIES,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        super().__init__(client, tld_cache)
        self._guard = guard
        self._api_key = api_key
        self._max_retries = max_retries
        self._sleep = sleep

    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            raise ProviderError("Domainr API key not configured")
        return {
            "X-RapidAPI-Key": self._api_key,
            "X-RapidAPI-Host": DOMAINR_RAPIDAPI_HOST,
        }

    async def _check(self, domain: str) -> DomainCheckResult:
        request = self._client.build_request(
            "GET",
            f"{DOMAINR_API_BASE}/status",
            params={"domain": domain},
            headers=self._headers(),
        )
        response = await send_with_retry(
            self._client,
            request,
            self._guard,
            self.provider,
            max_retries=self._max_retries,
            sleep=self._sleep,
        )

        if not response.is_success:
            logger.error("Domainr API error: %s %s", response.status_code, response.text[:300])
            raise ProviderError(f"HTTP {response.status_code}: {response.reason_phrase}")

        data = parse_json(response, self.provider)
        statuses = data.get("status") if isinstance(data, dict) else None
        if not statuses or not isinstance(statuses[0], dict):
            logger.error("Unexpected Domainr response: %r", data)
            raise ProviderError("Missing status data from Domainr API")

        status = str(statuses[0].get("status", ""))
        available = resolve_status(status)

        if available is None:
            logger.warning("Unknown Domainr status: %s", status)
            return self._result(domain, False, error=f"Unknown status: {status}")

        return self._result(domain, available)

    async def _fetch_tlds(self) -> list[str]:
        # Domainr has no TLD listing endpoint; an empty list lets every TLD through
        return []
