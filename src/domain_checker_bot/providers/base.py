"""
Common plumbing for registrar clients.

Subclasses implement the provider-specific request and response mapping
(``_check`` and ``_fetch_tlds``); this class owns the TLD gate, the TLD
cache and the "always return, never raise" contract of check_availability.
"""

import logging

import httpx

from ..domains import extract_tld, normalize_tlds
from ..models import DomainCheckResult, Provider
from ..tld_cache import TLDCache

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class ProviderError(Exception):
    """A registrar API answered with an error or an unusable payload."""


def parse_json(response: httpx.Response, provider: Provider):
    """Decode a JSON body, turning garbage into a ProviderError."""
    try:
        return response.json()
    except ValueError as e:
        raise ProviderError(f"Invalid JSON from {provider.display_name}: {e}") from e


class BaseDomainChecker:
    """Shared check_availability/get_supported_tlds flow."""

    provider: Provider

    # An empty supported-TLD list means "accept everything" for registrars
    # without a TLD listing endpoint, and "accept nothing" for the rest.
    empty_tld_list_accepts_all = False

    def __init__(self, client: httpx.AsyncClient, tld_cache: TLDCache) -> None:
        self._client = client
        self._tld_cache = tld_cache

    def _result(self, domain: str, available: bool, **kwargs) -> DomainCheckResult:
        return DomainCheckResult(domain=domain, available=available, provider=self.provider, **kwargs)

    async def _check(self, domain: str) -> DomainCheckResult:
        raise NotImplementedError

    async def _fetch_tlds(self) -> list[str]:
        raise NotImplementedError

    async def _unsupported_tld_error(self, domain: str) -> str | None:
        """Reason the domain's TLD is rejected, or None if it may be checked."""
        tld = extract_tld(domain)
        supported = await self.get_supported_tlds()
        name = self.provider.display_name

        if not supported:
            if self.empty_tld_list_accepts_all:
                return None
            return f"TLD .{tld} not supported by {name} (supported TLD list unavailable)"

        if tld not in supported:
            return f"TLD .{tld} not supported by {name}"
        return None

    async def check_availability(self, domain: str) -> DomainCheckResult:
        """Check a domain. Every failure is reported in the result's error."""
        try:
            if error := await self._unsupported_tld_error(domain):
                return self._result(domain, False, error=error)

            return await self._check(domain)
        except Exception as e:
            logger.error("%s check for %s failed: %s", self.provider.value, domain, e)
            return self._result(domain, False, error=str(e) or type(e).__name__)

    async def get_supported_tlds(self) -> list[str]:
        """Cached TLD list; refetched on miss, [] if the fetch fails."""
        cached = self._tld_cache.get_cached_tlds(self.provider)
        if cached is not None:
            return cached

        try:
            tlds = normalize_tlds(await self._fetch_tlds())
        except Exception:
            logger.exception("Failed to fetch %s TLDs", self.provider.display_name)
            return []

        self._tld_cache.set_cached_tlds(self.provider, tlds)
        return tlds
