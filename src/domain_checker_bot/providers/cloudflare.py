"""
Cloudflare Registrar availability and pricing checks.

Availability and pricing are separate account-scoped calls; pricing is only
requested for domains that are available.
"""

import logging
from decimal import Decimal

import httpx

from ..models import DomainCheckResult, PricingInfo, Provider
from ..tld_cache import TLDCache
from .base import BaseDomainChecker, ProviderError, parse_json

logger = logging.getLogger(__name__)

CLOUDFLARE_API_BASE = "https://api.cloudflare.com/client/v4"


class CloudflareDomainChecker(BaseDomainChecker):
    provider = Provider.CLOUDFLARE

    def __init__(
        self,
        client: httpx.AsyncClient,
        tld_cache: TLDCache,
        api_token: str | None,
        account_id: str | None,
        email: str | None,
    ) -> None:
        super().__init__(client, tld_cache)
        self._api_token = api_token
        self._account_id = account_id
        self._email = email

    def _base_url(self) -> str:
        if not self._account_id:
            raise ProviderError("Cloudflare account ID not configured")
        return f"{CLOUDFLARE_API_BASE}/accounts/{self._account_id}/registrar"

    def _headers(self) -> dict[str, str]:
        if not self._api_token or not self._email:
            raise ProviderError("Cloudflare API token or email not configured")
        return {
            "Authorization": f"Bearer {self._api_token}",
            "X-Auth-Email": self._email,
        }

    async def _get(self, path: str):
        """GET an API path and return ``result`` from the response envelope."""
        response = await self._client.get(f"{self._base_url()}{path}", headers=self._headers())
        data = parse_json(response, self.provider)
        if not isinstance(data, dict):
            raise ProviderError("Unexpected Cloudflare response")

        if not data.get("success") or data.get("result") is None:
            errors = data.get("errors") or []
            message = None
            if errors and isinstance(errors[0], dict):
                message = errors[0].get("message")
            logger.error("Cloudflare API error on %s: %s", path, errors)
            raise ProviderError(message or "Unknown error")
        return data["result"]

    async def _check(self, domain: str) -> DomainCheckResult:
        availability = await self._get(f"/domains/{domain}")
        if not isinstance(availability, dict):
            raise ProviderError("Unexpected Cloudflare availability result")
        if not availability.get("available"):
            return self._result(domain, False)

        pricing = await self._get(f"/domains/{domain}/pricing")
        try:
            registration = Decimal(str(pricing["registration_price"]))
            renewal = Decimal(str(pricing["renewal_price"]))
        except (KeyError, TypeError, ArithmeticError) as e:
            raise ProviderError("Missing pricing in Cloudflare response") from e

        return self._result(
            domain,
            True,
            pricing=PricingInfo(registration=registration, renewal=renewal, currency="USD"),
        )

    async def _fetch_tlds(self) -> list[str]:
        result = await self._get("/tlds")
        if not isinstance(result, list):
            raise ProviderError("Failed to fetch Cloudflare TLDs")
        return result
