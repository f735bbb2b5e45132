"""
Porkbun availability and pricing checks.

One call answers both questions: checkDomain returns an availability flag
together with registration, renewal and promotional prices as decimal
strings. Supported TLDs come from the public pricing table.
"""

import logging
from decimal import Decimal, InvalidOperation

import httpx

from ..models import DomainCheckResult, PricingInfo, Provider
from ..tld_cache import TLDCache
from .base import BaseDomainChecker, ProviderError, parse_json

logger = logging.getLogger(__name__)

PORKBUN_API_BASE = "https://api.porkbun.com/api/json/v3"


def _decimal(value, field: str) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ProviderError(f"Invalid Porkbun price for {field}: {value!r}") from e


def parse_pricing(response: dict) -> PricingInfo:
    """Build PricingInfo from a checkDomain ``response`` object."""
    price = response.get("price")
    regular = response.get("regularPrice") or price
    if regular is None:
        raise ProviderError("Missing price in Porkbun response")

    registration = _decimal(regular, "regularPrice")

    renewal_info = (response.get("additional") or {}).get("renewal") or {}
    renewal_raw = renewal_info.get("price")
    renewal = _decimal(renewal_raw, "renewal") if renewal_raw is not None else registration

    first_year = None
    if str(response.get("firstYearPromo", "")).lower() == "yes" and price is not None:
        promo = _decimal(price, "price")
        if promo != registration:
            first_year = promo

    return PricingInfo(
        registration=registration,
        renewal=renewal,
        first_year=first_year,
        currency="USD",
    )


class PorkbunDomainChecker(BaseDomainChecker):
    provider = Provider.PORKBUN

    def __init__(
        self,
        client: httpx.AsyncClient,
        tld_cache: TLDCache,
        api_key: str | None,
        secret_key: str | None,
    ) -> None:
        super().__init__(client, tld_cache)
        self._api_key = api_key
        self._secret_key = secret_key

    def _auth_body(self) -> dict[str, str]:
        if not self._api_key or not self._secret_key:
            raise ProviderError("Porkbun API keys not configured")
        return {"apikey": self._api_key, "secretapikey": self._secret_key}

    async def _post(self, path: str) -> dict:
        response = await self._client.post(f"{PORKBUN_API_BASE}{path}", json=self._auth_body())
        data = parse_json(response, self.provider)
        if not isinstance(data, dict):
            raise ProviderError("Unexpected Porkbun response")

        if data.get("status") != "SUCCESS":
            logger.error("Porkbun API error on %s: %s", path, data.get("message"))
            raise ProviderError(data.get("message") or f"HTTP {response.status_code}: {response.reason_phrase}")
        return data

    async def _check(self, domain: str) -> DomainCheckResult:
        data = await self._post(f"/domain/checkDomain/{domain}")
        response = data.get("response") or {}

        avail = str(response.get("avail", "")).lower()
        if avail == "no":
            return self._result(domain, False)
        if avail != "yes":
            raise ProviderError(f"Unexpected availability status: {response.get('avail')!r}")

        return self._result(domain, True, pricing=parse_pricing(response))

    async def _fetch_tlds(self) -> list[str]:
        data = await self._post("/pricing/get")
        pricing = data.get("pricing")
        if not isinstance(pricing, dict):
            raise ProviderError("Failed to fetch Porkbun pricing")
        return list(pricing.keys())
