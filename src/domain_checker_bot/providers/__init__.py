"""
Registrar clients.

Each client implements the DomainChecker capability; ``create_checker``
picks one by provider at construction time.
"""

import asyncio
import time

import httpx

from ..config import Settings
from ..models import DomainChecker, Provider
from ..rate_limit import RateLimitGuard
from ..retry import Sleep
from ..store import Clock, KeyValueStore
from ..tld_cache import TLDCache
from .base import DEFAULT_TIMEOUT, BaseDomainChecker, ProviderError
from .cloudflare import CloudflareDomainChecker
from .domainr import DomainrDomainChecker
from .porkbun import PorkbunDomainChecker

__all__ = [
    "BaseDomainChecker",
    "CloudflareDomainChecker",
    "DomainrDomainChecker",
    "PorkbunDomainChecker",
    "ProviderError",
    "create_checker",
    "create_http_client",
]


def create_http_client() -> httpx.AsyncClient:
    """Shared HTTP client for registrar calls."""
    return httpx.AsyncClient(
        timeout=DEFAULT_TIMEOUT,
        headers={"Accept": "application/json"},
        limits=httpx.Limits(
            max_connections=20,
            max_keepalive_connections=10,
        ),
    )


def create_checker(
    settings: Settings,
    client: httpx.AsyncClient,
    store: KeyValueStore,
    clock: Clock = time.time,
    sleep: Sleep = asyncio.sleep,
) -> DomainChecker:
    """Build the checker for ``settings.provider``."""
    tld_cache = TLDCache(store)

    if settings.provider == Provider.PORKBUN:
        return PorkbunDomainChecker(
            client,
            tld_cache,
            api_key=settings.porkbun_api_key,
            secret_key=settings.porkbun_secret_key,
        )

    if settings.provider == Provider.CLOUDFLARE:
        return CloudflareDomainChecker(
            client,
            tld_cache,
            api_token=settings.cloudflare_api_token,
            account_id=settings.cloudflare_account_id,
            email=settings.cloudflare_email,
        )

    if settings.provider == Provider.DOMAINR:
        return DomainrDomainChecker(
            client,
            tld_cache,
            RateLimitGuard(store, clock=clock),
            api_key=settings.domainr_rapidapi_key,
            sleep=sleep,
        )

    raise ValueError(f"Unsupported provider: {settings.provider}")
