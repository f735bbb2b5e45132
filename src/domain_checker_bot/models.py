"""
Shared types for domain availability checking.

Every registrar client produces a DomainCheckResult; rate-limit bookkeeping
is kept as RateLimitState in the key-value store.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Protocol


class Provider(Enum):
    """Registrars a checker can be built for."""

    DOMAINR = "domainr"
    PORKBUN = "porkbun"
    CLOUDFLARE = "cloudflare"

    @property
    def display_name(self) -> str:
        """Name as shown to chat users, e.g. "Porkbun"."""
        return self.value.capitalize()


@dataclass(frozen=True)
class PricingInfo:
    """Yearly pricing for an available domain."""
    registration: Decimal
    renewal: Decimal
    currency: str = "USD"
    first_year: Decimal | None = None  # promotional price, only when it differs


@dataclass(frozen=True)
class DomainCheckResult:
    """Result of a domain availability check."""
    domain: str
    available: bool
    provider: Provider
    pricing: PricingInfo | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        data = {
            "domain": self.domain,
            "available": self.available,
            "provider": self.provider.value,
        }
        if self.pricing is not None:
            pricing = {
                "registration": str(self.pricing.registration),
                "renewal": str(self.pricing.renewal),
                "currency": self.pricing.currency,
            }
            if self.pricing.first_year is not None:
                pricing["firstYear"] = str(self.pricing.first_year)
            data["pricing"] = pricing
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class RateLimitState:
    """
    Backoff bookkeeping for one provider.

    Timestamps are milliseconds since the epoch.
    """
    failure_count: int
    next_retry_after: int
    last_failure_time: int

    def to_dict(self) -> dict:
        return {
            "failureCount": self.failure_count,
            "nextRetryAfter": self.next_retry_after,
            "lastFailureTime": self.last_failure_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RateLimitState":
        return cls(
            failure_count=int(data["failureCount"]),
            next_retry_after=int(data["nextRetryAfter"]),
            last_failure_time=int(data["lastFailureTime"]),
        )


class DomainChecker(Protocol):
    """Capability every registrar client implements."""

    provider: Provider

    async def check_availability(self, domain: str) -> DomainCheckResult:
        """Check one domain. Never raises; failures land in ``error``."""
        ...

    async def get_supported_tlds(self) -> list[str]:
        """Lowercase TLDs (no leading dot) the registrar sells."""
        ...
