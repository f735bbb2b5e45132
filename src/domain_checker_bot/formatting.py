"""Human-readable chat replies for domain check results."""

from .models import DomainCheckResult, PricingInfo

CURRENCY_SYMBOLS = {"USD": "$"}


def _money(amount, currency: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol}{amount:.2f}"


def format_price(pricing: PricingInfo, provider_name: str) -> str:
    """
    Format pricing for display.

    "$15.00 / yr ($5.00 first year) (Porkbun)"
    """
    text = f"{_money(pricing.renewal, pricing.currency)} / yr"

    if pricing.first_year is not None and pricing.first_year != pricing.renewal:
        text += f" ({_money(pricing.first_year, pricing.currency)} first year)"

    text += f" ({provider_name})"
    return text


def format_result(result: DomainCheckResult) -> str:
    """Turn a check result into the reply sent back to the user."""
    provider_name = result.provider.display_name

    if result.error:
        if "not supported" in result.error:
            return (
                f'Error: The domain "{result.domain}" uses a TLD that is '
                f"not supported by {provider_name}."
            )
        return f"Error: {result.error}"

    if not result.available:
        return f"{result.domain} is not available."

    if result.pricing is None:
        return f"{result.domain} is available!"

    return f"{result.domain} is available!\n{format_price(result.pricing, provider_name)}"


def format_invalid_domain(text: str) -> str:
    return f'Error: "{text}" is not a valid domain name.'
