"""Domain name validation and TLD extraction."""

import re

# Labels of 1-63 alphanumerics/hyphens (no leading/trailing hyphen),
# at least one dot, alphabetic TLD of 2+ characters
DOMAIN_RE = re.compile(
    r"^([a-zA-Z0-9]([a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$"
)

# Second-level registries treated as a single TLD
MULTI_PART_TLDS = ["co.uk", "co.jp", "com.au", "co.nz", "co.za"]


def is_valid_domain(text: str) -> bool:
    """Check whether text looks like a registrable domain name."""
    return DOMAIN_RE.match(text.strip()) is not None


def extract_tld(domain: str) -> str:
    """
    Extract the TLD from a domain name.

    "example.com" -> "com", "example.co.uk" -> "co.uk"
    """
    parts = domain.strip().lower().split(".")

    if len(parts) >= 3:
        last_two = ".".join(parts[-2:])
        if last_two in MULTI_PART_TLDS:
            return last_two

    return parts[-1]


def normalize_tlds(tlds) -> list[str]:
    """Lowercase, strip leading dots, drop empties; keeps first-seen order."""
    cleaned = []
    for tld in tlds:
        if not isinstance(tld, str):
            continue
        tld = tld.strip().lower().lstrip(".")
        if tld:
            cleaned.append(tld)
    return list(dict.fromkeys(cleaned))
