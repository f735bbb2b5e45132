#!/usr/bin/env python3
"""
CLI tool to check domain names against the configured registrar, exactly as
the bot would answer them.

Usage:
    python check_domains.py example.com example.net
    python check_domains.py coolstartup --tlds com,io,co.uk
    python check_domains.py example.com --provider cloudflare --json

Credentials come from the usual places (Keychain, environment, config file);
see `domain-checker-bot --show-config`.
"""

import argparse
import asyncio
import json
import sys
from dataclasses import replace

from domain_checker_bot.config import load_settings, parse_provider
from domain_checker_bot.domains import is_valid_domain
from domain_checker_bot.formatting import format_invalid_domain, format_result
from domain_checker_bot.providers import create_checker, create_http_client
from domain_checker_bot.store import open_store

DEFAULT_TLDS = ["com", "io", "ai", "co", "app", "dev", "net", "org"]


def expand_names(names: list[str], tlds: list[str]) -> list[str]:
    """Expand base names with each TLD; full domains pass through. Drops duplicates."""
    domains = []
    for name in names:
        name = name.strip().lower()
        if "." in name:
            domains.append(name)
        else:
            domains.extend(f"{name}.{tld}" for tld in tlds)
    return list(dict.fromkeys(domains))


async def check_all(domains: list[str], settings) -> list[dict]:
    """Check domains one after another, returning JSON-ready dicts."""
    store = open_store(settings.state, settings.state_file)
    results = []

    async with create_http_client() as client:
        checker = create_checker(settings, client, store)
        for domain in domains:
            if not is_valid_domain(domain):
                results.append({"domain": domain, "message": format_invalid_domain(domain)})
                continue

            result = await checker.check_availability(domain)
            data = result.to_dict()
            data["message"] = format_result(result)
            results.append(data)

    return results


def main():
    parser = argparse.ArgumentParser(
        description="Check domain name availability with Porkbun, Cloudflare or Domainr",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s example.com example.net
    %(prog)s coolstartup --tlds com,io,ai
    %(prog)s myapp --provider domainr
        """
    )
    parser.add_argument(
        "names",
        nargs="+",
        help="Domain names or base names to check"
    )
    parser.add_argument(
        "--tlds",
        type=str,
        default=None,
        help=f"Comma-separated list of TLDs for base names (default: {','.join(DEFAULT_TLDS)})"
    )
    parser.add_argument(
        "--provider",
        type=str,
        default=None,
        help="porkbun, cloudflare or domainr (default: DOMAIN_BOT_PROVIDER or porkbun)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON"
    )

    args = parser.parse_args()

    try:
        settings = load_settings()
        if args.provider:
            settings = replace(settings, provider=parse_provider(args.provider))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    tlds = [t.strip().lstrip(".") for t in args.tlds.split(",")] if args.tlds else DEFAULT_TLDS
    domains = expand_names(args.names, tlds)

    results = asyncio.run(check_all(domains, settings))

    if args.json:
        print(json.dumps(results, indent=2))
        return

    print(f"Provider: {settings.provider.display_name}")
    print()
    for data in results:
        print(data["message"])
        print()

    available = sum(1 for data in results if data.get("available"))
    print(f"Summary: {available}/{len(results)} available")


if __name__ == "__main__":
    main()
