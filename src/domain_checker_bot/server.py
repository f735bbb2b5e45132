"""
Domain Checker Bot Server

A FastMCP server that answers domain availability questions:
- Telegram webhook at "/" (GET health check, POST updates)
- MCP tools for checking a domain and listing supported TLDs

Registrar: Porkbun (default), Cloudflare Registrar or Domainr, chosen with
DOMAIN_BOT_PROVIDER.
"""

import json
import logging
import os
from dataclasses import dataclass

import httpx
from mcp.server.fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import Response

from .config import Settings, load_settings

# Suppress httpx request logging by default (bot tokens end up in URLs)
# Set DOMAIN_BOT_DEBUG=1 to enable verbose HTTP logging
if not os.environ.get("DOMAIN_BOT_DEBUG"):
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
from .domains import is_valid_domain
from .formatting import format_invalid_domain, format_result
from .models import DomainChecker
from .providers import create_checker, create_http_client
from .store import open_store
from .telegram import TelegramNotifier, load_telegram_config
from .webhook import Notifier, dispatch_update, webhook_response

logger = logging.getLogger(__name__)

# Server version
VERSION = "0.2.0"

# Initialize the MCP server
mcp = FastMCP("domain-checker-bot")
mcp._mcp_server.version = VERSION


# =============================================================================
# Services (built on first use)
# =============================================================================

@dataclass
class Services:
    settings: Settings
    client: httpx.AsyncClient
    checker: DomainChecker
    notifier: Notifier | None


_services: Services | None = None


def get_services() -> Services:
    """Build the checker, notifier and shared HTTP client once per process."""
    global _services
    if _services is None:
        settings = load_settings()
        client = create_http_client()
        store = open_store(settings.state, settings.state_file)
        checker = create_checker(settings, client, store)

        notifier = None
        if telegram_config := load_telegram_config(settings.telegram_bot_token):
            notifier = TelegramNotifier(telegram_config, client)
        else:
            logger.warning("TELEGRAM_BOT_TOKEN not configured; webhook replies are disabled")

        logger.info("Using %s for domain checks", settings.provider.display_name)
        _services = Services(settings=settings, client=client, checker=checker, notifier=notifier)
    return _services


def set_services(services: Services | None) -> None:
    """Replace the process-wide services (tests, embedding)."""
    global _services
    _services = services


# =============================================================================
# Telegram Webhook
# =============================================================================

def _dispatch(update: dict) -> None:
    services = get_services()
    if services.notifier is None:
        logger.error("Dropping update %s: no Telegram bot token", update.get("update_id"))
        return
    dispatch_update(update, services.checker, services.notifier)


@mcp.custom_route("/", methods=["GET", "POST"])
async def telegram_webhook(request: Request) -> Response:
    """Telegram webhook endpoint and health check."""
    return await webhook_response(request, _dispatch)


# =============================================================================
# MCP Tools
# =============================================================================

@mcp.tool()
def version() -> str:
    """
    Get the version of the Domain Checker Bot server.

    Returns:
        Version string including server name and version number.
    """
    return f"Domain Checker Bot version {VERSION}"


@mcp.tool()
async def check_domain(domain: str) -> str:
    """
    Check whether a domain name can be registered, with pricing if the
    registrar provides it.

    Args:
        domain: Full domain name, e.g. "example.com" or "example.co.uk"

    Returns:
        JSON with domain, available, provider, optional pricing and error,
        plus the chat-style "message" text.
    """
    domain = (domain or "").strip()
    if not is_valid_domain(domain):
        return json.dumps({"error": format_invalid_domain(domain)})

    result = await get_services().checker.check_availability(domain.lower())

    response = result.to_dict()
    response["message"] = format_result(result)
    return json.dumps(response)


@mcp.tool()
async def get_supported_tlds() -> str:
    """
    List the TLDs the configured registrar sells.

    Returns:
        JSON with provider and tlds. An empty list from Domainr means every
        TLD is accepted.
    """
    checker = get_services().checker
    tlds = await checker.get_supported_tlds()
    return json.dumps({
        "provider": checker.provider.value,
        "tlds": tlds,
    })
