"""
Domain Checker Bot

A Telegram bot (and MCP server) that checks domain name availability and
pricing with Porkbun, Cloudflare Registrar or Domainr.
"""

__version__ = "0.2.0"


def main():
    """Main entry point for the CLI."""
    import sys

    # Handle CLI arguments before importing heavy dependencies
    if "--help" in sys.argv or "-h" in sys.argv:
        print_help()
        sys.exit(0)

    if "--version" in sys.argv or "-V" in sys.argv:
        print(f"domain-checker-bot {__version__}")
        sys.exit(0)

    if "--show-config" in sys.argv:
        show_config()
        sys.exit(0)

    import logging
    import os

    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("DOMAIN_BOT_DEBUG") else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from .server import get_services, mcp

    if "--stdio" in sys.argv:
        mcp.run()
        return

    # Default: serve the webhook (and MCP over streamable HTTP)
    settings = get_services().settings
    mcp.settings.host = settings.host
    mcp.settings.port = settings.port
    mcp.run(transport="streamable-http")


def print_help():
    """Print help message."""
    print(f"""domain-checker-bot {__version__}

A Telegram bot that checks domain name availability and pricing.

Usage:
    domain-checker-bot                Serve the Telegram webhook at "/" (and MCP at "/mcp")
    domain-checker-bot --stdio        Run only the MCP tools over stdio
    domain-checker-bot --show-config  Show current configuration
    domain-checker-bot --version      Show version
    domain-checker-bot --help         Show this help

Configuration:
    DOMAIN_BOT_PROVIDER     porkbun (default), cloudflare or domainr
    DOMAIN_BOT_HOST         Listen address (default 0.0.0.0)
    DOMAIN_BOT_PORT         Listen port (default 8000)
    DOMAIN_BOT_STATE        "file" to keep cache/backoff state on disk
    DOMAIN_BOT_STATE_FILE   Explicit state file path (implies file state)
    DOMAIN_BOT_DEBUG        Verbose logging, including HTTP requests

Secrets (macOS Keychain, environment variable, or config file):
    TELEGRAM_BOT_TOKEN
    PORKBUN_API_KEY, PORKBUN_SECRET_KEY
    CLOUDFLARE_API_TOKEN, CLOUDFLARE_ACCOUNT_ID, CLOUDFLARE_EMAIL
    DOMAINR_RAPIDAPI_KEY

    Config file keys are the lowercase names, e.g.:
       {{
         "telegram_bot_token": "123456:ABC...",
         "porkbun_api_key": "pk1_...",
         "porkbun_secret_key": "sk1_..."
       }}

Telegram Setup:
    Point the bot's webhook at this server:
    curl "https://api.telegram.org/bot<token>/setWebhook?url=https://your.host/"
""")


def show_config():
    """Show current configuration."""
    from .config import (
        SECRET_NAMES,
        get_config_file,
        get_secret,
        get_secret_source,
        load_settings,
        mask_secret,
    )

    print("Configuration")
    print("=" * 50)
    print()

    config_file = get_config_file()
    print(f"Config file: {config_file}")
    print(f"  Exists: {config_file.exists()}")
    print()

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"✗ {e}")
        return

    print(f"Provider: {settings.provider.display_name}")
    print(f"Listen:   {settings.host}:{settings.port}")
    if settings.state_file or (settings.state or "").lower() == "file":
        print(f"State:    file ({settings.state_file or 'default cache path'})")
    else:
        print("State:    in-memory")
    print()

    for name in SECRET_NAMES:
        value = get_secret(name)
        if value:
            print(f"{name}: {mask_secret(value)}")
            print(f"  Source: {get_secret_source(name)}")
        else:
            print(f"{name}: Not configured")
