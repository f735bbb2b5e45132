"""
Configuration for the Domain Checker Bot.

Secrets (API keys, bot token) lookup order:
1. macOS Keychain (if on macOS)
2. Environment variable
3. Config file (~/.config/domain-checker-bot/config.json)

Plain settings (provider choice, listen address, state backend) come from
environment variables only.
"""

import json
import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from .models import Provider

# Keychain service prefix; each secret is stored as "<prefix>.<env var name>"
KEYCHAIN_SERVICE_PREFIX = "domain-checker-bot"

SECRET_NAMES = [
    "TELEGRAM_BOT_TOKEN",
    "PORKBUN_API_KEY",
    "PORKBUN_SECRET_KEY",
    "CLOUDFLARE_API_TOKEN",
    "CLOUDFLARE_ACCOUNT_ID",
    "CLOUDFLARE_EMAIL",
    "DOMAINR_RAPIDAPI_KEY",
]

DEFAULT_PROVIDER = Provider.PORKBUN
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


def _is_macos() -> bool:
    """Check if running on macOS."""
    return sys.platform == "darwin"


def _keychain_get(service: str, account: str) -> str | None:
    """Get a password from macOS Keychain."""
    try:
        result = subprocess.run(
            ["security", "find-generic-password", "-s", service, "-a", account, "-w"],
            capture_output=True,
            text=True
        )
        if result.returncode == 0 and result.stdout.strip():
            return result.stdout.strip()
    except (subprocess.SubprocessError, FileNotFoundError):
        pass
    return None


def get_config_dir() -> Path:
    """Get the config directory for this app."""
    if os.name == 'nt':  # Windows
        base = Path(os.environ.get('APPDATA', Path.home()))
    else:  # macOS, Linux
        base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))

    return base / 'domain-checker-bot'


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / 'config.json'


def load_config() -> dict:
    """Read the config file, returning {} if missing or invalid."""
    try:
        config_file = get_config_file()
        if config_file.exists():
            config = json.loads(config_file.read_text())
            if isinstance(config, dict):
                return config
    except (json.JSONDecodeError, OSError):
        pass
    return {}


def _config_key(name: str) -> str:
    # Config file uses lowercase keys: PORKBUN_API_KEY -> porkbun_api_key
    return name.lower()


def get_secret(name: str) -> str | None:
    """
    Get a secret from available sources.

    Lookup order:
    1. macOS Keychain (if on macOS)
    2. Environment variable
    3. Config file
    """
    if _is_macos():
        if value := _keychain_get(f"{KEYCHAIN_SERVICE_PREFIX}.{name}", name):
            return value

    if value := os.environ.get(name):
        return value

    if value := load_config().get(_config_key(name)):
        return str(value)

    return None


def get_secret_source(name: str) -> str | None:
    """Determine where a secret is stored (for display purposes)."""
    if _is_macos():
        if _keychain_get(f"{KEYCHAIN_SERVICE_PREFIX}.{name}", name):
            return "macOS Keychain"

    if os.environ.get(name):
        return "environment variable"

    if load_config().get(_config_key(name)):
        return "config file"

    return None


def mask_secret(value: str) -> str:
    """Mask a secret for display."""
    if len(value) > 8:
        return value[:4] + "*" * (len(value) - 8) + value[-4:]
    elif len(value) > 4:
        return value[:2] + "*" * (len(value) - 2)
    else:
        return "*" * len(value)


@dataclass(frozen=True)
class Settings:
    provider: Provider
    host: str
    port: int
    state: str | None
    state_file: str | None
    debug: bool
    telegram_bot_token: str | None
    porkbun_api_key: str | None
    porkbun_secret_key: str | None
    cloudflare_api_token: str | None
    cloudflare_account_id: str | None
    cloudflare_email: str | None
    domainr_rapidapi_key: str | None


def parse_provider(value: str | None) -> Provider:
    """Parse a provider name; empty means the default provider."""
    if not value:
        return DEFAULT_PROVIDER
    try:
        return Provider(value.strip().lower())
    except ValueError:
        valid = ", ".join(p.value for p in Provider)
        raise ValueError(f"Invalid provider '{value}'. Use one of: {valid}") from None


def load_settings() -> Settings:
    """Collect settings from the environment and secret stores."""
    return Settings(
        provider=parse_provider(os.environ.get("DOMAIN_BOT_PROVIDER")),
        host=os.environ.get("DOMAIN_BOT_HOST", DEFAULT_HOST),
        port=int(os.environ.get("DOMAIN_BOT_PORT", DEFAULT_PORT)),
        state=os.environ.get("DOMAIN_BOT_STATE"),
        state_file=os.environ.get("DOMAIN_BOT_STATE_FILE"),
        debug=bool(os.environ.get("DOMAIN_BOT_DEBUG")),
        telegram_bot_token=get_secret("TELEGRAM_BOT_TOKEN"),
        porkbun_api_key=get_secret("PORKBUN_API_KEY"),
        porkbun_secret_key=get_secret("PORKBUN_SECRET_KEY"),
        cloudflare_api_token=get_secret("CLOUDFLARE_API_TOKEN"),
        cloudflare_account_id=get_secret("CLOUDFLARE_ACCOUNT_ID"),
        cloudflare_email=get_secret("CLOUDFLARE_EMAIL"),
        domainr_rapidapi_key=get_secret("DOMAINR_RAPIDAPI_KEY"),
    )
