"""
Tests for configuration and secret lookup.

The macOS Keychain is switched off so results do not depend on the machine
running the tests.

Usage:
    pytest test_config.py
"""

import json

import pytest

from domain_checker_bot import config
from domain_checker_bot.config import (
    SECRET_NAMES,
    get_config_file,
    get_secret,
    get_secret_source,
    load_config,
    load_settings,
    mask_secret,
    parse_provider,
)
from domain_checker_bot.models import Provider

SETTING_VARS = [
    "DOMAIN_BOT_PROVIDER",
    "DOMAIN_BOT_HOST",
    "DOMAIN_BOT_PORT",
    "DOMAIN_BOT_STATE",
    "DOMAIN_BOT_STATE_FILE",
    "DOMAIN_BOT_DEBUG",
]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "_is_macos", lambda: False)
    monkeypatch.setattr(config.os, "name", "posix")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for name in SECRET_NAMES + SETTING_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def _write_config(data):
    path = get_config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


# =============================================================================
# Config file and secrets
# =============================================================================

def test_config_file_location(isolated_config):
    assert get_config_file() == isolated_config / "domain-checker-bot" / "config.json"


def test_missing_config_file_is_empty():
    assert load_config() == {}


def test_invalid_config_file_is_empty():
    path = get_config_file()
    path.parent.mkdir(parents=True)
    path.write_text("not json at all")

    assert load_config() == {}


def test_secret_from_config_file():
    _write_config({"porkbun_api_key": "pk1_from_file"})

    assert get_secret("PORKBUN_API_KEY") == "pk1_from_file"
    assert get_secret_source("PORKBUN_API_KEY") == "config file"


def test_environment_wins_over_config_file(monkeypatch):
    _write_config({"porkbun_api_key": "pk1_from_file"})
    monkeypatch.setenv("PORKBUN_API_KEY", "pk1_from_env")

    assert get_secret("PORKBUN_API_KEY") == "pk1_from_env"
    assert get_secret_source("PORKBUN_API_KEY") == "environment variable"


def test_keychain_wins_when_available(monkeypatch):
    monkeypatch.setattr(config, "_is_macos", lambda: True)
    monkeypatch.setattr(config, "_keychain_get", lambda service, account: f"{service}|{account}")
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "from-env")

    assert get_secret("TELEGRAM_BOT_TOKEN") == "domain-checker-bot.TELEGRAM_BOT_TOKEN|TELEGRAM_BOT_TOKEN"
    assert get_secret_source("TELEGRAM_BOT_TOKEN") == "macOS Keychain"


def test_unconfigured_secret():
    assert get_secret("DOMAINR_RAPIDAPI_KEY") is None
    assert get_secret_source("DOMAINR_RAPIDAPI_KEY") is None


@pytest.mark.parametrize("value, masked", [
    ("abcdefghijkl", "abcd****ijkl"),
    ("abcdef", "ab****"),
    ("abc", "***"),
])
def test_mask_secret(value, masked):
    assert mask_secret(value) == masked


# =============================================================================
# Settings
# =============================================================================

@pytest.mark.parametrize("value, provider", [
    (None, Provider.PORKBUN),
    ("", Provider.PORKBUN),
    ("porkbun", Provider.PORKBUN),
    ("Cloudflare", Provider.CLOUDFLARE),
    (" domainr ", Provider.DOMAINR),
])
def test_parse_provider(value, provider):
    assert parse_provider(value) == provider


def test_parse_provider_rejects_unknown():
    with pytest.raises(ValueError, match="Invalid provider 'godaddy'"):
        parse_provider("godaddy")


def test_load_settings_defaults():
    settings = load_settings()

    assert settings.provider == Provider.PORKBUN
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000
    assert settings.state is None
    assert settings.state_file is None
    assert settings.debug is False
    assert settings.telegram_bot_token is None


def test_load_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DOMAIN_BOT_PROVIDER", "domainr")
    monkeypatch.setenv("DOMAIN_BOT_PORT", "9090")
    monkeypatch.setenv("DOMAIN_BOT_STATE", "file")
    monkeypatch.setenv("DOMAIN_BOT_DEBUG", "1")
    monkeypatch.setenv("DOMAINR_RAPIDAPI_KEY", "rapid-key")
    _write_config({"telegram_bot_token": "123:abc"})

    settings = load_settings()

    assert settings.provider == Provider.DOMAINR
    assert settings.port == 9090
    assert settings.state == "file"
    assert settings.debug is True
    assert settings.domainr_rapidapi_key == "rapid-key"
    assert settings.telegram_bot_token == "123:abc"
