"""
Shared pytest fixtures.

Async tests run on asyncio through the anyio pytest plugin. Time is faked:
FakeClock stands in for time.time and FakeSleep advances it instead of
waiting.
"""

import json

import httpx
import pytest

from domain_checker_bot.config import Settings
from domain_checker_bot.models import DomainCheckResult, Provider
from domain_checker_bot.store import MemoryStore


class FakeClock:
    """Callable clock (seconds since the epoch) that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSleep:
    """Async sleep replacement that records delays and advances a FakeClock."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        self.clock.advance(seconds)


class RecordingNotifier:
    """Notifier stand-in that keeps every outgoing message."""

    def __init__(self):
        self.messages: list[tuple[int, str, int | None]] = []
        self.actions: list[tuple[int, str]] = []

    async def send_message(self, chat_id, text, reply_to_message_id=None):
        self.messages.append((chat_id, text, reply_to_message_id))
        return True

    async def send_chat_action(self, chat_id, action="typing"):
        self.actions.append((chat_id, action))
        return True


class StubChecker:
    """DomainChecker returning a canned result and counting calls."""

    def __init__(self, available=False, provider=Provider.PORKBUN, pricing=None, error=None, tlds=None):
        self.provider = provider
        self.available = available
        self.pricing = pricing
        self.error = error
        self.tlds = tlds or []
        self.calls: list[str] = []

    async def check_availability(self, domain):
        self.calls.append(domain)
        return DomainCheckResult(
            domain=domain,
            available=self.available,
            provider=self.provider,
            pricing=self.pricing,
            error=self.error,
        )

    async def get_supported_tlds(self):
        return list(self.tlds)


def json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(data), headers={"Content-Type": "application/json"})


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler(request)``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def make_settings(**overrides) -> Settings:
    values = dict(
        provider=Provider.PORKBUN,
        host="127.0.0.1",
        port=8000,
        state=None,
        state_file=None,
        debug=False,
        telegram_bot_token="123:abc",
        porkbun_api_key="pk1_test",
        porkbun_secret_key="sk1_test",
        cloudflare_api_token="cf-token",
        cloudflare_account_id="acct123",
        cloudflare_email="owner@example.com",
        domainr_rapidapi_key="rapid-key",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_sleep(clock):
    return FakeSleep(clock)


@pytest.fixture
def store(clock):
    return MemoryStore(clock=clock)


@pytest.fixture
def notifier():
    return RecordingNotifier()
