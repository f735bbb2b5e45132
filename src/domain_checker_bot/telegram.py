"""
Telegram Bot API helpers.

Replies are fire-and-forget: failures are logged here and reported as a
False return value, never raised.
"""

import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

TELEGRAM_API_BASE = "https://api.telegram.org"


@dataclass(frozen=True)
class TelegramConfig:
    bot_token: str


def load_telegram_config(bot_token: str | None) -> TelegramConfig | None:
    token = (bot_token or "").strip()
    if not token:
        return None
    return TelegramConfig(bot_token=token)


class TelegramNotifier:
    """Sends replies and chat actions through the Bot API."""

    def __init__(self, config: TelegramConfig, client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = client

    def _url(self, method: str) -> str:
        return f"{TELEGRAM_API_BASE}/bot{self._config.bot_token}/{method}"

    async def _call(self, method: str, payload: dict) -> bool:
        try:
            response = await self._client.post(self._url(method), json=payload)
        except httpx.HTTPError as e:
            logger.error("Telegram %s failed: %s: %s", method, type(e).__name__, e)
            return False

        if not response.is_success:
            body = (response.text or "").strip().replace("\n", " ")
            if len(body) > 300:
                body = body[:300] + "..."
            logger.error("Telegram %s error: %s %s", method, response.status_code, body)
            return False

        return True

    async def send_message(
        self,
        chat_id: int,
        text: str,
        reply_to_message_id: int | None = None,
    ) -> bool:
        """Send a text message, optionally as a reply to another message."""
        payload = {"chat_id": chat_id, "text": text}
        if reply_to_message_id:
            payload["reply_to_message_id"] = reply_to_message_id
        return await self._call("sendMessage", payload)

    async def send_chat_action(self, chat_id: int, action: str = "typing") -> bool:
        """Show an activity indicator such as "typing"."""
        return await self._call("sendChatAction", {"chat_id": chat_id, "action": action})
