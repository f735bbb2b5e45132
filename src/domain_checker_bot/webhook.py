"""
Telegram webhook handling.

An update carrying a text message is treated as a domain query: the text is
validated, checked with the configured registrar and answered in the same
chat. The HTTP handler acknowledges Telegram immediately and runs the
check-and-reply pipeline as a detached task.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from typing import Any, Protocol

from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from .domains import is_valid_domain
from .formatting import format_invalid_domain, format_result
from .models import DomainChecker

logger = logging.getLogger(__name__)

HEALTH_TEXT = "Domain Checker Bot is running!"

# Strong references to in-flight tasks; the event loop only keeps weak ones
_background_tasks: set[asyncio.Task] = set()


class Notifier(Protocol):
    async def send_message(self, chat_id: int, text: str, reply_to_message_id: int | None = None) -> bool:
        ...

    async def send_chat_action(self, chat_id: int, action: str = "typing") -> bool:
        ...


async def handle_update(update: dict[str, Any], checker: DomainChecker, notifier: Notifier) -> None:
    """Answer one Telegram update."""
    message = update.get("message")
    if not isinstance(message, dict) or not isinstance(message.get("text"), str):
        return

    chat_id = message["chat"]["id"]
    message_id = message.get("message_id")
    text = message["text"].strip()

    if not is_valid_domain(text):
        await notifier.send_message(chat_id, format_invalid_domain(text), message_id)
        return

    await notifier.send_chat_action(chat_id, "typing")

    result = await checker.check_availability(text.lower())
    await notifier.send_message(chat_id, format_result(result), message_id)


def _log_task_failure(task: asyncio.Task) -> None:
    _background_tasks.discard(task)
    if task.cancelled():
        return
    if exc := task.exception():
        logger.error("Error handling webhook update", exc_info=exc)


def dispatch_update(update: dict[str, Any], checker: DomainChecker, notifier: Notifier) -> asyncio.Task:
    """Schedule handle_update without waiting for it."""
    task = asyncio.create_task(handle_update(update, checker, notifier))
    _background_tasks.add(task)
    task.add_done_callback(_log_task_failure)
    return task


async def webhook_response(request: Request, dispatch: Callable[[dict], Any]) -> Response:
    """
    HTTP entry point.

    GET is a health check; POST takes a Telegram update, hands it to
    ``dispatch`` and returns 200 straight away.
    """
    if request.method == "GET":
        return PlainTextResponse(HEALTH_TEXT)

    if request.method != "POST":
        return PlainTextResponse("Not Found", status_code=404)

    try:
        update = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.error("Error parsing webhook: %s", e)
        return PlainTextResponse("Bad Request", status_code=400)

    if not isinstance(update, dict):
        logger.error("Ignoring non-object webhook payload: %r", update)
        return PlainTextResponse("Bad Request", status_code=400)

    dispatch(update)
    return PlainTextResponse("OK")
