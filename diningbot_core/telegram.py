"""
Telegram delivery client - async Bot API ``sendMessage`` over aiohttp.
"""
import asyncio
import logging
from typing import Any, Dict

import aiohttp

from .exceptions import DeliveryFailed

logger = logging.getLogger(__name__)


class TelegramClient:
    """
    Minimal async Telegram Bot API client.

    Implements the delivery capability ``send(recipient_id, text)``; failures
    surface as DeliveryFailed.
    """

    def __init__(
        self,
        token: str,
        api_base: str = "https://api.telegram.org",
        timeout: int = 30,
        parse_mode: str = "HTML",
    ):
        self.token = token
        self.api_base = api_base.rstrip('/')
        self.timeout = timeout
        self.parse_mode = parse_mode

    @property
    def send_message_url(self) -> str:
        return f"{self.api_base}/bot{self.token}/sendMessage"

    def build_payload(self, chat_id: int, text: str) -> Dict[str, Any]:
        return {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": self.parse_mode,
            "disable_web_page_preview": True,
        }

    async def send(self, chat_id: int, text: str) -> None:
        """
        Send a message to a single chat.

        Args:
            chat_id: Recipient chat/user ID
            text: Message body (HTML markup allowed)

        Raises:
            DeliveryFailed: on transport errors or a non-ok API response
        """
        payload = self.build_payload(chat_id, text)
        timeout_obj = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout_obj) as session:
                async with session.post(self.send_message_url, json=payload) as resp:
                    status = resp.status
                    data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise DeliveryFailed(f"Telegram request failed: {e}") from e

        if status != 200 or not isinstance(data, dict) or not data.get("ok"):
            description = data.get("description") if isinstance(data, dict) else None
            raise DeliveryFailed(f"Telegram rejected message (status {status}): {description or data}")
        logger.info(f"Delivered message to chat {chat_id} ({len(text)} chars)")
