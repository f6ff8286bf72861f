# This project was developed with assistance from AI tools.
"""Outbound chat delivery through the LINE Messaging API.

The client is an explicit capability: built once at startup, handed to the
conversation engine and the update orchestrator, and swapped for a fake in
tests. Each call is a single attempt; callers decide on fallbacks.

Delivery is active when both LINE_CHANNEL_ACCESS_TOKEN and
LINE_CHANNEL_SECRET are set. Without them ``is_configured`` is False and
callers skip the network entirely.
"""

import base64
import hashlib
import hmac
import logging
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

REPLY_PATH = "/v2/bot/message/reply"
PUSH_PATH = "/v2/bot/message/push"


class DeliveryError(Exception):
    """A reply or push was not accepted by the messaging platform."""

    def __init__(self, message: str, *, status_code: int | None = None, body: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class DeliveryClient(Protocol):
    @property
    def is_configured(self) -> bool: ...

    async def reply(self, reply_token: str, text: str) -> None: ...

    async def push(self, channel_id: str, text: str) -> None: ...


def _text_messages(text: str) -> list[dict[str, str]]:
    return [{"type": "text", "text": text}]


def compute_signature(channel_secret: str, body: bytes) -> str:
    """Base64 HMAC-SHA256 of the raw body, as sent in ``X-Line-Signature``."""
    digest = hmac.new(channel_secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(channel_secret: str, body: bytes, signature: str | None) -> bool:
    """Check an ``X-Line-Signature`` header against the raw request body."""
    if not channel_secret or not signature:
        return False
    return hmac.compare_digest(compute_signature(channel_secret, body), signature)


class LineMessagingClient:
    """Async LINE Messaging API client (reply + push)."""

    def __init__(
        self,
        access_token: str,
        channel_secret: str,
        *,
        base_url: str = "https://api.line.me",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._access_token = access_token
        self._channel_secret = channel_secret
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Authorization": f"Bearer {access_token}"},
        )

    @classmethod
    def from_settings(cls, settings) -> "LineMessagingClient":
        return cls(
            settings.LINE_CHANNEL_ACCESS_TOKEN,
            settings.LINE_CHANNEL_SECRET,
            base_url=settings.LINE_API_BASE_URL,
            timeout=settings.LINE_TIMEOUT_SECONDS,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._access_token and self._channel_secret)

    async def reply(self, reply_token: str, text: str) -> None:
        await self._post(
            REPLY_PATH,
            {"replyToken": reply_token, "messages": _text_messages(text)},
            stage="reply",
        )

    async def push(self, channel_id: str, text: str) -> None:
        await self._post(
            PUSH_PATH,
            {"to": channel_id, "messages": _text_messages(text)},
            stage="push",
        )

    async def _post(self, path: str, payload: dict[str, Any], *, stage: str) -> None:
        try:
            response = await self._http.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise DeliveryError(f"LINE {stage} request failed: {exc}") from exc

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise DeliveryError(
                f"LINE {stage} rejected with HTTP {response.status_code}",
                status_code=response.status_code,
                body=body,
            )

    async def aclose(self) -> None:
        await self._http.aclose()


def log_delivery_status(client: DeliveryClient) -> None:
    """Log whether outbound delivery is active. Call at startup."""
    if client.is_configured:
        logger.info("LINE delivery active (reply + push)")
    else:
        logger.warning(
            "LINE credentials are missing -- replies and pushes are logged but not sent. "
            "Set LINE_CHANNEL_ACCESS_TOKEN and LINE_CHANNEL_SECRET to enable."
        )
