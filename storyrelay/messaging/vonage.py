"""Vonage Messages API client.

Sends RCS messages with a single attempt and reports the outcome as a
SendResult instead of raising. Requests are authenticated with a short-lived
application JWT signed with the application's RSA private key.
"""

from __future__ import annotations

import logging
import time
import uuid

import httpx
import jwt

from storyrelay.messaging.models import OutboundMessage, SendResult

logger = logging.getLogger(__name__)

VONAGE_MESSAGES_URL = "https://api.nexmo.com/v1/messages"
_TOKEN_TTL_SECONDS = 15 * 60


class VonageMessenger:
    """Sends outbound messages through the Vonage Messages API."""

    def __init__(
        self,
        application_id: str,
        private_key: str,
        messages_url: str = VONAGE_MESSAGES_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._application_id = application_id
        self._private_key = private_key
        self._messages_url = messages_url
        self._timeout = timeout
        self._transport = transport

    def _generate_token(self) -> str:
        now = int(time.time())
        claims = {
            "application_id": self._application_id,
            "iat": now,
            "exp": now + _TOKEN_TTL_SECONDS,
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(claims, self._private_key, algorithm="RS256")

    async def send(self, message: OutboundMessage) -> SendResult:
        """Send one message. Never raises for transport or provider errors."""
        try:
            token = self._generate_token()
        except (jwt.PyJWTError, ValueError, TypeError) as exc:
            return SendResult(ok=False, error=f"Cannot sign request: {exc}")

        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self._timeout, verify=True,
            ) as client:
                resp = await client.post(
                    self._messages_url, json=message.to_payload(), headers=headers,
                )
        except httpx.HTTPError as exc:
            return SendResult(ok=False, error=str(exc) or type(exc).__name__)

        if resp.status_code >= 400:
            return SendResult(
                ok=False, status_code=resp.status_code, error=resp.text,
            )

        message_uuid: str | None = None
        try:
            message_uuid = resp.json().get("message_uuid")
        except (ValueError, AttributeError):
            logger.debug("Vonage accepted message without a JSON body")

        return SendResult(
            ok=True, status_code=resp.status_code, message_uuid=message_uuid,
        )
