"""ASGI middleware enforcing Vonage signed-webhook verification."""

from __future__ import annotations

import logging

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from storyrelay.webhook.signature import (
    WebhookSignatureError,
    extract_bearer_token,
    verify_webhook_token,
)

logger = logging.getLogger(__name__)


class SignatureMiddleware:
    """Rejects POSTs to protected webhook paths without a valid signed token."""

    def __init__(
        self,
        app: ASGIApp,
        secret: str,
        protected_paths: frozenset[str] = frozenset(),
    ) -> None:
        self.app = app
        self._secret = secret
        self._protected_paths = protected_paths

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        path = request.url.path

        if request.method != "POST" or path not in self._protected_paths:
            await self.app(scope, receive, send)
            return

        try:
            token = extract_bearer_token(request.headers.get("authorization", ""))
            verify_webhook_token(token, self._secret)
        except WebhookSignatureError as e:
            logger.warning(
                "Rejected webhook %s %s from %s: %s",
                request.method,
                path,
                request.client.host if request.client else None,
                e.reason,
            )
            response = JSONResponse(
                {"status": 401, "title": "Unauthorized", "detail": e.detail},
                status_code=401,
            )
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
