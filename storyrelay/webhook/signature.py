"""Verification of Vonage signed webhook tokens.

Vonage signs each webhook call with an HS256 JWT carried in the
Authorization header, keyed with the account's signature secret.
"""

from __future__ import annotations

import jwt


class WebhookSignatureError(Exception):
    """Raised when a webhook token is missing or fails verification.

    ``detail`` is safe to return to the caller.
    """

    def __init__(self, detail: str, reason: str) -> None:
        super().__init__(detail)
        self.detail = detail
        self.reason = reason


def extract_bearer_token(authorization: str) -> str:
    """Return the token part of an ``Authorization: Bearer <token>`` header."""
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise WebhookSignatureError("No JWT token provided.", "missing_token")
    return token.strip()


def verify_webhook_token(token: str, secret: str) -> dict[str, object]:
    """Verify an HS256 webhook token and return its claims."""
    try:
        return jwt.decode(token, secret, algorithms=["HS256"])
    except jwt.InvalidSignatureError as e:
        raise WebhookSignatureError("Invalid JWT signature.", "invalid_signature") from e
    except jwt.InvalidTokenError as e:
        raise WebhookSignatureError("JWT verification failed.", "invalid_token") from e
