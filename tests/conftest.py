"""Shared test fixtures for storyrelay."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

import jwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from storyrelay.config import RelaySettings
from storyrelay.webhook.models import InboundEvent

SIGNATURE_SECRET = "test-signature-secret-0123456789abcdef"


@pytest.fixture(scope="session")
def rsa_key_pem() -> str:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture
def private_key_file(tmp_path: Path, rsa_key_pem: str) -> Path:
    path = tmp_path / "private.key"
    path.write_text(rsa_key_pem)
    return path


@pytest.fixture
def settings(rsa_key_pem: str) -> RelaySettings:
    return make_settings(private_key=rsa_key_pem)


# --- Factory functions for test data ---


def make_settings(**kwargs: Any) -> RelaySettings:
    """Factory for RelaySettings with sensible defaults."""
    defaults: dict[str, Any] = {
        "phone_number": "447700900000",
        "rcs_sender_id": "StoryBot",
        "gemini_api_key": "gemini-test-key",
        "signature_secret": SIGNATURE_SECRET,
        "application_id": "app-123",
        "private_key": "unused",
    }
    defaults.update(kwargs)
    return RelaySettings(**defaults)


def make_inbound_event(**kwargs: Any) -> InboundEvent:
    """Factory for InboundEvent; keys use the webhook's JSON names."""
    defaults: dict[str, Any] = {
        "channel": "rcs",
        "message_type": "text",
        "from": "+1555",
        "text": "hello",
    }
    defaults.update(kwargs)
    return InboundEvent.model_validate(defaults)


def make_signed_headers(secret: str = SIGNATURE_SECRET, **claims: Any) -> dict[str, str]:
    """Authorization header carrying a Vonage-style signed webhook token."""
    payload: dict[str, Any] = {
        "iat": int(time.time()),
        "jti": "test-jti",
        "iss": "Vonage",
    }
    payload.update(claims)
    token = jwt.encode(payload, secret, algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}
