"""Relay configuration, built once at startup and injected everywhere else."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from storyrelay.generation.story import DEFAULT_MODEL, GEMINI_API_BASE
from storyrelay.messaging.vonage import VONAGE_MESSAGES_URL

# Environment variable -> settings field
_REQUIRED_ENV = {
    "PHONE_NUMBER": "phone_number",
    "RCS_SENDER_ID": "rcs_sender_id",
    "GEMINI_API_KEY": "gemini_api_key",
    "VONAGE_API_SIGNATURE_SECRET": "signature_secret",
    "VONAGE_APPLICATION_ID": "application_id",
    "VONAGE_PRIVATE_KEY": "private_key",
}


class ConfigError(ValueError):
    """Raised when required configuration is missing or unreadable."""


class RelaySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    phone_number: str
    rcs_sender_id: str
    gemini_api_key: str
    signature_secret: str
    application_id: str
    private_key: str = Field(repr=False)
    gemini_model: str = DEFAULT_MODEL
    gemini_api_base: str = GEMINI_API_BASE
    messages_url: str = VONAGE_MESSAGES_URL
    request_timeout: float = Field(default=30.0, gt=0)
    port: int = Field(default=3000, gt=0, lt=65536)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RelaySettings:
        """Build settings from environment variables.

        VONAGE_PRIVATE_KEY holds the path to the application's PEM key file;
        its contents are read here.

        Raises:
            ConfigError: If any required variable is missing or the key
                file cannot be read.
        """
        env = os.environ if environ is None else environ
        missing = [name for name in _REQUIRED_ENV if not env.get(name)]
        if missing:
            raise ConfigError(
                f"Missing required environment variable(s): {', '.join(missing)}",
            )

        key_path = Path(env["VONAGE_PRIVATE_KEY"])
        try:
            private_key = key_path.read_text()
        except OSError as e:
            raise ConfigError(f"Cannot read private key file {key_path}: {e}") from e
        try:
            serialization.load_pem_private_key(private_key.encode(), password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise ConfigError(f"Invalid private key in {key_path}: {e}") from e

        values: dict[str, object] = {
            field: env[name] for name, field in _REQUIRED_ENV.items()
        }
        values["private_key"] = private_key
        optional = {
            "GEMINI_MODEL": "gemini_model",
            "GEMINI_API_BASE": "gemini_api_base",
            "VONAGE_MESSAGES_URL": "messages_url",
            "REQUEST_TIMEOUT": "request_timeout",
            "PORT": "port",
        }
        for name, field in optional.items():
            if env.get(name):
                values[field] = env[name]
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e
