"""Outbound message models rendered to the Vonage Messages API schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict

_CHANNEL = "rcs"


class RichCardPrompt(BaseModel):
    """Standalone RCS rich card carrying a single reply suggestion."""

    model_config = ConfigDict(frozen=True)

    recipient: str
    sender: str
    title: str
    description: str
    image_url: str
    suggestion_label: str
    suggestion_payload: str
    orientation: str = "VERTICAL"
    media_height: str = "MEDIUM"

    def to_payload(self) -> dict[str, Any]:
        card_content = {
            "title": self.title,
            "description": self.description,
            "media": {
                "height": self.media_height,
                "contentInfo": {"fileUrl": self.image_url},
            },
            "suggestions": [
                {
                    "reply": {
                        "text": self.suggestion_label,
                        "postbackData": self.suggestion_payload,
                    },
                },
            ],
        }
        return {
            "message_type": "custom",
            "channel": _CHANNEL,
            "to": self.recipient,
            "from": self.sender,
            "custom": {
                "contentMessage": {
                    "richCard": {
                        "standaloneCard": {
                            "cardOrientation": self.orientation,
                            "cardContent": card_content,
                        },
                    },
                },
            },
        }


class TextReply(BaseModel):
    """Plain RCS text message."""

    model_config = ConfigDict(frozen=True)

    recipient: str
    sender: str
    body: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "message_type": "text",
            "channel": _CHANNEL,
            "to": self.recipient,
            "from": self.sender,
            "text": self.body,
        }


OutboundMessage = RichCardPrompt | TextReply


@dataclass(frozen=True)
class SendResult:
    """Outcome of a single send attempt."""

    ok: bool
    status_code: int | None = None
    message_uuid: str | None = None
    error: str | None = None
