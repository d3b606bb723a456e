"""Outbound RCS messaging: payload models, builders and the Vonage client."""

from storyrelay.messaging.builder import (
    STORY_REQUEST_LABEL,
    STORY_REQUEST_PAYLOAD,
    build_echo_reply,
    build_story_prompt,
    build_text_reply,
)
from storyrelay.messaging.models import (
    OutboundMessage,
    RichCardPrompt,
    SendResult,
    TextReply,
)
from storyrelay.messaging.vonage import VonageMessenger

__all__ = [
    "STORY_REQUEST_LABEL",
    "STORY_REQUEST_PAYLOAD",
    "OutboundMessage",
    "RichCardPrompt",
    "SendResult",
    "TextReply",
    "VonageMessenger",
    "build_echo_reply",
    "build_story_prompt",
    "build_text_reply",
]
