"""Inbound event parsing and classification.

parse_inbound_event turns an untyped webhook body into an InboundEvent;
classify decides which reply, if any, the event warrants. Both are pure.

Structured replies outside the story trigger are ignored, since they come
from other card types. Free text always gets an answer.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from storyrelay.messaging.builder import STORY_REQUEST_LABEL, STORY_REQUEST_PAYLOAD
from storyrelay.webhook.models import (
    GenerateStoryTrigger,
    Ignored,
    InboundEvent,
    PlainEcho,
    ReplyClassification,
)

RCS_CHANNEL = "rcs"
_TEXT_TRIGGER = STORY_REQUEST_LABEL.lower()


def parse_inbound_event(raw: Any) -> InboundEvent | None:
    """Parse a decoded JSON body. Returns None when the shape doesn't fit."""
    if not isinstance(raw, dict):
        return None
    try:
        return InboundEvent.model_validate(raw)
    except ValidationError:
        return None


def classify(event: InboundEvent | None) -> ReplyClassification:
    if event is None or event.channel != RCS_CHANNEL:
        return Ignored()
    if not event.sender:
        return Ignored()

    if event.message_type == "reply" and event.reply is not None:
        # Either field may be the one that round-trips through the provider
        if (
            event.reply.id == STORY_REQUEST_PAYLOAD
            or event.reply.title == STORY_REQUEST_LABEL
        ):
            return GenerateStoryTrigger(recipient=event.sender)
        return Ignored()

    # A text event without a text field is malformed and gets no reply
    if event.message_type == "text" and event.text is not None:
        if event.text.lower() == _TEXT_TRIGGER:
            return GenerateStoryTrigger(recipient=event.sender)
        return PlainEcho(recipient=event.sender, original_text=event.text)

    return Ignored()
