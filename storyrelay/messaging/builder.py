"""Constructors for the outbound messages the relay sends."""

from __future__ import annotations

from storyrelay.messaging.models import RichCardPrompt, TextReply

# The classifier matches inbound replies against these two values.
STORY_REQUEST_PAYLOAD = "GENERATE_STORY_REQUEST"
STORY_REQUEST_LABEL = "Generate Story"

STORY_CARD_TITLE = "Bedtime Story Generator"
STORY_CARD_DESCRIPTION = 'Tap "Generate Story" for a magical tale!'
STORY_CARD_IMAGE_URL = "https://cdn-icons-png.flaticon.com/512/2917/2917637.png"

_ECHO_TEMPLATE = "I received your message: {text}. Tap 'Generate Story' for a tale!"


def build_story_prompt(recipient: str, sender: str) -> RichCardPrompt:
    """Build the conversation-starting card with the story suggestion."""
    return RichCardPrompt(
        recipient=recipient,
        sender=sender,
        title=STORY_CARD_TITLE,
        description=STORY_CARD_DESCRIPTION,
        image_url=STORY_CARD_IMAGE_URL,
        suggestion_label=STORY_REQUEST_LABEL,
        suggestion_payload=STORY_REQUEST_PAYLOAD,
    )


def build_text_reply(recipient: str, sender: str, body: str) -> TextReply:
    """Wrap arbitrary text. Length limits are left to the provider."""
    return TextReply(recipient=recipient, sender=sender, body=body)


def build_echo_reply(recipient: str, sender: str, original_text: str) -> TextReply:
    return build_text_reply(
        recipient, sender, _ECHO_TEMPLATE.format(text=original_text),
    )
