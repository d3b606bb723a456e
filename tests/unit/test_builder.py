"""Tests for outbound message construction and the Vonage wire schema."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from storyrelay.messaging.builder import (
    STORY_REQUEST_LABEL,
    STORY_REQUEST_PAYLOAD,
    build_echo_reply,
    build_story_prompt,
    build_text_reply,
)
from storyrelay.messaging.models import RichCardPrompt, TextReply


class TestStoryPrompt:

    def test_fixed_card_content(self) -> None:
        card = build_story_prompt("+1555", "StoryBot")
        assert isinstance(card, RichCardPrompt)
        assert card.recipient == "+1555"
        assert card.sender == "StoryBot"
        assert card.title == "Bedtime Story Generator"
        assert card.description == 'Tap "Generate Story" for a magical tale!'
        assert card.image_url == "https://cdn-icons-png.flaticon.com/512/2917/2917637.png"
        assert card.orientation == "VERTICAL"

    def test_suggestion_matches_trigger_constants(self) -> None:
        card = build_story_prompt("+1555", "StoryBot")
        assert card.suggestion_label == STORY_REQUEST_LABEL == "Generate Story"
        assert card.suggestion_payload == STORY_REQUEST_PAYLOAD == "GENERATE_STORY_REQUEST"

    def test_payload_schema(self) -> None:
        payload = build_story_prompt("+1555", "StoryBot").to_payload()
        assert payload["message_type"] == "custom"
        assert payload["channel"] == "rcs"
        assert payload["to"] == "+1555"
        assert payload["from"] == "StoryBot"
        card = payload["custom"]["contentMessage"]["richCard"]["standaloneCard"]
        assert card["cardOrientation"] == "VERTICAL"
        content = card["cardContent"]
        assert content["title"] == "Bedtime Story Generator"
        assert content["media"] == {
            "height": "MEDIUM",
            "contentInfo": {
                "fileUrl": "https://cdn-icons-png.flaticon.com/512/2917/2917637.png",
            },
        }
        assert content["suggestions"] == [
            {"reply": {"text": "Generate Story", "postbackData": "GENERATE_STORY_REQUEST"}},
        ]

    def test_card_is_immutable(self) -> None:
        card = build_story_prompt("+1555", "StoryBot")
        with pytest.raises(ValidationError):
            card.title = "changed"  # type: ignore[misc]


class TestTextReply:

    def test_payload_schema(self) -> None:
        reply = build_text_reply("+1555", "StoryBot", "Once upon a time")
        assert isinstance(reply, TextReply)
        assert reply.to_payload() == {
            "message_type": "text",
            "channel": "rcs",
            "to": "+1555",
            "from": "StoryBot",
            "text": "Once upon a time",
        }

    def test_no_length_validation(self) -> None:
        body = "z" * 10_000
        assert build_text_reply("+1555", "StoryBot", body).body == body

    def test_empty_values_pass_through(self) -> None:
        reply = build_text_reply("", "", "")
        assert reply.recipient == ""
        assert reply.body == ""

    def test_echo_reply_wording(self) -> None:
        reply = build_echo_reply("+1555", "StoryBot", "hello")
        assert reply.body == "I received your message: hello. Tap 'Generate Story' for a tale!"

    def test_echo_reply_keeps_braces_verbatim(self) -> None:
        reply = build_echo_reply("+1555", "StoryBot", "{text} {0}")
        assert reply.body == "I received your message: {text} {0}. Tap 'Generate Story' for a tale!"
