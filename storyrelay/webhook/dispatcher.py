"""Dispatch coordinator for inbound RCS events.

Pipeline per inbound event:
1. Classify (pure)
2. Generate a story when triggered (falls back on failure)
3. Build the reply
4. Send once; failures are logged, never raised
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from storyrelay.messaging.builder import (
    build_echo_reply,
    build_story_prompt,
    build_text_reply,
)
from storyrelay.webhook.classifier import classify
from storyrelay.webhook.models import (
    GenerateStoryTrigger,
    InboundEvent,
    PlainEcho,
    ReplyClassification,
)

if TYPE_CHECKING:
    from storyrelay.generation.story import StoryGenerator
    from storyrelay.messaging.models import OutboundMessage, SendResult
    from storyrelay.messaging.vonage import VonageMessenger

logger = logging.getLogger(__name__)


class StoryDispatcher:
    """Routes each classified event to exactly one outbound send, or none."""

    def __init__(
        self,
        sender_id: str,
        generator: StoryGenerator,
        messenger: VonageMessenger,
    ) -> None:
        self._sender_id = sender_id
        self._generator = generator
        self._messenger = messenger

    async def handle_inbound(self, event: InboundEvent | None) -> ReplyClassification:
        classification = classify(event)

        if isinstance(classification, GenerateStoryTrigger):
            story = await self._generator.generate_story()
            await self._send(
                build_text_reply(classification.recipient, self._sender_id, story.text),
            )
        elif isinstance(classification, PlainEcho):
            await self._send(
                build_echo_reply(
                    classification.recipient,
                    self._sender_id,
                    classification.original_text,
                ),
            )
        else:
            logger.debug(
                "Ignoring inbound event (channel=%s, message_type=%s)",
                event.channel if event else None,
                event.message_type if event else None,
            )

        return classification

    async def trigger_initial_prompt(self, recipient: str) -> SendResult:
        """Send the story card that starts a conversation."""
        return await self._send(build_story_prompt(recipient, self._sender_id))

    async def _send(self, message: OutboundMessage) -> SendResult:
        result = await self._messenger.send(message)
        kind = type(message).__name__
        if result.ok:
            logger.info(
                "Sent %s to %s (message_uuid=%s)",
                kind, message.recipient, result.message_uuid,
            )
        else:
            logger.error(
                "Failed to send %s to %s (status=%s): %s",
                kind, message.recipient, result.status_code, result.error,
            )
        return result
