"""Data models for inbound webhook classification."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class InboundReply(BaseModel):
    """Suggestion reply echoed back when the user taps a card button."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str | None = None
    title: str | None = None


class InboundEvent(BaseModel):
    """Normalized inbound message from the Vonage inbound webhook."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    channel: str | None = None
    message_type: str | None = None
    sender: str | None = Field(default=None, alias="from")
    text: str | None = None
    reply: InboundReply | None = None


@dataclass(frozen=True)
class GenerateStoryTrigger:
    recipient: str


@dataclass(frozen=True)
class PlainEcho:
    recipient: str
    original_text: str


@dataclass(frozen=True)
class Ignored:
    pass


ReplyClassification = GenerateStoryTrigger | PlainEcho | Ignored
