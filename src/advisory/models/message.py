"""Conversation message models for AI Advisory."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Sender(str, Enum):
    """Who sent the message."""

    USER = "user"
    ASSISTANT = "assistant"


class MessageStatus(str, Enum):
    """Delivery status of a user message."""

    SENDING = "sending"
    SENT = "sent"
    ERROR = "error"


# Legal forward moves; anything else is a regression or leaves a terminal state
ALLOWED_STATUS_TRANSITIONS: dict[MessageStatus, frozenset[MessageStatus]] = {
    MessageStatus.SENDING: frozenset({MessageStatus.SENT, MessageStatus.ERROR}),
    MessageStatus.SENT: frozenset({MessageStatus.ERROR}),
    MessageStatus.ERROR: frozenset(),
}


class ContentKind(str, Enum):
    """How message content may be rendered."""

    PLAIN_TEXT = "plain_text"
    RICH_TEXT = "rich_text"  # plain body plus a trusted download link


class DownloadLink(BaseModel):
    """Download affordance for a generated artifact.

    Built only from the ``url`` field of an analysis result, never parsed
    out of upstream text.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Absolute http(s) URL of the artifact")
    label: str = Field(default="Download PDF Report", min_length=1)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Accept only absolute http(s) URLs without whitespace or markup characters."""
        v = v.strip()
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Download URL must be absolute http(s): {v!r}")
        if any(ch.isspace() or ch in '<>"()' for ch in v):
            raise ValueError(f"Download URL contains unsafe characters: {v!r}")
        return v


class MessageContent(BaseModel):
    """Tagged message body: plain text, or text plus a download link."""

    model_config = ConfigDict(frozen=True)

    kind: ContentKind = ContentKind.PLAIN_TEXT
    body: str
    link: DownloadLink | None = None

    @classmethod
    def plain(cls, body: str) -> "MessageContent":
        return cls(kind=ContentKind.PLAIN_TEXT, body=body)

    @classmethod
    def rich(cls, body: str, link: DownloadLink | None) -> "MessageContent":
        if link is None:
            return cls.plain(body)
        return cls(kind=ContentKind.RICH_TEXT, body=body, link=link)


def _new_message_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """A single message in the conversation.

    User messages carry a delivery status; assistant messages never do and
    are never modified after creation.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_message_id)
    content: MessageContent
    sender: Sender
    timestamp: datetime = Field(default_factory=_utc_now)
    status: MessageStatus | None = None

    @property
    def text(self) -> str:
        return self.content.body

    @property
    def is_user(self) -> bool:
        return self.sender == Sender.USER


def create_user_message(text: str) -> Message:
    """Create a user message in the ``sending`` state."""
    return Message(
        content=MessageContent.plain(text),
        sender=Sender.USER,
        status=MessageStatus.SENDING,
    )


def create_assistant_message(
    text: str, link: DownloadLink | None = None
) -> Message:
    """Create an assistant message, optionally with a download link."""
    return Message(
        content=MessageContent.rich(text, link),
        sender=Sender.ASSISTANT,
    )
