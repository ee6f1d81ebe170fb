"""Conversation value types shared by the costing and selection code."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Union


class Author(str, Enum):
    """Who wrote a message. The value is the chat-markup role label."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class TextContent:
    """Plain text body of a message."""

    text: str


@dataclass(frozen=True)
class ImageContent:
    """Opaque reference to an image (raw bytes, URL or data URI)."""

    data: Union[bytes, str]
    mime_type: str = "image/png"


MessageContent = Union[TextContent, ImageContent]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Message:
    """A single conversation turn.

    ``timestamp`` is informational; selection only looks at list order.
    """

    author: Author
    content: MessageContent
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def text(cls, author: Author, text: str) -> "Message":
        return cls(author=author, content=TextContent(text))

    @classmethod
    def image(
        cls, author: Author, data: Union[bytes, str], mime_type: str = "image/png"
    ) -> "Message":
        return cls(author=author, content=ImageContent(data, mime_type))

    @property
    def is_text(self) -> bool:
        return isinstance(self.content, TextContent)
