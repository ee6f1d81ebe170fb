"""Read conversations from YAML or JSON files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, model_validator

from contextfit.config import load_yaml_file
from contextfit.conversation.types import Author, Message


class MessageEntry(BaseModel):
    """One message as written in a conversation file."""

    author: Author
    text: Optional[str] = None
    image: Optional[str] = None  # URL, data URI or file path
    mime_type: str = "image/png"

    @model_validator(mode="after")
    def exactly_one_body(self) -> "MessageEntry":
        if (self.text is None) == (self.image is None):
            raise ValueError("message needs exactly one of 'text' or 'image'")
        return self

    def to_message(self) -> Message:
        if self.text is not None:
            return Message.text(self.author, self.text)
        return Message.image(self.author, self.image, self.mime_type)


class ConversationFile(BaseModel):
    """Root schema of a conversation file."""

    prompt: Optional[Union[str, MessageEntry]] = None
    messages: list[MessageEntry] = Field(default_factory=list)


@dataclass(frozen=True)
class Conversation:
    prompt: Optional[Message]
    messages: list[Message] = field(default_factory=list)


def parse_conversation(raw: Any) -> Conversation:
    doc = ConversationFile.model_validate(raw)
    if isinstance(doc.prompt, str):
        prompt: Optional[Message] = Message.text(Author.SYSTEM, doc.prompt)
    elif doc.prompt is not None:
        prompt = doc.prompt.to_message()
    else:
        prompt = None
    return Conversation(
        prompt=prompt,
        messages=[entry.to_message() for entry in doc.messages],
    )


def load_conversation(path: Path) -> Conversation:
    """Load and validate a conversation file."""
    return parse_conversation(load_yaml_file(path))
