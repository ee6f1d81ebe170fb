"""Tests for conversation value types."""

import dataclasses
from datetime import timezone

import pytest

from contextfit.conversation.types import (
    Author,
    ImageContent,
    Message,
    TextContent,
)


class TestMessage:
    def test_text_constructor(self):
        msg = Message.text(Author.USER, "hi")
        assert msg.content == TextContent("hi")
        assert msg.is_text
        assert msg.timestamp.tzinfo is timezone.utc

    def test_image_constructor(self):
        msg = Message.image(Author.ASSISTANT, "https://example.com/cat.png")
        assert msg.content == ImageContent("https://example.com/cat.png", "image/png")
        assert not msg.is_text

    def test_immutable(self):
        msg = Message.text(Author.USER, "hi")
        with pytest.raises(dataclasses.FrozenInstanceError):
            msg.author = Author.SYSTEM

    def test_role_labels(self):
        assert [a.value for a in Author] == ["system", "user", "assistant"]
        assert Author("assistant") is Author.ASSISTANT
