from contextfit.conversation.types import (
    Author,
    ImageContent,
    Message,
    MessageContent,
    TextContent,
)

__all__ = ["Author", "ImageContent", "Message", "MessageContent", "TextContent"]
