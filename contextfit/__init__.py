"""contextfit: fit chat conversations into a model's context window."""

from contextfit.budget.selector import (
    ContextBudget,
    ContextWindowManager,
    shorten_messages_to_context_size,
)
from contextfit.conversation.types import (
    Author,
    ImageContent,
    Message,
    MessageContent,
    TextContent,
)
from contextfit.tokens.costing import message_token_cost
from contextfit.tokens.encoding import load_encoder

__version__ = "0.1.0"

__all__ = [
    "Author",
    "ContextBudget",
    "ContextWindowManager",
    "ImageContent",
    "Message",
    "MessageContent",
    "TextContent",
    "load_encoder",
    "message_token_cost",
    "shorten_messages_to_context_size",
]
