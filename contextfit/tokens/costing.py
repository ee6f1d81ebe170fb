"""Per-message token accounting for chat completion prompts.

A chat message is billed for more than its text: the chat markup wraps each
message in framing tokens (``<|im_start|>{role}\\n{content}<|im_end|>\\n``)
and the role label itself is tokenized. The framing constants differ between
model families, so costs are computed from a small family table.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from contextfit.conversation.types import Message, TextContent
from contextfit.tokens.encoding import TokenEncoder


class ModelFamily(str, Enum):
    """Model groups sharing the same message framing overhead."""

    GPT_35 = "gpt-3.5"
    DEFAULT = "default"


@dataclass(frozen=True)
class MessageOverhead:
    """Framing tokens added to every message of a model family."""

    tokens_per_message: int
    tokens_per_name: int


FAMILY_OVERHEAD: dict[ModelFamily, MessageOverhead] = {
    # <|im_start|>{role/name}\n{content}<|im_end|>\n; a name replaces the role
    ModelFamily.GPT_35: MessageOverhead(tokens_per_message=4, tokens_per_name=-1),
    ModelFamily.DEFAULT: MessageOverhead(tokens_per_message=3, tokens_per_name=1),
}


def classify_model(model: str) -> ModelFamily:
    """Map a model id to its family by prefix (``gpt-3.5-turbo-0613`` -> GPT_35)."""
    for family in ModelFamily:
        if family is not ModelFamily.DEFAULT and model.startswith(family.value):
            return family
    return ModelFamily.DEFAULT


def overhead_for(model: str) -> MessageOverhead:
    return FAMILY_OVERHEAD[classify_model(model)]


def count_text_tokens(encoder: TokenEncoder, text: str) -> int:
    """Count tokens in ``text``, encoding special-token literals as such."""
    return len(encoder.encode(text, allowed_special="all"))


def message_token_cost(encoder: TokenEncoder, model: str, message: Message) -> int:
    """Tokens the chat API bills for including ``message`` in a prompt.

    Image content is charged nothing; only the role label and the family
    framing tokens count for it.
    """
    overhead = overhead_for(model)

    role_length = count_text_tokens(encoder, message.author.value)
    if isinstance(message.content, TextContent):
        text_length = count_text_tokens(encoder, message.content.text)
    else:
        # Images are free here, whatever their size. Known gap vs. API billing.
        text_length = 0

    cost = (
        text_length
        + role_length
        + overhead.tokens_per_message
        + overhead.tokens_per_name
    )
    if cost < 0:
        raise ValueError(f"Negative token cost {cost} for model {model!r}")
    return cost
