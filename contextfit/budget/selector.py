"""Context window budget selection for chat conversations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from contextfit.conversation.types import Message
from contextfit.tokens.costing import message_token_cost
from contextfit.tokens.encoding import TokenEncoder, load_encoder

logger = logging.getLogger(__name__)


@dataclass
class ContextBudget:
    """Tracks token allocation within a context window."""

    total_tokens: int
    prompt_tokens: int = 0
    response_reserve_tokens: int = 0

    @property
    def reserved_tokens(self) -> int:
        """Tokens spent before any history is considered."""
        return self.prompt_tokens + self.response_reserve_tokens

    @property
    def available_for_history(self) -> int:
        """Tokens remaining for conversation history."""
        return max(0, self.total_tokens - self.reserved_tokens)


class ContextWindowManager:
    """Fits conversation history into a model's context window.

    One encoder is built per manager and shared by every cost computation.
    """

    def __init__(self, model: str, encoder: Optional[TokenEncoder] = None) -> None:
        self.model = model
        self._encoder = encoder if encoder is not None else load_encoder(model)

    def message_cost(self, message: Message) -> int:
        return message_token_cost(self._encoder, self.model, message)

    def allocate_budget(
        self,
        prompt: Optional[Message],
        max_context_tokens: int,
        max_response_tokens: Optional[int] = None,
    ) -> ContextBudget:
        """Reserve the prompt and response allowance up front."""
        if max_context_tokens < 0:
            raise ValueError(
                f"max_context_tokens must be non-negative, got {max_context_tokens}"
            )
        if max_response_tokens is not None and max_response_tokens < 0:
            raise ValueError(
                f"max_response_tokens must be non-negative, got {max_response_tokens}"
            )
        return ContextBudget(
            total_tokens=max_context_tokens,
            prompt_tokens=self.message_cost(prompt) if prompt is not None else 0,
            response_reserve_tokens=max_response_tokens or 0,
        )

    def fit_messages(
        self,
        messages: Sequence[Message],
        budget: ContextBudget,
    ) -> list[Message]:
        """Keep the newest messages that fit, in chronological order.

        Walks from the most recent message backwards and stops at the first
        one that would overflow; older messages are never considered after
        that, so the result is always a contiguous tail.
        """
        used = budget.reserved_tokens
        selected: list[Message] = []
        for message in reversed(messages):
            cost = self.message_cost(message)
            if used + cost > budget.total_tokens:
                break
            used += cost
            selected.append(message)
        selected.reverse()

        logger.debug(
            "Kept %d of %d messages (%d/%d tokens, %d reserved)",
            len(selected), len(messages), used,
            budget.total_tokens, budget.reserved_tokens,
        )
        return selected

    def select(
        self,
        prompt: Optional[Message],
        messages: Sequence[Message],
        max_context_tokens: int,
        max_response_tokens: Optional[int] = None,
    ) -> list[Message]:
        budget = self.allocate_budget(prompt, max_context_tokens, max_response_tokens)
        return self.fit_messages(messages, budget)


def shorten_messages_to_context_size(
    model: str,
    prompt: Optional[Message],
    messages: Sequence[Message],
    max_response_tokens: Optional[int],
    max_context_tokens: int,
) -> list[Message]:
    """Return the longest suffix of ``messages`` that fits the context window.

    The prompt is always kept and counted first, together with the reserved
    response allowance. An empty list is a valid result, e.g. when the prompt
    alone uses up the budget.
    """
    manager = ContextWindowManager(model)
    return manager.select(prompt, messages, max_context_tokens, max_response_tokens)
