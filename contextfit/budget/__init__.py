from contextfit.budget.selector import (
    ContextBudget,
    ContextWindowManager,
    shorten_messages_to_context_size,
)

__all__ = ["ContextBudget", "ContextWindowManager", "shorten_messages_to_context_size"]
