"""Shared fixtures."""

import pytest


class WhitespaceEncoder:
    """Fake encoder: one token per whitespace-separated word."""

    def __init__(self):
        self.calls = 0

    def encode(self, text, *, allowed_special=frozenset(), disallowed_special="all"):
        self.calls += 1
        return list(range(len(text.split())))


@pytest.fixture
def fake_encoder():
    return WhitespaceEncoder()


@pytest.fixture
def gpt4_encoder():
    """Real cl100k encoder; skipped when the vocabulary can't be fetched."""
    tiktoken = pytest.importorskip("tiktoken")
    try:
        return tiktoken.encoding_for_model("gpt-4")
    except Exception as e:  # offline vocabulary download
        pytest.skip(f"tiktoken vocabulary unavailable: {e}")
