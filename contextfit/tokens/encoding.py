"""Tokenizer resolution backed by tiktoken."""

from __future__ import annotations

import logging
from typing import AbstractSet, Collection, Literal, Protocol, Union

import tiktoken

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4"


class TokenEncoder(Protocol):
    """The slice of ``tiktoken.Encoding`` the engine relies on."""

    def encode(
        self,
        text: str,
        *,
        allowed_special: Union[Literal["all"], AbstractSet[str]] = ...,
        disallowed_special: Union[Literal["all"], Collection[str]] = ...,
    ) -> list[int]:
        ...


def load_encoder(model: str) -> tiktoken.Encoding:
    """Load the BPE encoder for ``model``.

    Loading reads a whole vocabulary, so callers should build one encoder
    per selection (or cache it themselves) and reuse it for every message.
    Unknown model names fall back to the ``DEFAULT_MODEL`` encoder.
    """
    try:
        return tiktoken.encoding_for_model(model)
    except KeyError:
        logger.debug(
            "No tokenizer registered for model %r, falling back to %s",
            model, DEFAULT_MODEL,
        )
        return tiktoken.encoding_for_model(DEFAULT_MODEL)
