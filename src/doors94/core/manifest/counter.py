"""Prompt token estimates.

The gateway caps prompts by characters; these helpers report roughly how
many tokens a compiled prompt will cost.  Accurate counting uses tiktoken
(for OpenAI-family models) with a character-based estimator as a fallback.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import tiktoken

# Providers whose tokenization is well-served by tiktoken.
_TIKTOKEN_PROVIDERS = frozenset({"openai", "azure", "azure_ai"})

_CHARS_PER_TOKEN = 4


@runtime_checkable
class TokenCounter(Protocol):
    """Protocol for counting tokens in a piece of text."""

    def count(self, text: str) -> int:
        """Return the token count for *text*."""
        ...


class TiktokenCounter:
    """Token counter using tiktoken encodings.

    Falls back to ``cl100k_base`` when the model's encoding is unknown.
    """

    def __init__(self, model: str) -> None:
        try:
            self._enc = tiktoken.encoding_for_model(model)
        except KeyError:
            self._enc = tiktoken.get_encoding("cl100k_base")

    def count(self, text: str) -> int:
        return len(self._enc.encode(text))


class EstimatingCounter:
    """Fallback token counter that estimates ~4 characters per token."""

    def count(self, text: str) -> int:
        return len(text) // _CHARS_PER_TOKEN


def get_counter(model: str) -> TokenCounter:
    """Return the most appropriate counter for a LiteLLM model string."""
    provider, _, name = model.partition("/")
    if not name:
        provider, name = "openai", model
    if provider in _TIKTOKEN_PROVIDERS:
        return TiktokenCounter(name)
    return EstimatingCounter()


def estimate_prompt_tokens(prompt: str, model: str = "openai/gpt-4o-mini") -> int:
    """Estimate how many tokens *prompt* costs for *model*."""
    return get_counter(model).count(prompt)
