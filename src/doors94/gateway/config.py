"""Gateway configuration: model, credential and prompt limits."""

from __future__ import annotations

import os

from pydantic import BaseModel

API_KEY_ENV = "OPENAI_API_KEY"
MODEL_ENV = "DOORS94_MODEL"
API_BASE_ENV = "DOORS94_API_BASE"

DEFAULT_MODEL = "openai/gpt-4o-mini"
MAX_PROMPT_LENGTH = 4000


class GatewaySettings(BaseModel):
    """Configuration for the completion API behind the chat gateway.

    The ``model`` field uses LiteLLM's naming convention:
    ``provider/model_name`` (e.g. ``openai/gpt-4o-mini``).
    """

    model: str = DEFAULT_MODEL
    api_key: str | None = None
    api_base: str | None = None
    temperature: float = 0.7
    max_prompt_length: int = MAX_PROMPT_LENGTH

    @property
    def provider(self) -> str:
        """Extract the provider prefix from the model string."""
        if "/" in self.model:
            return self.model.split("/", 1)[0]
        return "openai"

    @classmethod
    def from_env(cls) -> GatewaySettings:
        """Build settings from ``OPENAI_API_KEY``, ``DOORS94_MODEL`` and ``DOORS94_API_BASE``."""
        return cls(
            model=os.environ.get(MODEL_ENV) or DEFAULT_MODEL,
            api_key=os.environ.get(API_KEY_ENV) or None,
            api_base=os.environ.get(API_BASE_ENV) or None,
        )
