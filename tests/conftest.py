"""Shared fixtures and helpers."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from doors94.core.agents.repository import AgentRepository
from doors94.core.manifest.models import AgentManifest
from doors94.core.profile import Profile
from doors94.core.storage.backend import InMemoryStore


def make_manifest(**overrides: Any) -> AgentManifest:
    """Build a valid manifest, overriding any field."""
    fields: dict[str, Any] = {
        "id": "pirate",
        "name": "Pirate",
        "description": "Talks like a pirate.",
        "icon": "🏴",
        "purpose": "Help with tasks",
        "rules": ["Always say arr"],
        "tone": "playful",
        "output_style": "",
    }
    fields.update(overrides)
    return AgentManifest(**fields)


def make_mock_litellm_response(content: str | None = "Ahoy!") -> MagicMock:
    """Create a ``MagicMock`` matching LiteLLM's response structure."""
    message = MagicMock()
    message.content = content

    choice = MagicMock()
    choice.message = message
    choice.finish_reason = "stop"

    response = MagicMock()
    response.choices = [choice]
    response.model = "gpt-4o-mini"
    return response


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def repo(store: InMemoryStore) -> AgentRepository:
    return AgentRepository(store)


@pytest.fixture
def profile(store: InMemoryStore) -> Profile:
    return Profile(store)
