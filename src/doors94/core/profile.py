"""Profile: the explicit application context.

A profile bundles one key-value store with every repository bound to it.
Create it once at start-up and pass it to whatever needs storage; each
repository writes through to the store on every mutation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from doors94.core.agents.repository import AgentRepository
from doors94.core.context.models import UserContext  # noqa: TC001
from doors94.core.context.personalization import build_system_prompt
from doors94.core.context.store import (
    AgentOverrideStore,
    ConversationMemoryStore,
    UserContextStore,
)
from doors94.core.storage.backend import FileStore, InMemoryStore, KeyValueStore
from doors94.core.storage.conversations import ConversationStore
from doors94.core.storage.windows import WindowStateStore

PROFILE_DIR_ENV = "DOORS94_PROFILE_DIR"
DEFAULT_PROFILE_DIR = Path("~/.doors94")


def default_profile_dir() -> Path:
    """Profile directory from ``$DOORS94_PROFILE_DIR`` or ``~/.doors94``."""
    return Path(os.environ.get(PROFILE_DIR_ENV) or DEFAULT_PROFILE_DIR).expanduser()


@dataclass
class Profile:
    """All persistent state of one user profile."""

    store: KeyValueStore
    agents: AgentRepository = field(init=False)
    user_context: UserContextStore = field(init=False)
    overrides: AgentOverrideStore = field(init=False)
    memories: ConversationMemoryStore = field(init=False)
    conversations: ConversationStore = field(init=False)
    windows: WindowStateStore = field(init=False)

    def __post_init__(self) -> None:
        self.agents = AgentRepository(self.store)
        self.user_context = UserContextStore(self.store)
        self.overrides = AgentOverrideStore(self.store)
        self.memories = ConversationMemoryStore(self.store)
        self.conversations = ConversationStore(self.store)
        self.windows = WindowStateStore(self.store)

    @classmethod
    def open(cls, directory: Path | None = None, quota_bytes: int | None = None) -> Profile:
        """Open (or lazily create) a profile backed by files in *directory*."""
        return cls(FileStore(directory or default_profile_dir(), quota_bytes=quota_bytes))

    @classmethod
    def in_memory(cls, quota_bytes: int | None = None) -> Profile:
        return cls(InMemoryStore(quota_bytes=quota_bytes))

    def system_prompt_for(self, agent_id: str, context: UserContext | None = None) -> str | None:
        """Full system prompt for a stored agent, or ``None`` if it does not exist.

        Uses the profile's own user context and override unless *context* is
        given.
        """
        agent = self.agents.get_agent(agent_id)
        if agent is None:
            return None
        ctx = context if context is not None else self.user_context.get()
        return build_system_prompt(agent.manifest(), ctx, self.overrides.get(agent_id))
