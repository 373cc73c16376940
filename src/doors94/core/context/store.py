"""Persistence for user context, agent overrides and conversation memory.

All three live in the profile store under fixed keys.  Reads never raise:
a malformed record is logged and read as "no data".  Writes never raise
either: a storage failure is logged and the write dropped.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from doors94.core.context.models import UserContext
from doors94.core.storage.records import Present, read_dict, read_record, write_record
from doors94.errors import StorageError

if TYPE_CHECKING:
    from doors94.core.storage.backend import KeyValueStore

logger = logging.getLogger(__name__)

USER_CONTEXT_KEY = "doors94_user"
AGENT_OVERRIDES_KEY = "agent_overrides"
CONVERSATION_MEMORY_KEY = "conversation_memory"
MAX_MEMORIES = 50

_OPTIONAL_FIELDS = (
    "goals",
    "skillLevel",
    "techStack",
    "timeCapacity",
    "preferences",
    "constraints",
    "learningStyle",
)


# ---------------------------------------------------------------------------
# User context
# ---------------------------------------------------------------------------


def migrate_user_context(old: dict[str, Any]) -> UserContext:
    """Bring a stored user context of any age up to the current shape.

    Missing name/role become ``""`` and a missing tone ``"friendly"``.  The
    legacy ``projects`` text survives only when it is non-blank.  Newer
    fields are copied when present and left unset otherwise.

    Raises:
        pydantic.ValidationError: A present field holds an unusable value.
    """
    migrated: dict[str, Any] = {
        "name": old.get("name") or "",
        "role": old.get("role") or "",
        "tone": old.get("tone") or "friendly",
    }

    projects = old.get("projects")
    if isinstance(projects, str) and projects.strip():
        migrated["projects"] = projects

    for field in _OPTIONAL_FIELDS:
        if old.get(field):
            migrated[field] = old[field]

    return UserContext.model_validate(migrated)


class UserContextStore:
    """The single user context of a profile."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def get(self) -> UserContext | None:
        result = read_record(self._store, USER_CONTEXT_KEY)
        if not isinstance(result, Present):
            return None
        if not isinstance(result.value, dict):
            logger.warning("Discarding non-object user context")
            return None
        try:
            return migrate_user_context(result.value)
        except ValidationError as exc:
            logger.warning("Discarding unreadable user context: %s", exc)
            return None

    def save(self, context: UserContext) -> None:
        """Overwrite the stored context wholesale."""
        try:
            write_record(self._store, USER_CONTEXT_KEY, context.to_record())
        except StorageError as exc:
            logger.error("Failed to save user context: %s", exc)

    def clear(self) -> None:
        self._store.remove(USER_CONTEXT_KEY)


# ---------------------------------------------------------------------------
# Agent overrides
# ---------------------------------------------------------------------------


class AgentOverrideStore:
    """Per-agent extra instructions, appended after the compiled prompt."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def get_all(self) -> dict[str, str]:
        raw = read_dict(self._store, AGENT_OVERRIDES_KEY)
        return {key: value for key, value in raw.items() if isinstance(value, str)}

    def get(self, agent_id: str) -> str:
        return self.get_all().get(agent_id, "")

    def set(self, agent_id: str, instructions: str) -> None:
        overrides = self.get_all()
        overrides[agent_id] = instructions
        self._write(overrides)

    def clear(self, agent_id: str) -> None:
        overrides = self.get_all()
        if overrides.pop(agent_id, None) is not None:
            self._write(overrides)

    def _write(self, overrides: dict[str, str]) -> None:
        try:
            write_record(self._store, AGENT_OVERRIDES_KEY, overrides)
        except StorageError as exc:
            logger.error("Failed to save agent overrides: %s", exc)


# ---------------------------------------------------------------------------
# Conversation memory
# ---------------------------------------------------------------------------


class ConversationMemory(BaseModel):
    """A coarse long-term summary of one past conversation."""

    model_config = ConfigDict(populate_by_name=True)

    agent_id: str = Field(alias="agentId")
    timestamp: int
    summary: str
    key_topics: list[str] = Field(default=[], alias="keyTopics")
    decisions: list[str] | None = None
    code_snippets: list[str] | None = Field(default=None, alias="codeSnippets")
    preferences_discovered: list[str] | None = Field(default=None, alias="preferencesDiscovered")


class ConversationMemoryStoreRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    conversations: list[ConversationMemory] = []
    last_updated: int = Field(default=0, alias="lastUpdated")


class ConversationMemoryStore:
    """Memories across all agents, capped at :data:`MAX_MEMORIES` (oldest evicted)."""

    def __init__(self, store: KeyValueStore, max_memories: int = MAX_MEMORIES) -> None:
        self._store = store
        self.max_memories = max_memories

    def get_all(self) -> ConversationMemoryStoreRecord:
        raw = read_dict(self._store, CONVERSATION_MEMORY_KEY)
        try:
            return ConversationMemoryStoreRecord.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Discarding unreadable conversation memory: %s", exc)
            return ConversationMemoryStoreRecord()

    def for_agent(self, agent_id: str) -> list[ConversationMemory]:
        return [m for m in self.get_all().conversations if m.agent_id == agent_id]

    def save(self, memory: ConversationMemory) -> None:
        record = self.get_all()
        record.conversations.append(memory)
        record.conversations = record.conversations[-self.max_memories :]
        record.last_updated = int(time.time() * 1000)
        try:
            write_record(
                self._store,
                CONVERSATION_MEMORY_KEY,
                record.model_dump(mode="json", by_alias=True, exclude_none=True),
            )
        except StorageError as exc:
            logger.error("Failed to save conversation memory: %s", exc)

    def clear(self) -> None:
        self._store.remove(CONVERSATION_MEMORY_KEY)
