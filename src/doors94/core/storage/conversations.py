"""Per-agent chat transcript storage.

Each agent owns one record holding its most recent conversations, newest
first.  Saving always appends a new conversation; the list is then capped
at :data:`MAX_CONVERSATIONS_PER_AGENT` by recency.
"""

from __future__ import annotations

import logging
import secrets
import string
import time
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from doors94.core.storage.records import read_list, write_record
from doors94.errors import StorageError, StorageQuotaExceededError

if TYPE_CHECKING:
    from doors94.core.storage.backend import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY_PREFIX = "DOORS94_CONVERSATION_"
MAX_CONVERSATIONS_PER_AGENT = 50

_ID_ALPHABET = string.ascii_lowercase + string.digits


class Message(BaseModel):
    """One chat message."""

    role: Literal["user", "assistant", "system"]
    content: str


class Conversation(BaseModel):
    """A stored transcript for one agent."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    agent_id: str = Field(alias="agentId")
    messages: list[Message] = []
    created_at: int = Field(alias="createdAt")
    updated_at: int = Field(alias="updatedAt")


def _now_ms() -> int:
    return int(time.time() * 1000)


def new_conversation_id(now_ms: int | None = None) -> str:
    """Return an id of the form ``conv_<epoch ms>_<9 random chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"conv_{now_ms if now_ms is not None else _now_ms()}_{suffix}"


class ConversationStore:
    """Retention-capped conversation lists keyed by agent id."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @staticmethod
    def key(agent_id: str) -> str:
        return f"{STORAGE_KEY_PREFIX}{agent_id}"

    def load(self, agent_id: str) -> list[Conversation]:
        """Return the agent's conversations, newest first.

        A malformed record reads as empty; malformed entries are skipped.
        """
        conversations: list[Conversation] = []
        for item in read_list(self._store, self.key(agent_id)):
            try:
                conversations.append(Conversation.model_validate(item))
            except ValidationError:
                logger.warning("Skipping malformed conversation for agent %s", agent_id)
        conversations.sort(key=lambda c: c.updated_at, reverse=True)
        return conversations

    def save(self, agent_id: str, messages: list[Message]) -> Conversation:
        """Append a new conversation holding *messages* and persist the list.

        If the store is out of space the retained list is halved and the
        write retried once; a second failure propagates.
        """
        now = _now_ms()
        conversation = Conversation(
            id=new_conversation_id(now),
            agent_id=agent_id,
            messages=list(messages),
            created_at=now,
            updated_at=now,
        )

        conversations = [conversation, *self.load(agent_id)]
        conversations.sort(key=lambda c: c.updated_at, reverse=True)
        trimmed = conversations[:MAX_CONVERSATIONS_PER_AGENT]

        try:
            self._write(agent_id, trimmed)
        except StorageQuotaExceededError:
            logger.warning("Storage quota exceeded. Clearing old conversations.")
            self._write(agent_id, trimmed[: MAX_CONVERSATIONS_PER_AGENT // 2])
        return conversation

    def delete(self, agent_id: str, conversation_id: str) -> None:
        """Remove one conversation (no-op if absent).

        A failed write is logged and dropped.
        """
        remaining = [c for c in self.load(agent_id) if c.id != conversation_id]
        try:
            self._write(agent_id, remaining)
        except StorageError as exc:
            logger.error("Failed to delete conversation %s: %s", conversation_id, exc)

    def clear(self, agent_id: str) -> None:
        """Drop every conversation for *agent_id*."""
        self._store.remove(self.key(agent_id))

    def _write(self, agent_id: str, conversations: list[Conversation]) -> None:
        write_record(
            self._store,
            self.key(agent_id),
            [c.model_dump(mode="json", by_alias=True) for c in conversations],
        )
