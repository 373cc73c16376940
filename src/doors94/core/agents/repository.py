"""Agent repository: built-in and user-created agents behind one API.

User agents live in a single record (a JSON array of manifests).  Every
mutation re-serialises the complete list and writes it in one go, so the
stored list is always either the previous valid state or the new one.

Usage::

    repo = AgentRepository(InMemoryStore())
    repo.save_user_agent(AgentManifest(id="pirate", name="Pirate", ...))
    agents = repo.get_all_agents()
"""

from __future__ import annotations

import locale
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from doors94.core.agents.builtins import BUILTIN_AGENTS, BUILTIN_IDS
from doors94.core.manifest.models import AgentManifest, AgentManifestWithSource, AgentSource
from doors94.core.manifest.validator import validate_manifest
from doors94.core.storage.records import read_list, write_record
from doors94.errors import (
    CollisionError,
    ImmutableError,
    ManifestValidationError,
    NotFoundError,
    QuotaError,
    StorageError,
)

if TYPE_CHECKING:
    from doors94.core.storage.backend import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "DOOR94_USER_AGENTS"
MAX_USER_AGENTS = 50


def _name_key(agent: AgentManifest) -> str:
    return locale.strxfrm(agent.name.casefold())


class AgentRepository:
    """CRUD over read-only built-ins and mutable user agents."""

    def __init__(self, store: KeyValueStore, max_user_agents: int = MAX_USER_AGENTS) -> None:
        self._store = store
        self.max_user_agents = max_user_agents

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load_user_agents(self) -> list[AgentManifest]:
        """Return stored user agents in storage order.

        Entries that no longer pass validation are skipped with a warning.
        """
        agents: list[AgentManifest] = []
        for item in read_list(self._store, STORAGE_KEY):
            if not isinstance(item, dict):
                logger.warning("Skipping non-object user agent entry")
                continue
            result = validate_manifest(item)
            if not result.valid:
                logger.warning("Skipping invalid agent %s: %s", item.get("id"), result.errors)
                continue
            try:
                agents.append(AgentManifest.model_validate(item))
            except ValidationError as exc:
                logger.warning("Skipping unreadable agent %s: %s", item.get("id"), exc)
        return agents

    def get_all_agents(self) -> list[AgentManifestWithSource]:
        """Built-ins in declaration order, then user agents sorted by name."""
        builtins = [agent.with_source("builtin") for agent in BUILTIN_AGENTS]
        users = [
            agent.with_source("user")
            for agent in sorted(self.load_user_agents(), key=_name_key)
        ]
        return [*builtins, *users]

    def get_user_agent(self, agent_id: str) -> AgentManifest | None:
        for agent in self.load_user_agents():
            if agent.id == agent_id:
                return agent
        return None

    def get_agent(
        self, agent_id: str, source: AgentSource | None = None
    ) -> AgentManifestWithSource | None:
        """Look an agent up by id, optionally restricted to one source."""
        if source in (None, "builtin"):
            for agent in BUILTIN_AGENTS:
                if agent.id == agent_id:
                    return agent.with_source("builtin")
        if source in (None, "user"):
            user_agent = self.get_user_agent(agent_id)
            if user_agent is not None:
                return user_agent.with_source("user")
        return None

    def remaining_slots(self) -> int:
        """How many more user agents can be created."""
        return max(0, self.max_user_agents - len(self.load_user_agents()))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def save_user_agent(self, manifest: AgentManifest) -> None:
        """Insert or replace a user agent.

        Raises:
            ManifestValidationError: The manifest breaks one or more rules.
            CollisionError: The id belongs to a built-in agent.
            QuotaError: Appending would exceed :attr:`max_user_agents`.
            StorageError: The store rejected the write.
        """
        result = validate_manifest(manifest)
        if not result.valid:
            raise ManifestValidationError(result.errors)

        if manifest.id in BUILTIN_IDS:
            raise CollisionError(manifest.id)

        existing = self.load_user_agents()
        for index, agent in enumerate(existing):
            if agent.id == manifest.id:
                existing[index] = manifest
                break
        else:
            if len(existing) >= self.max_user_agents:
                raise QuotaError(self.max_user_agents)
            existing.append(manifest)

        self._write(existing)
        logger.info("Saved user agent %s", manifest.id)

    def delete_user_agent(self, agent_id: str) -> None:
        """Remove a user agent; absent ids are ignored.

        Raises:
            ImmutableError: *agent_id* is a built-in agent.
        """
        if agent_id in BUILTIN_IDS:
            raise ImmutableError(agent_id)

        existing = self.load_user_agents()
        remaining = [agent for agent in existing if agent.id != agent_id]
        if len(remaining) == len(existing):
            return
        self._write(remaining)
        logger.info("Deleted user agent %s", agent_id)

    def duplicate_user_agent(self, agent_id: str) -> AgentManifest:
        """Copy a user agent under the first free ``_copyN`` id and ``(Copy N)`` name.

        The copy is saved through :meth:`save_user_agent`, so the quota and
        validation rules apply to it too.

        Raises:
            NotFoundError: No user agent has *agent_id*.
        """
        source = self.get_user_agent(agent_id)
        if source is None:
            raise NotFoundError("agent", agent_id)

        everyone = self.get_all_agents()
        taken_ids = {agent.id for agent in everyone}
        taken_names = {agent.name for agent in everyone}
        copy_number = 1
        while True:
            new_id = f"{source.id}_copy{copy_number}"
            new_name = f"{source.name} (Copy {copy_number})"
            if new_id not in taken_ids and new_name not in taken_names:
                break
            copy_number += 1

        duplicate = source.model_copy(update={"id": new_id, "name": new_name}, deep=True)
        self.save_user_agent(duplicate)
        return duplicate

    def _write(self, agents: list[AgentManifest]) -> None:
        try:
            write_record(self._store, STORAGE_KEY, [agent.to_record() for agent in agents])
        except StorageError:
            logger.error("Failed to persist %d user agents", len(agents))
            raise
