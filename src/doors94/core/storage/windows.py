"""Desktop window layout snapshot.

The UI shell owns window state; this module only persists it as a flat
list and restores it.  Windows belonging to retired apps are stripped on
both load and save, and a load that strips anything writes the cleaned
list back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from doors94.core.storage.records import read_list, write_record
from doors94.errors import StorageQuotaExceededError

if TYPE_CHECKING:
    from doors94.core.storage.backend import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "DOORS94_WINDOWS"

# Agent windows use the agent id as their app id, so only retired apps are listed.
REMOVED_APP_IDS: frozenset[str] = frozenset({"control_panel"})


class WindowState(BaseModel):
    """Position and visibility of one desktop window."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    app_id: str = Field(alias="appId")
    agent_id: str | None = Field(default=None, alias="agentId")
    minimized: bool = False
    x: float
    y: float
    width: float
    height: float


class WindowStateStore:
    """Persist and restore the window layout."""

    def __init__(
        self, store: KeyValueStore, removed_app_ids: Iterable[str] | None = None
    ) -> None:
        self._store = store
        self.removed_app_ids = (
            frozenset(removed_app_ids) if removed_app_ids is not None else REMOVED_APP_IDS
        )

    def load(self) -> list[WindowState]:
        """Return saved windows, skipping malformed entries and retired apps."""
        windows: list[WindowState] = []
        removed = 0
        for item in read_list(self._store, STORAGE_KEY):
            try:
                window = WindowState.model_validate(item)
            except ValidationError:
                logger.warning("Skipping malformed window state entry")
                continue
            if window.app_id in self.removed_app_ids:
                logger.debug("Dropping window %s for removed app %s", window.id, window.app_id)
                removed += 1
                continue
            windows.append(window)
        if removed:
            self.save(windows)
        return windows

    def save(self, windows: list[WindowState]) -> None:
        """Persist *windows*; on quota exhaustion the write is dropped."""
        records = [
            w.model_dump(mode="json", by_alias=True, exclude_none=True)
            for w in windows
            if w.app_id not in self.removed_app_ids
        ]
        try:
            write_record(self._store, STORAGE_KEY, records)
        except StorageQuotaExceededError:
            logger.warning("Storage quota exceeded. Cannot save window states.")

    def clear(self) -> None:
        self._store.remove(STORAGE_KEY)
