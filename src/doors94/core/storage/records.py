"""Record (de)serialisation on top of a :class:`KeyValueStore`.

Reads are fail-soft: a stored value is either absent, malformed or present,
and :func:`read_record` says which explicitly instead of raising.  Callers
decide what "malformed" means for them (usually: treat as no data).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from doors94.core.storage.backend import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Absent:
    """Nothing is stored under the key."""


@dataclass(frozen=True)
class Malformed:
    """Something is stored but it could not be decoded."""

    reason: str


@dataclass(frozen=True)
class Present(Generic[T]):
    """A decoded value."""

    value: T


ReadResult = Absent | Malformed | Present[Any]


def read_record(store: KeyValueStore, key: str) -> ReadResult:
    """Load and JSON-decode the record stored under *key*."""
    raw = store.get(key)
    if raw is None or raw == "":
        return Absent()
    try:
        return Present(json.loads(raw))
    except json.JSONDecodeError as exc:
        logger.warning("Discarding malformed record %s: %s", key, exc)
        return Malformed(str(exc))


def read_list(store: KeyValueStore, key: str) -> list[Any]:
    """Read a record that must be a JSON array; anything else reads as ``[]``."""
    result = read_record(store, key)
    if isinstance(result, Present):
        if isinstance(result.value, list):
            return result.value
        logger.warning("Discarding non-list record %s", key)
    return []


def read_dict(store: KeyValueStore, key: str) -> dict[str, Any]:
    """Read a record that must be a JSON object; anything else reads as ``{}``."""
    result = read_record(store, key)
    if isinstance(result, Present):
        if isinstance(result.value, dict):
            return result.value
        logger.warning("Discarding non-object record %s", key)
    return {}


def write_record(store: KeyValueStore, key: str, value: Any) -> None:
    """JSON-encode *value* and write it as a single record."""
    store.set(key, json.dumps(value, ensure_ascii=False))
