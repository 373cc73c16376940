"""Profile store backends: local key-value storage of serialised records.

:class:`KeyValueStore` defines the synchronous storage protocol every
repository writes through.  Values are opaque strings (JSON documents);
each write replaces a whole record.

:class:`InMemoryStore` is a dict-backed implementation suitable for tests
and throwaway sessions.  :class:`FileStore` keeps one file per key inside a
profile directory and replaces files atomically.

Both accept an optional ``quota_bytes`` limit and raise
:class:`~doors94.errors.StorageQuotaExceededError` when a write would push
the store past it, mirroring browser storage quotas.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol
from urllib.parse import quote, unquote

from doors94.errors import StorageError, StorageQuotaExceededError

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


class KeyValueStore(Protocol):
    """Synchronous string key-value storage."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or ``None`` if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        ...

    def remove(self, key: str) -> None:
        """Remove *key* (no-op if absent)."""
        ...

    def keys(self) -> list[str]:
        """Return every stored key."""
        ...


def _size(key: str, value: str) -> int:
    return len(key.encode()) + len(value.encode())


class InMemoryStore:
    """Dict-backed :class:`KeyValueStore`."""

    def __init__(self, quota_bytes: int | None = None) -> None:
        self.quota_bytes = quota_bytes
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = sum(_size(k, v) for k, v in self._data.items() if k != key)
            if used + _size(key, value) > self.quota_bytes:
                raise StorageQuotaExceededError(self.quota_bytes)
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class FileStore:
    """Directory-backed :class:`KeyValueStore`.

    Each key maps to ``<directory>/<quoted key>.json``.  Writes go to a
    temporary file that is then renamed over the target, so a record is
    either fully replaced or left untouched.
    """

    def __init__(self, directory: Path, quota_bytes: int | None = None) -> None:
        self.directory = directory
        self.quota_bytes = quota_bytes

    def _path(self, key: str) -> Path:
        return self.directory / f"{quote(key, safe='')}{_SUFFIX}"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            used = sum(
                _size(k, v) for k in self.keys() if k != key and (v := self.get(k)) is not None
            )
            if used + _size(key, value) > self.quota_bytes:
                raise StorageQuotaExceededError(self.quota_bytes)

        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=_SUFFIX)
        except OSError as exc:
            raise StorageError(str(exc)) from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp, path)
        except OSError as exc:
            Path(tmp).unlink(missing_ok=True)
            raise StorageError(str(exc)) from exc
        logger.debug("FileStore: wrote %s (%d chars)", key, len(value))

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(
            unquote(path.name[: -len(_SUFFIX)])
            for path in self.directory.iterdir()
            if path.suffix == _SUFFIX and not path.name.startswith(".tmp-")
        )
