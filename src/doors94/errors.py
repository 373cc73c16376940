"""Shared error types for the manifest, storage and gateway layers."""

from __future__ import annotations


class Doors94Error(Exception):
    """Base error for all doors94 failures."""


class ManifestValidationError(Doors94Error):
    """A manifest (or user context) failed its field rules.

    Carries the complete list of violations so a caller can render all of
    them at once.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(f"Invalid agent manifest: {', '.join(self.errors)}")


class CollisionError(Doors94Error):
    """A user agent id conflicts with a built-in agent."""

    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(
            f'Agent ID "{agent_id}" conflicts with a built-in agent. '
            "Please choose a different ID."
        )


class ImmutableError(Doors94Error):
    """Attempted to modify or delete a built-in agent."""

    def __init__(self, agent_id: str) -> None:
        self.agent_id = agent_id
        super().__init__(f"Cannot delete built-in agents: {agent_id}")


class QuotaError(Doors94Error):
    """A count limit (agents, conversations, memories) was reached."""

    def __init__(self, limit: int, kind: str = "user agents") -> None:
        self.limit = limit
        self.kind = kind
        super().__init__(
            f"Maximum of {limit} {kind} allowed. Please delete an existing one first."
        )


class NotFoundError(Doors94Error):
    """The targeted agent or conversation does not exist."""

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f'{kind.capitalize()} with id "{identifier}" not found')


class StorageError(Doors94Error):
    """The underlying profile store failed to write."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Storage error" + (f": {detail}" if detail else ""))


class StorageQuotaExceededError(StorageError):
    """The profile store ran out of space."""

    def __init__(self, quota_bytes: int | None = None) -> None:
        self.quota_bytes = quota_bytes
        detail = "quota exceeded"
        if quota_bytes is not None:
            detail += f" ({quota_bytes} bytes)"
        super().__init__(detail)


class UpstreamError(Doors94Error):
    """The completion API rejected or failed a request."""

    def __init__(self, message: str, status: int = 500, code: str | None = None) -> None:
        self.message = message
        self.status = status
        self.code = code
        super().__init__(message)


class ConfigError(Doors94Error):
    """Required server configuration (the API credential) is missing."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class InvalidRequestError(Doors94Error):
    """A chat request is malformed (e.g. no messages)."""


class EmptyResponseError(Doors94Error):
    """The completion API answered without any assistant text."""
