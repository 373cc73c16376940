"""Chat gateway wire models.

Request body::

    {
      "agentManifest": {...},          # required unless mode == "raw"
      "messages": [{"role": "user", "content": "Hi"}],
      "mode": "agent",                 # or "raw"
      "userContext": "...",            # optional, appended to the prompt
      "agentOverride": "..."           # optional, appended after that
    }

Success: ``{"content": "..."}``.  Failure: ``{"error": "..."}``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ErrorKind = Literal[
    "invalid-input",
    "missing-config",
    "not-found",
    "upstream-error",
    "empty-response",
    "internal-error",
]

_STATUS_BY_KIND: dict[str, int] = {
    "invalid-input": 400,
    "missing-config": 500,
    "not-found": 404,
    "upstream-error": 500,
    "empty-response": 500,
    "internal-error": 500,
}


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """A single chat turn to forward to the completion API.

    ``agent_manifest`` is kept as a raw mapping so that an invalid manifest
    can be reported on in full rather than rejected by the parser.
    """

    model_config = ConfigDict(populate_by_name=True)

    agent_manifest: dict[str, Any] | None = Field(default=None, alias="agentManifest")
    messages: list[ChatMessage] = []
    mode: Literal["raw", "agent"] = "agent"
    user_context: str | None = Field(default=None, alias="userContext")
    agent_override: str | None = Field(default=None, alias="agentOverride")


class ChatResult(BaseModel):
    """Outcome of one gateway call: assistant text or a structured error."""

    content: str | None = None
    error: str | None = None
    kind: ErrorKind | None = None
    status: int = 200
    code: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, content: str) -> ChatResult:
        return cls(content=content)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        *,
        status: int | None = None,
        code: str | None = None,
    ) -> ChatResult:
        return cls(
            error=message,
            kind=kind,
            status=status if status is not None else _STATUS_BY_KIND[kind],
            code=code,
        )

    def body(self) -> dict[str, str]:
        """The JSON response body: ``{"content"}`` or ``{"error"}``."""
        if self.ok:
            return {"content": self.content or ""}
        return {"error": self.error or ""}
