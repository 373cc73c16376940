"""Agent Manifest models: structured agent descriptions.

An Agent Manifest declares who an agent is (name, description, icon), what
it is for (purpose), how it must behave (rules), how it talks (tone) and how
it formats its answers (output style).  Manifests are compiled into a
system prompt by :func:`doors94.core.manifest.compiler.compile_prompt`.

The model is deliberately lenient: field limits are enforced by
:func:`doors94.core.manifest.validator.validate_manifest` so that a partially
filled manifest can be held in memory and reported on in full.

Example JSON (the persisted form)::

    {
      "id": "pirate",
      "name": "Pirate",
      "description": "Talks like a pirate.",
      "icon": "🏴‍☠️",
      "purpose": "Help with tasks",
      "rules": ["Always say arr"],
      "tone": "playful",
      "outputStyle": "Short answers."
    }
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Tone = Literal["serious", "friendly", "playful", "blunt"]
AgentSource = Literal["builtin", "user"]

TONES: tuple[str, ...] = ("serious", "friendly", "playful", "blunt")


class AgentManifest(BaseModel):
    """A single agent definition."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    name: str = ""
    description: str = ""
    icon: str = ""
    purpose: str = ""
    rules: list[str] = []
    tone: Tone | None = None
    output_style: str = Field(default="", alias="outputStyle")

    @model_validator(mode="before")
    @classmethod
    def _nulls_as_unset(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-ready persisted form (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True, exclude={"source"})

    def with_source(self, source: AgentSource) -> AgentManifestWithSource:
        """Tag this manifest with where it came from."""
        return AgentManifestWithSource(**self.model_dump(), source=source)


class AgentManifestWithSource(AgentManifest):
    """A manifest plus its origin: shipped in code or created by the user."""

    source: AgentSource

    def manifest(self) -> AgentManifest:
        """Strip the source tag."""
        return AgentManifest(**self.model_dump(exclude={"source"}))
