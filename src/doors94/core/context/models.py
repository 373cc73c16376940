"""User context models: who the end user is and how they like to work.

Persisted with camelCase keys (``skillLevel``, ``techStack``...).  Optional
fields stay ``None`` when the user never filled them in and are omitted
from the stored record.

``projects`` (free text) is the legacy way of describing current work and
``goals`` the structured one.  Both are kept side by side; nothing converts
one into the other.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

GoalStatus = Literal["planning", "in-progress", "on-hold", "completed"]
GoalPriority = Literal["high", "medium", "low"]
ContextTone = Literal["friendly", "blunt", "concise", "playful"]
SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]
TimeCapacity = Literal["limited", "moderate", "flexible"]
LearningStyle = Literal["visual", "hands-on", "conceptual", "examples"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-ready persisted form."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Goal(_CamelModel):
    """A structured goal the user is working towards."""

    title: str
    description: str = ""
    status: GoalStatus = "planning"
    priority: GoalPriority = "medium"
    related_tech: list[str] | None = Field(default=None, alias="relatedTech")

    @property
    def is_active(self) -> bool:
        return self.status in ("planning", "in-progress")


class UserPreferences(_CamelModel):
    code_style: Literal["verbose", "minimal", "balanced"] | None = Field(
        default=None, alias="codeStyle"
    )
    documentation_level: Literal["none", "minimal", "moderate", "extensive"] | None = Field(
        default=None, alias="documentationLevel"
    )
    error_handling: Literal["strict", "flexible"] | None = Field(
        default=None, alias="errorHandling"
    )
    comments: Literal["none", "sparse", "generous"] | None = None


class UserContext(_CamelModel):
    """The end user's profile, one per profile store."""

    name: str = ""
    role: str = ""
    projects: str | None = None
    goals: list[Goal] | None = None
    tone: ContextTone = "friendly"
    skill_level: SkillLevel | None = Field(default=None, alias="skillLevel")
    tech_stack: list[str] | None = Field(default=None, alias="techStack")
    time_capacity: TimeCapacity | None = Field(default=None, alias="timeCapacity")
    preferences: UserPreferences | None = None
    constraints: list[str] | None = None
    learning_style: LearningStyle | None = Field(default=None, alias="learningStyle")
