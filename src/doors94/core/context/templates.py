"""Preset user context templates for the setup wizard.

A template fills in typical settings for a kind of user.  Applying one on
top of an existing context keeps list fields additive (tech stack,
constraints and goals are unioned) and merges preferences key by key.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from doors94.core.context.models import UserContext, UserPreferences


class ContextTemplate(BaseModel):
    id: str
    name: str
    description: str
    context: dict[str, Any]


CONTEXT_TEMPLATES: tuple[ContextTemplate, ...] = (
    ContextTemplate(
        id="junior-developer",
        name="Junior Developer",
        description="For developers early in their career",
        context={
            "skillLevel": "beginner",
            "timeCapacity": "flexible",
            "learningStyle": "hands-on",
            "tone": "friendly",
            "preferences": {
                "codeStyle": "verbose",
                "documentationLevel": "extensive",
                "comments": "generous",
            },
            "techStack": ["JavaScript", "React", "Node.js"],
            "constraints": ["Learning new technologies", "Following best practices"],
        },
    ),
    ContextTemplate(
        id="startup-founder",
        name="Startup Founder",
        description="For entrepreneurs building their first product",
        context={
            "skillLevel": "intermediate",
            "timeCapacity": "limited",
            "learningStyle": "conceptual",
            "tone": "concise",
            "preferences": {
                "codeStyle": "minimal",
                "documentationLevel": "minimal",
                "comments": "sparse",
            },
            "constraints": ["Limited time", "Need quick wins", "Budget constraints"],
            "goals": [
                {
                    "title": "Build MVP",
                    "description": "Create a minimal viable product to validate the idea",
                    "status": "in-progress",
                    "priority": "high",
                }
            ],
        },
    ),
    ContextTemplate(
        id="enterprise-developer",
        name="Enterprise Developer",
        description="For developers working in large organizations",
        context={
            "skillLevel": "advanced",
            "timeCapacity": "moderate",
            "learningStyle": "examples",
            "tone": "concise",
            "preferences": {
                "codeStyle": "balanced",
                "documentationLevel": "moderate",
                "comments": "sparse",
            },
            "techStack": ["TypeScript", "React", "Java", "Python"],
            "constraints": ["Code quality standards", "Security requirements", "Team collaboration"],
        },
    ),
    ContextTemplate(
        id="designer-learning-code",
        name="Designer Learning Code",
        description="For designers expanding into development",
        context={
            "skillLevel": "beginner",
            "timeCapacity": "moderate",
            "learningStyle": "visual",
            "tone": "friendly",
            "preferences": {
                "codeStyle": "verbose",
                "documentationLevel": "extensive",
                "comments": "generous",
            },
            "techStack": ["HTML", "CSS", "JavaScript"],
            "goals": [
                {
                    "title": "Learn Frontend Development",
                    "description": "Build interactive designs and prototypes",
                    "status": "in-progress",
                    "priority": "high",
                }
            ],
        },
    ),
    ContextTemplate(
        id="senior-engineer",
        name="Senior Engineer",
        description="For experienced engineers leading projects",
        context={
            "skillLevel": "expert",
            "timeCapacity": "moderate",
            "learningStyle": "conceptual",
            "tone": "blunt",
            "preferences": {
                "codeStyle": "minimal",
                "documentationLevel": "moderate",
                "comments": "sparse",
            },
            "techStack": [],
            "constraints": ["Technical debt", "Performance requirements", "Team mentoring"],
        },
    ),
)


def get_template(template_id: str) -> ContextTemplate | None:
    for template in CONTEXT_TEMPLATES:
        if template.id == template_id:
            return template
    return None


def _union(first: list[str] | None, second: list[str] | None) -> list[str]:
    return list(dict.fromkeys([*(first or []), *(second or [])]))


def apply_template(template: ContextTemplate, existing: UserContext | None = None) -> UserContext:
    """Overlay *template* on *existing* and return the merged context."""
    base = existing or UserContext()
    overlay = UserContext.model_validate(template.context)
    overlay_fields = {
        field: getattr(overlay, field)
        for field in overlay.model_fields_set
        if field not in ("tech_stack", "constraints", "goals", "preferences")
    }
    merged = base.model_copy(update=overlay_fields, deep=True)

    merged.tech_stack = _union(base.tech_stack, overlay.tech_stack)
    merged.constraints = _union(base.constraints, overlay.constraints)
    merged.goals = [
        *(g.model_copy() for g in base.goals or []),
        *(overlay.goals or []),
    ]

    preferences: dict[str, Any] = {}
    if base.preferences:
        preferences.update(base.preferences.model_dump(exclude_none=True))
    if overlay.preferences:
        preferences.update(overlay.preferences.model_dump(exclude_none=True))
    merged.preferences = UserPreferences(**preferences)
    return merged

