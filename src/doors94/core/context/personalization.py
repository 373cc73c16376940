"""Personalization: project the user context into prompt-ready text.

Every agent category sees a different slice of the same
:class:`~doors94.core.context.models.UserContext`.  The slices are a table
of projection functions keyed by agent id; unknown agents get
:func:`_project_default`.  Adding a category is one table entry.

The output is a single paragraph: name/role, the category projection, and
a closing sentence on communication tone.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from doors94.core.manifest.compiler import compile_prompt

if TYPE_CHECKING:
    from doors94.core.context.models import UserContext
    from doors94.core.manifest.models import AgentManifest

CONTEXT_TONE_DESCRIPTIONS: dict[str, str] = {
    "friendly": "in a warm, friendly, and approachable manner",
    "blunt": "directly and without unnecessary pleasantries",
    "concise": "briefly and to the point, avoiding unnecessary elaboration",
    "playful": "with a light, playful, and engaging tone",
}

SKILL_LEVEL_DESCRIPTIONS: dict[str, str] = {
    "beginner": "They are a beginner and may need more explanation and guidance.",
    "intermediate": "They have intermediate experience and can handle moderate complexity.",
    "advanced": "They are advanced and can handle complex topics with less explanation.",
    "expert": "They are an expert and can discuss advanced topics at a high level.",
}

TIME_CAPACITY_DESCRIPTIONS: dict[str, str] = {
    "limited": "They have limited time, so prioritize quick wins and minimal viable solutions.",
    "moderate": "They have moderate time available for their projects.",
    "flexible": "They have flexible time constraints and can invest in more thorough solutions.",
}

LEARNING_STYLE_DESCRIPTIONS: dict[str, str] = {
    "visual": "They learn best with visual aids, diagrams, and examples.",
    "hands-on": "They learn best by doing, so provide step-by-step instructions they can follow.",
    "conceptual": "They prefer understanding the underlying concepts first.",
    "examples": "They learn best from concrete examples and code snippets.",
}

Projection = Callable[["UserContext"], list[str]]


def _skill(ctx: UserContext) -> list[str]:
    return [SKILL_LEVEL_DESCRIPTIONS[ctx.skill_level]] if ctx.skill_level else []


def _projects(ctx: UserContext) -> list[str]:
    return [f"They are currently working on: {ctx.projects}"] if ctx.projects else []


def _project_planning(ctx: UserContext) -> list[str]:
    parts: list[str] = []
    if ctx.goals:
        active = [g for g in ctx.goals if g.is_active]
        if active:
            parts.append(f"Their current goals include: {', '.join(g.title for g in active)}.")
            parts.extend(
                f"- {g.title}: {g.description} (priority: {g.priority})"
                for g in active
                if g.description
            )
    else:
        parts.extend(_projects(ctx))

    if ctx.constraints:
        parts.append(f"Key constraints: {', '.join(ctx.constraints)}.")
    if ctx.time_capacity:
        parts.append(TIME_CAPACITY_DESCRIPTIONS[ctx.time_capacity])
    return parts


def _project_builder(ctx: UserContext) -> list[str]:
    parts: list[str] = []
    if ctx.tech_stack:
        parts.append(f"Their preferred tech stack: {', '.join(ctx.tech_stack)}.")
    parts.extend(_skill(ctx))

    if ctx.preferences:
        prefs = ctx.preferences
        pref_parts: list[str] = []
        if prefs.code_style:
            pref_parts.append(f"code style: {prefs.code_style}")
        if prefs.documentation_level:
            pref_parts.append(f"documentation: {prefs.documentation_level}")
        if prefs.comments:
            pref_parts.append(f"comments: {prefs.comments}")
        if pref_parts:
            parts.append(f"Code preferences: {', '.join(pref_parts)}.")

    if ctx.goals:
        building = [g.title for g in ctx.goals if g.status == "in-progress"]
        if building:
            parts.append(f"They are currently building: {', '.join(building)}.")
    else:
        parts.extend(_projects(ctx))
    return parts


def _project_troubleshooting(ctx: UserContext) -> list[str]:
    parts = _skill(ctx)
    if ctx.tech_stack:
        parts.append(
            f"Their tech stack: {', '.join(ctx.tech_stack)}. Use stack-specific solutions."
        )
    if ctx.learning_style:
        parts.append(LEARNING_STYLE_DESCRIPTIONS[ctx.learning_style])
    return parts


def _project_creative(ctx: UserContext) -> list[str]:
    parts: list[str] = []
    if ctx.goals:
        interests = list(dict.fromkeys(tech for g in ctx.goals for tech in g.related_tech or []))
        if interests:
            parts.append(f"They're interested in: {', '.join(interests)}.")
    parts.extend(_skill(ctx))
    if ctx.tech_stack:
        parts.append(f"They enjoy working with: {', '.join(ctx.tech_stack)}.")
    if ctx.projects:
        parts.append(f"Current interests: {ctx.projects}")
    return parts


def _project_default(ctx: UserContext) -> list[str]:
    parts: list[str] = []
    if ctx.goals:
        active = [g.title for g in ctx.goals if g.is_active]
        if active:
            parts.append(f"Current goals: {', '.join(active)}.")
    else:
        parts.extend(_projects(ctx))
    parts.extend(_skill(ctx))
    if ctx.tech_stack:
        parts.append(f"Tech stack: {', '.join(ctx.tech_stack)}.")
    return parts


PROJECTIONS: dict[str, Projection] = {
    "pm95": _project_planning,
    "builder": _project_builder,
    "fixit": _project_troubleshooting,
    "tinkerer": _project_creative,
}


def serialize_user_context(context: UserContext | None, agent_id: str | None = None) -> str:
    """Render *context* as a paragraph tailored to *agent_id*.

    Returns ``""`` when there is no context.
    """
    if context is None:
        return ""

    parts: list[str] = []
    if context.name:
        parts.append(f"The user's name is {context.name}.")
    if context.role:
        parts.append(f"They work as a {context.role}.")

    projection = PROJECTIONS.get(agent_id or "", _project_default)
    parts.extend(projection(context))

    if context.tone in CONTEXT_TONE_DESCRIPTIONS:
        parts.append(
            f"You should communicate with them {CONTEXT_TONE_DESCRIPTIONS[context.tone]}."
        )

    return " ".join(parts).strip()


def build_system_prompt(
    manifest: AgentManifest,
    context: UserContext | None = None,
    override: str = "",
) -> str:
    """Compose the full system prompt sent for *manifest*.

    Compiled manifest, then the user context paragraph for that agent, then
    the agent override, separated by blank lines.  Empty parts are skipped.
    """
    sections = [
        compile_prompt(manifest),
        serialize_user_context(context, manifest.id),
        override.strip(),
    ]
    return "\n\n".join(section for section in sections if section)
