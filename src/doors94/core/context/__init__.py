"""User context: profile, personalization, overrides and long-term memory."""

from doors94.core.context.models import Goal, UserContext, UserPreferences
from doors94.core.context.personalization import (
    PROJECTIONS,
    build_system_prompt,
    serialize_user_context,
)
from doors94.core.context.store import (
    AgentOverrideStore,
    ConversationMemory,
    ConversationMemoryStore,
    UserContextStore,
    migrate_user_context,
)
from doors94.core.context.templates import CONTEXT_TEMPLATES, apply_template, get_template

__all__ = [
    "CONTEXT_TEMPLATES",
    "PROJECTIONS",
    "AgentOverrideStore",
    "ConversationMemory",
    "ConversationMemoryStore",
    "Goal",
    "UserContext",
    "UserContextStore",
    "UserPreferences",
    "apply_template",
    "build_system_prompt",
    "get_template",
    "migrate_user_context",
    "serialize_user_context",
]
