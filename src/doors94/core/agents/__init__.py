"""Agents: built-in definitions and the user agent repository."""

from doors94.core.agents.builtins import BUILTIN_AGENTS, BUILTIN_IDS, get_builtin_agent
from doors94.core.agents.repository import MAX_USER_AGENTS, AgentRepository

__all__ = [
    "BUILTIN_AGENTS",
    "BUILTIN_IDS",
    "MAX_USER_AGENTS",
    "AgentRepository",
    "get_builtin_agent",
]
