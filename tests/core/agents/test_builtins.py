"""Tests for the built-in agents."""

from __future__ import annotations

import pytest

from doors94.core.agents.builtins import BUILTIN_AGENTS, BUILTIN_IDS, get_builtin_agent
from doors94.core.manifest.compiler import compile_prompt
from doors94.core.manifest.models import AgentManifest
from doors94.core.manifest.validator import validate_manifest


class TestBuiltinAgents:
    def test_expected_ids_in_order(self) -> None:
        assert [a.id for a in BUILTIN_AGENTS] == [
            "tutorial",
            "pm95",
            "builder",
            "fixit",
            "tinkerer",
        ]
        assert frozenset(a.id for a in BUILTIN_AGENTS) == frozenset(BUILTIN_IDS)

    @pytest.mark.parametrize("agent", BUILTIN_AGENTS, ids=lambda a: a.id)
    def test_each_builtin_is_valid(self, agent: AgentManifest) -> None:
        result = validate_manifest(agent)
        assert result.valid, result.errors

    @pytest.mark.parametrize("agent", BUILTIN_AGENTS, ids=lambda a: a.id)
    def test_compiled_prompt_fits_the_cap(self, agent: AgentManifest) -> None:
        assert len(compile_prompt(agent)) <= 4000

    def test_lookup(self) -> None:
        agent = get_builtin_agent("fixit")
        assert agent is not None
        assert agent.name
        assert get_builtin_agent("pirate") is None
