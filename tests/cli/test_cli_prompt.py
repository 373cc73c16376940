"""Tests for ``doors94 prompt`` CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest
from click.testing import CliRunner, Result

from doors94.cli import main
from doors94.core.context.models import UserContext
from doors94.core.profile import Profile
from tests.conftest import make_manifest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _no_tiktoken() -> Iterator[None]:
    with patch("doors94.cli_commands.prompt.estimate_prompt_tokens", return_value=42):
        yield


def _invoke(profile_dir: Path, *args: str) -> Result:
    return CliRunner().invoke(main, ["--profile", str(profile_dir), *args])


class TestPromptCompile:
    def test_compile_file(self, tmp_path: Path) -> None:
        path = tmp_path / "pirate.yaml"
        path.write_text("id: pirate\nname: Pirate\npurpose: Plunder\ntone: playful\n")

        result = _invoke(tmp_path / "profile", "prompt", "compile", str(path))

        assert result.exit_code == 0
        assert "You are Pirate." in result.output
        assert "Your mission: Plunder" in result.output
        assert "~42 tokens" in result.output

    def test_compile_agent_id(self, tmp_path: Path) -> None:
        result = _invoke(tmp_path, "prompt", "compile", "builder")
        assert result.exit_code == 0
        assert "You are" in result.output

    def test_with_context(self, tmp_path: Path) -> None:
        profile = Profile.open(tmp_path)
        profile.agents.save_user_agent(make_manifest())
        profile.user_context.save(UserContext(name="Ada"))
        profile.overrides.set("pirate", "Rhyme always.")

        plain = _invoke(tmp_path, "prompt", "compile", "pirate")
        personal = _invoke(tmp_path, "prompt", "compile", "pirate", "--with-context")

        assert "Ada" not in plain.output
        assert "The user's name is Ada." in personal.output
        assert "Rhyme always." in personal.output

    def test_invalid_manifest(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("id: bad\nname: Bad\n")
        result = _invoke(tmp_path / "profile", "prompt", "compile", str(path))
        assert result.exit_code == 1
        assert "Tone is required" in result.output

    def test_bad_tone_reported(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("id: bad\nname: Bad\npurpose: Plunder\ntone: angry\n")
        result = _invoke(tmp_path / "profile", "prompt", "compile", str(path))
        assert result.exit_code == 1
        assert "Tone must be one of" in result.output

    def test_unknown_source(self, tmp_path: Path) -> None:
        result = _invoke(tmp_path, "prompt", "compile", "ghost")
        assert result.exit_code == 1
        assert "No manifest file or agent named ghost" in result.output


class TestPromptContext:
    def test_no_context(self, tmp_path: Path) -> None:
        result = _invoke(tmp_path, "prompt", "context")
        assert result.exit_code == 0
        assert "No user context saved." in result.output

    def test_context_for_agent(self, tmp_path: Path) -> None:
        Profile.open(tmp_path).user_context.save(
            UserContext(name="Ada", tech_stack=["Python"], skill_level="expert")
        )
        result = _invoke(tmp_path, "prompt", "context", "--agent", "builder")
        assert result.exit_code == 0
        assert "Their preferred tech stack: Python." in result.output
