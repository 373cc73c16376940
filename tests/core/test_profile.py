"""Tests for the profile application context."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from doors94.core.context.models import UserContext
from doors94.core.context.personalization import build_system_prompt
from doors94.core.profile import PROFILE_DIR_ENV, Profile, default_profile_dir
from doors94.core.storage.backend import FileStore, InMemoryStore
from tests.conftest import make_manifest

if TYPE_CHECKING:
    from pathlib import Path


class TestProfile:
    def test_repositories_share_the_store(self, profile: Profile) -> None:
        profile.agents.save_user_agent(make_manifest())
        profile.user_context.save(UserContext(name="Ada"))
        profile.overrides.set("pirate", "Arr more.")

        reopened = Profile(profile.store)
        assert reopened.agents.get_user_agent("pirate") is not None
        assert reopened.user_context.get() == UserContext(name="Ada")
        assert reopened.overrides.get("pirate") == "Arr more."

    def test_in_memory(self) -> None:
        assert isinstance(Profile.in_memory().store, InMemoryStore)

    def test_open_persists_to_disk(self, tmp_path: Path) -> None:
        first = Profile.open(tmp_path)
        assert isinstance(first.store, FileStore)
        first.agents.save_user_agent(make_manifest())

        second = Profile.open(tmp_path)
        assert [a.id for a in second.agents.load_user_agents()] == ["pirate"]

    def test_default_dir_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(PROFILE_DIR_ENV, str(tmp_path))
        assert default_profile_dir() == tmp_path

    def test_default_dir_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(PROFILE_DIR_ENV, raising=False)
        assert default_profile_dir().name == ".doors94"


class TestSystemPromptFor:
    def test_unknown_agent(self, profile: Profile) -> None:
        assert profile.system_prompt_for("ghost") is None

    def test_uses_stored_context_and_override(self, profile: Profile) -> None:
        manifest = make_manifest()
        ctx = UserContext(name="Ada")
        profile.agents.save_user_agent(manifest)
        profile.user_context.save(ctx)
        profile.overrides.set("pirate", "Arr more.")

        assert profile.system_prompt_for("pirate") == build_system_prompt(
            manifest, ctx, "Arr more."
        )

    def test_explicit_context_wins(self, profile: Profile) -> None:
        profile.user_context.save(UserContext(name="Stored"))
        prompt = profile.system_prompt_for("tutorial", UserContext(name="Given"))
        assert prompt is not None
        assert "Given" in prompt
        assert "Stored" not in prompt
