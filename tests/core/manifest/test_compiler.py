"""Tests for the prompt compiler."""

from __future__ import annotations

import pytest

from doors94.core.manifest.compiler import TONE_DESCRIPTIONS, compile_prompt
from doors94.core.manifest.models import TONES
from tests.conftest import make_manifest


class TestCompilePrompt:
    def test_pirate_example(self) -> None:
        manifest = make_manifest(description="")
        prompt = compile_prompt(manifest)
        lines = prompt.split("\n")

        assert "You are Pirate." in lines
        assert "Your mission: Help with tasks" in lines
        assert "RULES:" in lines
        assert "- Always say arr" in lines
        assert "TONE & STYLE:" in lines
        assert TONE_DESCRIPTIONS["playful"] in lines
        assert len(prompt) <= 4000

    def test_exact_layout(self) -> None:
        manifest = make_manifest(
            rules=["First", "Second"],
            tone="blunt",
            output_style="Bullet points only.",
        )
        assert compile_prompt(manifest) == (
            "You are Pirate.\n"
            "Talks like a pirate.\n"
            "\n"
            "Your mission: Help with tasks\n"
            "\n"
            "RULES:\n"
            "- First\n"
            "- Second\n"
            "\n"
            "TONE & STYLE:\n"
            f"{TONE_DESCRIPTIONS['blunt']}\n"
            "\n"
            "OUTPUT FORMAT:\n"
            "Bullet points only."
        )

    def test_deterministic(self) -> None:
        manifest = make_manifest(output_style="Short.")
        assert compile_prompt(manifest) == compile_prompt(manifest.model_copy(deep=True))

    def test_rule_order_preserved_without_dedup(self) -> None:
        prompt = compile_prompt(make_manifest(rules=["b", "a", "b"]))
        assert "RULES:\n- b\n- a\n- b" in prompt

    def test_optional_sections_omitted(self) -> None:
        prompt = compile_prompt(make_manifest(description="", rules=[], output_style=""))
        assert "RULES:" not in prompt
        assert "OUTPUT FORMAT:" not in prompt
        assert prompt.startswith("You are Pirate.\n\nYour mission:")

    def test_result_is_stripped(self) -> None:
        prompt = compile_prompt(make_manifest(output_style="Trailing  "))
        assert prompt == prompt.strip()

    @pytest.mark.parametrize("tone", TONES)
    def test_one_sentence_per_tone(self, tone: str) -> None:
        prompt = compile_prompt(make_manifest(tone=tone))
        assert f"TONE & STYLE:\n{TONE_DESCRIPTIONS[tone]}" in prompt

    def test_tone_table_covers_enum(self) -> None:
        assert set(TONE_DESCRIPTIONS) == set(TONES)
