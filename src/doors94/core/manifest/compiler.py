"""Prompt compiler: turn a validated manifest into a system prompt.

The compiler is a plain template function: the same manifest always yields
the same prompt, byte for byte.  Sections appear in a fixed order, each
header preceded by a blank line:

    You are {name}.
    {description}

    Your mission: {purpose}

    RULES:
    - {rule}

    TONE & STYLE:
    {tone sentence}

    OUTPUT FORMAT:
    {output style}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from doors94.core.manifest.models import AgentManifest

TONE_DESCRIPTIONS: dict[str, str] = {
    "serious": "Maintain a serious, professional, and no-nonsense tone. Be direct and factual.",
    "friendly": (
        "Be warm, friendly, and approachable. "
        "Use a conversational style that puts users at ease."
    ),
    "playful": (
        "Be light-hearted, creative, and engaging. "
        "Don't be afraid to show personality and have fun."
    ),
    "blunt": (
        "Be direct, honest, and straightforward. "
        "Skip pleasantries and get straight to the point."
    ),
}


def compile_prompt(manifest: AgentManifest) -> str:
    """Compile *manifest* into a system prompt.

    Assumes the manifest already passed validation; the result's length is
    not checked here.
    """
    parts: list[str] = [f"You are {manifest.name}."]

    if manifest.description:
        parts.append(manifest.description)

    if manifest.purpose:
        parts.append(f"\nYour mission: {manifest.purpose}")

    if manifest.rules:
        parts.append("\nRULES:")
        parts.extend(f"- {rule}" for rule in manifest.rules)

    if manifest.tone:
        parts.append("\nTONE & STYLE:")
        parts.append(TONE_DESCRIPTIONS[manifest.tone])

    if manifest.output_style:
        parts.append("\nOUTPUT FORMAT:")
        parts.append(manifest.output_style)

    return "\n".join(parts).strip()
