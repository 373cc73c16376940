"""Manifest validation: field rules checked independently.

:func:`validate_manifest` never raises: every rule is evaluated on its own
so that several simultaneous violations are all reported, letting a form
render every problem at once.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, NamedTuple

from doors94.core.manifest.models import TONES, AgentManifest

MAX_ID_LENGTH = 50
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 200
MAX_PURPOSE_LENGTH = 500
MAX_RULES = 20
MAX_RULE_LENGTH = 200
MAX_OUTPUT_STYLE_LENGTH = 300

_ID_PATTERN = re.compile(r"[a-z0-9_]+")


class ValidationResult(NamedTuple):
    """Outcome of :func:`validate_manifest`."""

    valid: bool
    errors: list[str]


def _as_mapping(manifest: AgentManifest | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(manifest, AgentManifest):
        return manifest.model_dump(by_alias=True)
    return manifest


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def validate_manifest(manifest: AgentManifest | Mapping[str, Any]) -> ValidationResult:
    """Check a (possibly partial) manifest against every field rule.

    Accepts an :class:`AgentManifest` or a raw mapping as read from storage
    or a request body.  Both ``outputStyle`` and ``output_style`` keys are
    understood.
    """
    data = _as_mapping(manifest)
    errors: list[str] = []

    agent_id = _text(data.get("id"))
    if not agent_id.strip():
        errors.append("Agent ID is required")
    else:
        if len(agent_id) > MAX_ID_LENGTH:
            errors.append(f"Agent ID must be {MAX_ID_LENGTH} characters or less")
        if not _ID_PATTERN.fullmatch(agent_id):
            errors.append(
                "Agent ID must contain only lowercase letters, numbers, and underscores"
            )

    name = _text(data.get("name"))
    if not name.strip():
        errors.append("Agent name is required")
    elif len(name) > MAX_NAME_LENGTH:
        errors.append(f"Agent name must be {MAX_NAME_LENGTH} characters or less")

    purpose = _text(data.get("purpose"))
    if not purpose.strip():
        errors.append("Purpose is required")
    elif len(purpose) > MAX_PURPOSE_LENGTH:
        errors.append(f"Purpose must be {MAX_PURPOSE_LENGTH} characters or less")

    tone = data.get("tone")
    if not tone:
        errors.append("Tone is required")
    elif tone not in TONES:
        errors.append(f"Tone must be one of: {', '.join(TONES)}")

    description = data.get("description")
    if description is not None and not isinstance(description, str):
        errors.append("Description must be text")
    elif description and len(description) > MAX_DESCRIPTION_LENGTH:
        errors.append(f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less")

    icon = data.get("icon")
    if icon is not None and not isinstance(icon, str):
        errors.append("Icon must be text")

    rules = data.get("rules")
    if rules is not None and not isinstance(rules, list):
        errors.append("Rules must be a list")
    elif rules:
        if len(rules) > MAX_RULES:
            errors.append(f"Maximum {MAX_RULES} rules allowed")
        for index, rule in enumerate(rules, start=1):
            if not isinstance(rule, str):
                errors.append(f"Rule {index} must be text")
            elif len(rule) > MAX_RULE_LENGTH:
                errors.append(f"Rule {index} must be {MAX_RULE_LENGTH} characters or less")

    output_style = data.get("outputStyle", data.get("output_style"))
    if output_style is not None and not isinstance(output_style, str):
        errors.append("Output style must be text")
    elif output_style and len(output_style) > MAX_OUTPUT_STYLE_LENGTH:
        errors.append(f"Output style must be {MAX_OUTPUT_STYLE_LENGTH} characters or less")

    return ValidationResult(valid=not errors, errors=errors)


def clean_rules(rules: list[str]) -> list[str]:
    """Drop blank rule entries, as a form does before validating."""
    return [rule.strip() for rule in rules if rule.strip()]


def generate_agent_id(name: str) -> str:
    """Derive an agent id from a display name.

    ``"My Cool Agent!"`` becomes ``"my_cool_agent"``.
    """
    agent_id = name.lower()
    agent_id = re.sub(r"[^a-z0-9\s]", "", agent_id)
    agent_id = re.sub(r"\s+", "_", agent_id)
    agent_id = re.sub(r"_+", "_", agent_id)
    return agent_id.strip("_")
