"""Agent manifests: model, validation and prompt compilation."""

from doors94.core.manifest.compiler import TONE_DESCRIPTIONS, compile_prompt
from doors94.core.manifest.models import (
    TONES,
    AgentManifest,
    AgentManifestWithSource,
    AgentSource,
    Tone,
)
from doors94.core.manifest.validator import (
    ValidationResult,
    clean_rules,
    generate_agent_id,
    validate_manifest,
)

__all__ = [
    "TONES",
    "TONE_DESCRIPTIONS",
    "AgentManifest",
    "AgentManifestWithSource",
    "AgentSource",
    "Tone",
    "ValidationResult",
    "clean_rules",
    "compile_prompt",
    "generate_agent_id",
    "validate_manifest",
]
