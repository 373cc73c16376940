"""Manifest file loading: parse agent manifests from YAML or JSON files.

Typical usage::

    loader = ManifestLoader(Path("agents"))
    manifests = loader.load_all()
    prompt = compile_prompt(manifests["pirate"])
"""

from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003
from typing import Any

import yaml

from doors94.core.manifest.models import AgentManifest

_SUFFIXES = (".yaml", ".yml", ".json")


def parse_manifest_data(raw: str, *, format: str = "yaml") -> dict[str, Any]:
    """Parse a raw string into the manifest mapping, without building a model.

    Use this when the mapping should go through
    :func:`~doors94.core.manifest.validator.validate_manifest` first, so that
    bad field values are reported as validator errors.

    Raises:
        ValueError: If the document is not a mapping.
    """
    data: Any = json.loads(raw) if format == "json" else yaml.safe_load(raw)
    if not isinstance(data, dict):
        msg = "manifest document must be a mapping"
        raise ValueError(msg)
    return data


def parse_manifest(raw: str, *, format: str = "yaml") -> AgentManifest:
    """Parse a raw string into an :class:`AgentManifest`.

    Field limits are *not* checked here; run the result through
    :func:`~doors94.core.manifest.validator.validate_manifest`.

    Args:
        raw: The raw file contents.
        format: ``"yaml"`` (default) or ``"json"``.

    Raises:
        ValueError: If the document is not a mapping.
    """
    return AgentManifest.model_validate(parse_manifest_data(raw, format=format))


def read_manifest_file(path: Path) -> dict[str, Any]:
    """Read a single manifest file into its raw mapping."""
    raw = path.read_text(encoding="utf-8")
    fmt = "json" if path.suffix == ".json" else "yaml"
    return parse_manifest_data(raw, format=fmt)


def load_manifest_file(path: Path) -> AgentManifest:
    """Read and parse a single manifest file."""
    return AgentManifest.model_validate(read_manifest_file(path))


def manifest_paths(directory: Path) -> list[Path]:
    """Return the manifest files in *directory*, sorted by name."""
    if not directory.is_dir():
        return []
    return [path for path in sorted(directory.iterdir()) if path.suffix in _SUFFIXES]


class ManifestLoader:
    """Load manifests from a directory of ``.yaml``/``.yml``/``.json`` files.

    Each file holds a single manifest.  Results are keyed by agent id.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def load_all(self) -> dict[str, AgentManifest]:
        """Load every manifest in the directory (re-reads disk each call)."""
        manifests: dict[str, AgentManifest] = {}
        for path in manifest_paths(self.directory):
            manifest = load_manifest_file(path)
            manifests[manifest.id] = manifest
        return manifests
