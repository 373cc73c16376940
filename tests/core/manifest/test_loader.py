"""Tests for manifest file loading."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from doors94.core.manifest.loader import (
    ManifestLoader,
    load_manifest_file,
    manifest_paths,
    parse_manifest,
    read_manifest_file,
)

if TYPE_CHECKING:
    from pathlib import Path

_YAML = """\
id: {id}
name: {name}
purpose: Help with tasks
tone: friendly
rules:
  - Be kind
outputStyle: Short answers.
"""


class TestParseManifest:
    def test_parse_yaml(self) -> None:
        manifest = parse_manifest(_YAML.format(id="helper", name="Helper"))
        assert manifest.id == "helper"
        assert manifest.rules == ["Be kind"]
        assert manifest.output_style == "Short answers."

    def test_parse_json_snake_case(self) -> None:
        raw = json.dumps({"id": "j", "name": "J", "output_style": "Terse."})
        manifest = parse_manifest(raw, format="json")
        assert manifest.output_style == "Terse."

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(ValueError, match="mapping"):
            parse_manifest("- just\n- a list\n")

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_manifest("{invalid", format="json")


class TestManifestLoader:
    def test_load_all_keyed_by_id(self, tmp_path: Path) -> None:
        (tmp_path / "a.yaml").write_text(_YAML.format(id="alpha", name="Alpha"))
        (tmp_path / "b.json").write_text(json.dumps({"id": "beta", "name": "Beta"}))
        (tmp_path / "notes.txt").write_text("ignored")

        manifests = ManifestLoader(tmp_path).load_all()
        assert sorted(manifests) == ["alpha", "beta"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert ManifestLoader(tmp_path / "nope").load_all() == {}

    def test_load_single_file(self, tmp_path: Path) -> None:
        path = tmp_path / "one.yml"
        path.write_text(_YAML.format(id="one", name="One"))
        assert load_manifest_file(path).name == "One"

    def test_read_file_keeps_raw_values(self, tmp_path: Path) -> None:
        path = tmp_path / "one.json"
        path.write_text(json.dumps({"id": "one", "tone": "angry"}))
        assert read_manifest_file(path) == {"id": "one", "tone": "angry"}

    def test_manifest_paths(self, tmp_path: Path) -> None:
        for name in ("b.yml", "a.json", "notes.txt", "c.yaml"):
            (tmp_path / name).write_text("{}")
        assert [p.name for p in manifest_paths(tmp_path)] == ["a.json", "b.yml", "c.yaml"]
        assert manifest_paths(tmp_path / "nope") == []
