"""
Tests for change manifest loading.
"""

import json

import pytest

from assetsync.sync.errors import ManifestError
from assetsync.sync.manifest import load_changes


class TestLoadChanges:
    """Tests for load_changes."""

    def test_yaml_manifest(self, tmp_path):
        path = tmp_path / "changes.yaml"
        path.write_text(
            "added:\n  - icons/a.svg\n"
            "modified:\n  - icons/b.svg\n"
            "removed:\n  - old/c.svg\n  - old/d.svg\n"
        )

        changes = load_changes(path)

        assert changes.added == ["icons/a.svg"]
        assert changes.modified == ["icons/b.svg"]
        assert changes.removed == ["old/c.svg", "old/d.svg"]

    def test_json_manifest(self, tmp_path):
        path = tmp_path / "changes.json"
        path.write_text(json.dumps({"added": ["a.svg"], "removed": ["b.svg"]}))

        changes = load_changes(path)

        assert changes.added == ["a.svg"]
        assert changes.modified == []
        assert changes.removed == ["b.svg"]

    def test_empty_keys_and_empty_file(self, tmp_path):
        path = tmp_path / "changes.yml"
        path.write_text("added:\nremoved:\n")
        assert load_changes(path).is_empty()

        empty = tmp_path / "empty.yaml"
        empty.write_text("")
        assert load_changes(empty).is_empty()

    def test_unknown_keys_are_ignored(self, tmp_path):
        path = tmp_path / "changes.yaml"
        path.write_text("generated_by: icon-diff\nadded: [a.svg]\n")

        assert load_changes(path).added == ["a.svg"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="Cannot read"):
            load_changes(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "changes.yaml"
        path.write_text("added: [a.svg\n")

        with pytest.raises(ManifestError, match="Cannot parse"):
            load_changes(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "changes.yaml"
        path.write_text("- a.svg\n- b.svg\n")

        with pytest.raises(ManifestError, match="must be a mapping"):
            load_changes(path)

    def test_wrong_value_type(self, tmp_path):
        path = tmp_path / "changes.json"
        path.write_text(json.dumps({"added": {"a.svg": 1}}))

        with pytest.raises(ManifestError, match="Invalid change manifest"):
            load_changes(path)

    def test_path_escaping_the_tree_is_rejected(self, tmp_path):
        path = tmp_path / "changes.yaml"
        path.write_text("added: [icons/a.svg, ../../etc/cron.d/x]\n")

        with pytest.raises(ManifestError, match="must not contain '..'"):
            load_changes(path)

    def test_absolute_path_is_rejected(self, tmp_path):
        path = tmp_path / "changes.json"
        path.write_text(json.dumps({"removed": ["/etc/passwd"]}))

        with pytest.raises(ManifestError, match="must be relative"):
            load_changes(path)
