"""
Tests for asset and report models.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from assetsync.models.asset import AssetRecord, ChangeSets
from assetsync.models.report import ItemFailure, SyncReport


class TestAssetRecord:
    """Tests for AssetRecord."""

    def test_relative_to_repo(self):
        record = AssetRecord(repo=Path("/work/icons"), file=Path("/work/icons/actions/run.svg"))
        assert record.relative_to_repo == "actions/run.svg"

    def test_is_immutable(self):
        record = AssetRecord(repo=Path("/r"), file=Path("/r/a.svg"))
        with pytest.raises(ValidationError):
            record.file = Path("/r/b.svg")


class TestChangeSets:
    """Tests for ChangeSets."""

    def test_defaults_are_empty(self):
        changes = ChangeSets()
        assert changes.is_empty()
        assert changes.total() == 0

    def test_duplicates_are_dropped_in_order(self):
        changes = ChangeSets(added=["b.svg", "a.svg", "b.svg"])
        assert changes.added == ["b.svg", "a.svg"]

    def test_overlapping_reports_but_does_not_reject(self):
        changes = ChangeSets(
            added=["a.svg", "x.svg"],
            modified=["a.svg"],
            removed=["x.svg", "z.svg"],
        )
        assert changes.overlapping() == ["a.svg", "x.svg"]
        assert changes.total() == 5

    def test_disjoint_sets_have_no_overlap(self):
        changes = ChangeSets(added=["a"], modified=["b"], removed=["c"])
        assert changes.overlapping() == []

    @pytest.mark.parametrize("path", ["../x.svg", "icons/../../x.svg", "/etc/x.svg", "C:\\x.svg", ""])
    def test_paths_escaping_the_tree_are_rejected(self, path):
        with pytest.raises(ValidationError):
            ChangeSets(removed=["ok.svg", path])

    def test_dotted_names_are_allowed(self):
        changes = ChangeSets(added=["icons/..hidden.svg", "./a.svg"])
        assert changes.added == ["icons/..hidden.svg", "./a.svg"]


class TestSyncReport:
    """Tests for SyncReport."""

    def test_ok_without_failures(self):
        assert SyncReport(added=3).ok is True

    def test_failures_for_filters_by_operation(self):
        report = SyncReport(failures=[
            ItemFailure(operation="added", target="a", error="x", error_type="OSError"),
            ItemFailure(operation="removed", target="b", error="y", error_type="DeletionError"),
        ])
        assert report.ok is False
        assert [f.target for f in report.failures_for("removed")] == ["b"]

    def test_item_failure_from_exception(self):
        failure = ItemFailure.from_exception("stage", "/repo", RuntimeError("locked"))
        assert failure.error == "locked"
        assert failure.error_type == "RuntimeError"
