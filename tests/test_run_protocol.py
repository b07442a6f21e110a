"""Tests for run_protocol module."""
from datetime import datetime, timezone

from run_protocol import (
    LATEST_MARKER,
    design_slug,
    latest_run_dir,
    make_run_id,
    mark_latest,
    prepare_run_dir,
    write_manifest,
    write_summary,
)


class TestRunIds:

    def test_design_slug(self):
        assert design_slug("My Box v2!") == "my-box-v2"
        assert design_slug("spur_gear") == "spur_gear"

    def test_empty_slug_falls_back(self):
        assert design_slug("!!!") == "design"

    def test_run_id_carries_kind_and_design(self):
        now = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)
        assert make_run_id("gear", "Drive Gear", now) == "20240305_140709_gear_drive-gear"


class TestPrepareRunDir:

    def test_layout(self, tmp_path):
        paths = prepare_run_dir(str(tmp_path), "box", "Tool Box")
        assert paths.run_id.endswith("_box_tool-box")
        assert paths.artifacts_dir.is_dir()
        assert paths.manifest_path == paths.run_dir / "manifest.json"
        assert paths.summary_path == paths.run_dir / "summary.md"

    def test_artifact_named_after_design(self, tmp_path):
        paths = prepare_run_dir(str(tmp_path), "box", "tool_box")
        assert paths.artifact("svg") == paths.artifacts_dir / "tool_box.svg"
        assert paths.artifact(".dxf") == paths.artifacts_dir / "tool_box.dxf"

    def test_repeated_run_gets_new_directory(self, tmp_path):
        first = prepare_run_dir(str(tmp_path), "box", "box")
        (tmp_path / f"{first.run_id}_2").mkdir()
        second = prepare_run_dir(str(tmp_path), "box", "box")
        assert second.run_dir != first.run_dir
        assert second.artifacts_dir.is_dir()


class TestRunFiles:

    def test_manifest_and_summary(self, tmp_path):
        paths = prepare_run_dir(str(tmp_path), "gear", "gear")
        write_manifest(paths, {"run_id": paths.run_id, "points": 121})
        write_summary(paths, "# Run\n")
        assert '"points": 121' in paths.manifest_path.read_text(encoding="utf-8")
        assert paths.summary_path.read_text(encoding="utf-8") == "# Run\n"

    def test_latest_marker(self, tmp_path):
        assert latest_run_dir(str(tmp_path)) is None
        paths = prepare_run_dir(str(tmp_path), "gear", "gear")
        mark_latest(str(tmp_path), paths)
        assert (tmp_path / LATEST_MARKER).read_text(encoding="utf-8").strip() == paths.run_id
        assert latest_run_dir(str(tmp_path)) == paths.run_dir
