import json

import pytest

from campaign_rollup.domain.models import SnapshotShapeError
from campaign_rollup.infrastructure.report_exporter import save_output_workbook, save_summary_json
from campaign_rollup.infrastructure.snapshot_repository import load_snapshot


def test_load_snapshot(tmp_path, sample_payload):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(sample_payload), encoding="utf-8")
    snapshot = load_snapshot(path)
    assert [campaign.name for campaign in snapshot.campaigns] == ["Summer Sale", "Brand Awareness"]


def test_load_snapshot_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_snapshot(tmp_path / "nope.json")


def test_load_snapshot_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{campaigns: [", encoding="utf-8")
    with pytest.raises(SnapshotShapeError):
        load_snapshot(path)


def test_load_snapshot_wrong_shape(tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps([{"id": 1}]), encoding="utf-8")
    with pytest.raises(SnapshotShapeError):
        load_snapshot(path)


def test_save_summary_json_creates_parent(tmp_path):
    path = tmp_path / "nested" / "summary.json"
    save_summary_json(path, {"campaign_count": 0})
    assert json.loads(path.read_text(encoding="utf-8")) == {"campaign_count": 0}


def test_save_output_workbook_reports_permission_error(tmp_path, monkeypatch):
    import campaign_rollup.infrastructure.report_exporter as exporter

    def _locked(path, sheets):
        raise PermissionError("file is locked")

    monkeypatch.setattr(exporter, "write_output_workbook", _locked)
    saved, message = save_output_workbook(tmp_path / "out.xlsx", {})
    assert saved is False
    assert "locked" in message
