"""Tests for the snapshot JSON boundary and the bundled scenarios."""
import json

import pytest

from resus_gps.domain.models import SurveySnapshot
from resus_gps.infrastructure.scenarios import SCENARIOS, get_scenario, scenario_names
from resus_gps.infrastructure.snapshots import (
    SnapshotError,
    load_snapshot,
    load_snapshot_file,
    snapshot_to_json,
)


class TestLoadSnapshot:
    def test_valid_document(self):
        snap = load_snapshot('{"age_years": 3, "breathing": {"rate": 50}}')
        assert snap.age_years == 3
        assert snap.breathing.rate == 50

    def test_accepts_bytes(self):
        assert load_snapshot(b'{"age_years": 3}').age_years == 3

    def test_invalid_json(self):
        with pytest.raises(SnapshotError) as exc:
            load_snapshot("{not json")
        assert isinstance(exc.value.__cause__, json.JSONDecodeError)

    def test_undecodable_bytes(self):
        with pytest.raises(SnapshotError) as exc:
            load_snapshot(b'{"age_years": 5, "note": "\xff\xfe"}')
        assert isinstance(exc.value.__cause__, UnicodeDecodeError)

    def test_not_an_object(self):
        with pytest.raises(SnapshotError):
            load_snapshot("[1, 2, 3]")

    def test_validation_failure(self):
        with pytest.raises(SnapshotError) as exc:
            load_snapshot('{"age_years": -1}')
        assert "validation" in str(exc.value)

    def test_snapshot_error_is_value_error(self):
        with pytest.raises(ValueError):
            load_snapshot("")


class TestSnapshotFiles:
    def test_file_round_trip(self, tmp_path):
        original = SCENARIOS["Opioid overdose (16 y)"]
        path = tmp_path / "snapshot.json"
        path.write_text(snapshot_to_json(original), encoding="utf-8")
        assert load_snapshot_file(path) == original

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError):
            load_snapshot_file(tmp_path / "missing.json")

    def test_json_omits_unset_fields(self):
        text = snapshot_to_json(SurveySnapshot(age_years=4))
        assert "physiologic_state" not in text


class TestScenarios:
    def test_scenarios_are_snapshots(self):
        assert scenario_names() == list(SCENARIOS)
        for name in scenario_names():
            assert isinstance(get_scenario(name), SurveySnapshot)

    def test_unknown_scenario(self):
        with pytest.raises(KeyError):
            get_scenario("Nope")

    def test_scenarios_read_only(self):
        with pytest.raises(TypeError):
            SCENARIOS["new"] = SurveySnapshot(age_years=1)
