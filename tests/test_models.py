"""Tests for the snapshot and reasoning records."""
import pytest
from pydantic import ValidationError

from resus_gps.domain.models import (
    Differential,
    DifferentialCategory,
    PhysiologicState,
    SurveySnapshot,
)


class TestSurveySnapshot:
    """Snapshot parsing and defaults."""

    def test_minimal_snapshot_has_empty_findings(self):
        snap = SurveySnapshot(age_years=4)
        assert snap.breathing.auscultation.crackles is None
        assert snap.circulation.blood_pressure is None
        assert snap.disability.seizure.active is None
        assert snap.pregnant_or_postpartum is False

    def test_nested_dicts_are_parsed(self):
        snap = SurveySnapshot.model_validate({
            "age_years": 3,
            "physiologic_state": "shock",
            "circulation": {"blood_pressure": {"systolic": 70, "diastolic": 40}, "jvp": "elevated"},
        })
        assert snap.physiologic_state == PhysiologicState.SHOCK
        assert snap.in_shock
        assert snap.circulation.blood_pressure.systolic == 70

    def test_blank_state_is_none(self):
        snap = SurveySnapshot(age_years=3, physiologic_state="  ")
        assert snap.physiologic_state is None
        assert not snap.in_shock

    def test_negative_age_rejected(self):
        with pytest.raises(ValidationError):
            SurveySnapshot(age_years=-1)

    def test_unknown_state_rejected(self):
        with pytest.raises(ValidationError):
            SurveySnapshot(age_years=3, physiologic_state="sleepy")

    def test_snapshot_is_frozen(self):
        snap = SurveySnapshot(age_years=3)
        with pytest.raises(ValidationError):
            snap.age_years = 4


class TestDifferential:
    """Probability invariant on differentials."""

    def _make(self, probability):
        return Differential(
            id="x", diagnosis="X", probability=probability,
            category=DifferentialCategory.CRITICAL,
        )

    def test_bounds_accepted(self):
        assert self._make(0.0).probability == 0.0
        assert self._make(1.0).probability == 1.0

    @pytest.mark.parametrize("value", [-0.01, 1.01])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ValidationError):
            self._make(value)

    def test_model_copy_returns_new_record(self):
        d = self._make(0.4)
        updated = d.model_copy(update={"probability": 0.6})
        assert d.probability == 0.4
        assert updated.probability == 0.6
