"""Tests for the shock etiology classifier."""
import pytest

from resus_gps.domain.models import (
    DifferentialCategory,
    FluidRecommendation,
    ShockType,
    SurveySnapshot,
)
from resus_gps.domain.shock import (
    FLUID_POLICY,
    SHOCK_LABELS,
    differentiate_shock,
    shock_analysis_to_differential,
    shock_suspected,
)
from resus_gps.infrastructure.scenarios import SCENARIOS


@pytest.fixture
def cardiogenic_child():
    return SurveySnapshot.model_validate({
        "age_years": 8,
        "physiologic_state": "shock",
        "breathing": {"auscultation": {"crackles": True}},
        "circulation": {"jvp": "elevated", "heart_failure": {"hepatomegaly": True}},
    })


def by_type(analyses):
    return {a.type: a for a in analyses}


class TestShockGate:
    """Only a documented well-perfused, unflagged patient is skipped."""

    def test_unrecorded_perfusion_keeps_gate_open(self):
        analyses = differentiate_shock(SurveySnapshot(age_years=5))
        assert {a.type for a in analyses} == set(ShockType)

    @pytest.mark.parametrize("perfusion", [
        {"capillary_refill": "normal"},
        {"skin_temperature": "warm"},
    ])
    def test_one_perfusion_field_unset_keeps_gate_open(self, perfusion):
        snap = SurveySnapshot.model_validate({
            "age_years": 16,
            "circulation": {
                "heart_rate": 48,
                "blood_pressure": {"systolic": 70, "diastolic": 40},
                "perfusion": perfusion,
            },
            "exposure": {"trauma": {"mechanism": "fall"}},
        })
        assert shock_suspected(snap)
        analyses = by_type(differentiate_shock(snap))
        assert set(analyses) == set(ShockType)
        assert analyses[ShockType.NEUROGENIC].probability > 0

    def test_normal_perfusion_gated_out(self):
        snap = SurveySnapshot(
            age_years=5,
            circulation={"perfusion": {"capillary_refill": "normal", "skin_temperature": "warm"}},
        )
        assert not shock_suspected(snap)
        assert differentiate_shock(snap) == []

    @pytest.mark.parametrize("payload", [
        {"physiologic_state": "shock"},
        {"circulation": {"perfusion": {"capillary_refill": "delayed"}}},
        {"circulation": {"perfusion": {"skin_temperature": "cold"}}},
    ])
    def test_any_shock_sign_opens_gate(self, payload):
        snap = SurveySnapshot.model_validate({"age_years": 5, **payload})
        analyses = differentiate_shock(snap)
        assert {a.type for a in analyses} == set(ShockType)


class TestClassification:
    def test_cardiogenic_example(self, cardiogenic_child):
        analyses = differentiate_shock(cardiogenic_child)
        top = analyses[0]
        assert top.type == ShockType.CARDIOGENIC
        assert top.probability == pytest.approx(0.9)
        assert top.fluid_recommendation == FluidRecommendation.AVOID
        assert top.evidence == ["Elevated JVP", "Pulmonary edema (crackles)", "Hepatomegaly"]
        assert top.immediate_actions[0].startswith("⚠️ DO NOT GIVE FLUID BOLUSES")

    def test_adult_over_forty_adds_to_cardiogenic(self, cardiogenic_child):
        adult = cardiogenic_child.model_copy(update={"age_years": 55})
        cardiogenic = by_type(differentiate_shock(adult))[ShockType.CARDIOGENIC]
        assert cardiogenic.probability == pytest.approx(0.95)

    def test_hypovolemic_scenario(self):
        analyses = differentiate_shock(SCENARIOS["Gastroenteritis with hypovolemic shock (2 y)"])
        top = analyses[0]
        assert top.type == ShockType.HYPOVOLEMIC
        # 0.3 losses + 0.2 flat JVP + 0.1 clear lungs + 0.1 refill + 0.05 tachycardia
        assert top.probability == pytest.approx(0.75)
        assert top.immediate_actions[0].endswith("240 mL (20 mL/kg)")

    def test_neurogenic_pattern(self):
        snap = SurveySnapshot.model_validate({
            "age_years": 16,
            "physiologic_state": "shock",
            "circulation": {
                "heart_rate": 48,
                "blood_pressure": {"systolic": 70, "diastolic": 35},
                "perfusion": {"capillary_refill": "delayed", "skin_temperature": "warm"},
            },
            "exposure": {"trauma": {"mechanism": "fall"}},
        })
        neurogenic = by_type(differentiate_shock(snap))[ShockType.NEUROGENIC]
        assert neurogenic.probability == pytest.approx(0.9)
        assert neurogenic.fluid_recommendation == FluidRecommendation.CAUTIOUS

    def test_sorted_descending(self):
        for snap in SCENARIOS.values():
            probs = [a.probability for a in differentiate_shock(snap)]
            assert probs == sorted(probs, reverse=True)

    def test_probabilities_capped(self):
        snap = SurveySnapshot.model_validate({
            "age_years": 5,
            "physiologic_state": "shock",
            "circulation": {
                "jvp": "normal",
                "heart_rate": 180,
                "perfusion": {"capillary_refill": "delayed"},
                "history": {"bleeding": True, "diarrhea": True},
            },
            "exposure": {"visible_injuries": {"burns": True}},
        })
        hypovolemic = by_type(differentiate_shock(snap))[ShockType.HYPOVOLEMIC]
        assert hypovolemic.probability == 0.99


class TestFluidPolicy:
    """Fluid direction is fixed per shock type."""

    def test_policy_covers_every_type(self):
        assert set(FLUID_POLICY) == set(ShockType)
        assert set(SHOCK_LABELS) == set(ShockType)

    def test_policy_directions(self):
        assert FLUID_POLICY[ShockType.CARDIOGENIC] == FluidRecommendation.AVOID
        assert FLUID_POLICY[ShockType.OBSTRUCTIVE] == FluidRecommendation.CAUTIOUS
        assert FLUID_POLICY[ShockType.NEUROGENIC] == FluidRecommendation.CAUTIOUS
        for bolus in (ShockType.HYPOVOLEMIC, ShockType.DISTRIBUTIVE_SEPTIC, ShockType.DISTRIBUTIVE_ANAPHYLACTIC):
            assert FLUID_POLICY[bolus] == FluidRecommendation.BOLUS

    def test_analyses_follow_policy(self):
        for snap in SCENARIOS.values():
            for analysis in differentiate_shock(snap):
                assert analysis.fluid_recommendation == FLUID_POLICY[analysis.type]
                if analysis.type in (ShockType.CARDIOGENIC, ShockType.OBSTRUCTIVE):
                    assert analysis.fluid_recommendation != FluidRecommendation.BOLUS


class TestConversion:
    def test_shock_analysis_to_differential(self, cardiogenic_child):
        analysis = differentiate_shock(cardiogenic_child)[0]
        d = shock_analysis_to_differential(analysis)
        assert d.id == "shock_cardiogenic"
        assert d.diagnosis == "Cardiogenic Shock"
        assert d.category == DifferentialCategory.IMMEDIATE_THREAT
        assert d.probability == analysis.probability
        assert d.evidence == analysis.evidence
        assert d.missing == [] and d.next_questions == []

    def test_septic_label(self):
        snap = SurveySnapshot(age_years=5, physiologic_state="shock")
        septic = by_type(differentiate_shock(snap))[ShockType.DISTRIBUTIVE_SEPTIC]
        assert shock_analysis_to_differential(septic).id == "shock_distributive_septic"
        assert shock_analysis_to_differential(septic).diagnosis == "Septic Shock"
