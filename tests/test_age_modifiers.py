"""Tests for age grouping and age-specific score modulation."""
import pytest

from resus_gps.domain.age_modifiers import (
    AGE_EVIDENCE_PREFIX,
    AGE_MODIFIERS,
    apply_age_modifiers,
    get_age_group,
    get_age_modifier,
    get_age_specific_interventions,
)
from resus_gps.domain.models import AgeGroup, Differential, DifferentialCategory, SurveySnapshot
from resus_gps.domain.rules import SCORERS, generate_differentials


def make_differential(condition_id, probability, evidence=None):
    return Differential(
        id=condition_id,
        diagnosis=condition_id.title(),
        probability=probability,
        evidence=evidence or [],
        category=DifferentialCategory.CRITICAL,
    )


class TestGetAgeGroup:
    """Age thresholds and the pregnancy override."""

    @pytest.mark.parametrize("age, expected", [
        (0.0, AgeGroup.NEONATE),
        (0.05, AgeGroup.NEONATE),
        (0.08, AgeGroup.INFANT),
        (0.99, AgeGroup.INFANT),
        (1, AgeGroup.CHILD),
        (11.9, AgeGroup.CHILD),
        (12, AgeGroup.ADOLESCENT),
        (17.99, AgeGroup.ADOLESCENT),
        (18.0, AgeGroup.ADULT),
        (64.9, AgeGroup.ADULT),
        (65, AgeGroup.ELDERLY),
    ])
    def test_thresholds(self, age, expected):
        assert get_age_group(age) == expected

    @pytest.mark.parametrize("age", [0.05, 15, 30, 70])
    def test_pregnancy_overrides_age(self, age):
        assert get_age_group(age, pregnant=True) == AgeGroup.PREGNANT


class TestApplyAgeModifiers:
    """Score shift and evidence tagging."""

    def test_neonatal_sepsis_example(self):
        neonate = SurveySnapshot(age_years=0.05)
        base = make_differential("sepsis", 0.5, ["Temperature 35.5°C", "Altered mental status (voice)"])

        modified = apply_age_modifiers(base, neonate)

        assert modified.probability == pytest.approx(0.7)
        assert modified.evidence[:2] == base.evidence
        appended = modified.evidence[2:]
        assert appended[0] == AGE_EVIDENCE_PREFIX + "Fever NOT required (hypothermia common: temp <36.5°C)"
        assert len(appended) == 5
        assert all(e.startswith("[Age-specific] ") for e in appended)

    def test_input_not_mutated(self):
        base = make_differential("sepsis", 0.5, ["a"])
        apply_age_modifiers(base, SurveySnapshot(age_years=0.05))
        assert base.probability == 0.5
        assert base.evidence == ["a"]

    def test_unmapped_pair_passes_through(self):
        base = make_differential("dka", 0.6, ["Hyperglycemia"])
        infant = SurveySnapshot(age_years=0.5)
        assert apply_age_modifiers(base, infant) is base

    def test_upper_clamp(self):
        base = make_differential("croup", 0.95)
        assert apply_age_modifiers(base, SurveySnapshot(age_years=2)).probability == 1.0

    def test_lower_clamp(self):
        base = make_differential("stroke", 0.2)
        assert apply_age_modifiers(base, SurveySnapshot(age_years=6)).probability == 0.0

    def test_pregnancy_lowers_mi(self):
        base = make_differential("acute_mi", 0.5)
        pregnant = SurveySnapshot(age_years=30, pregnant_or_postpartum=True)
        assert apply_age_modifiers(base, pregnant).probability == pytest.approx(0.2)

    def test_same_inputs_same_output(self):
        base = make_differential("pneumonia", 0.4, ["Crackles"])
        elderly = SurveySnapshot(age_years=80)
        assert apply_age_modifiers(base, elderly) == apply_age_modifiers(base, elderly)


class TestModifierTable:
    """Static lookup table."""

    def test_keys_match_records(self):
        for (condition_id, age_group), modifier in AGE_MODIFIERS.items():
            assert modifier.condition_id == condition_id
            assert modifier.age_group == age_group

    def test_every_modifier_targets_a_generated_condition(self):
        known = {d.id for d in generate_differentials(SurveySnapshot(age_years=5))}
        assert len(known) == len(SCORERS)
        assert {cid for cid, _ in AGE_MODIFIERS} <= known

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            AGE_MODIFIERS[("dka", AgeGroup.INFANT)] = None

    def test_lookup(self):
        assert get_age_modifier("sepsis", AgeGroup.NEONATE).probability_adjustment == 0.2
        assert get_age_modifier("sepsis", AgeGroup.CHILD) is None

    def test_age_specific_interventions(self):
        mods = get_age_specific_interventions("dka", AgeGroup.CHILD)
        assert mods[0] == "CRITICAL: Cerebral edema risk (1-2%)"
        mods.append("scribble")
        assert "scribble" not in get_age_specific_interventions("dka", AgeGroup.CHILD)
        assert get_age_specific_interventions("unknown", AgeGroup.CHILD) == []
