"""Tests for intervention tiering and the completion gates."""
import pytest

from resus_gps.domain.care_plans import build_care_plan
from resus_gps.domain.models import CarePlan, SurveySnapshot
from resus_gps.domain.stratifier import stat_tests_for, stratify_interventions
from resus_gps.infrastructure.scenarios import SCENARIOS


@pytest.fixture
def dka_plan():
    return build_care_plan("dka", SCENARIOS["Diabetic ketoacidosis (10 y)"])


def stat_names(plan):
    return [t.name for t in stat_tests_for(plan)]


class TestStatTests:
    def test_plan_and_confirmatory_stat_tests(self, dka_plan):
        assert stat_names(dka_plan) == [
            "Venous blood gas (pH, HCO3, pCO2)",
            "Blood or urine ketones",
            "Basic metabolic panel (Na, K, Cl, BUN, Cr, glucose)",
            "pH",
            "Ketones (blood or urine)",
        ]

    def test_urgent_tests_excluded(self, dka_plan):
        assert "HbA1c (if new diagnosis)" not in stat_names(dka_plan)

    def test_urgent_intervention_tests_do_not_gate(self):
        plan = build_care_plan("sepsis", SurveySnapshot(age_years=5))
        assert stat_names(plan) == ["Blood cultures (2 sets)", "Complete blood count", "Lactate"]


class TestStratifyInterventions:
    """Tier partition and gate evaluation."""

    def test_partition_by_authored_tier(self, dka_plan):
        view = stratify_interventions(dka_plan)
        assert [t.intervention.id for t in view.immediate] == ["dka_fluid_bolus", "dka_monitoring", "dka_age_specific"]
        assert view.urgent == []
        assert [t.intervention.id for t in view.confirmatory] == ["dka_insulin"]

    def test_nothing_completed(self, dka_plan):
        view = stratify_interventions(dka_plan)
        assert not view.all_immediate_complete
        assert not view.all_stat_tests_sent
        assert not view.confirmatory[0].actionable
        assert all(t.actionable for t in view.immediate)

    def test_all_immediate_complete(self, dka_plan):
        done = {"dka_fluid_bolus", "dka_monitoring", "dka_age_specific"}
        assert stratify_interventions(dka_plan, done).all_immediate_complete
        assert not stratify_interventions(dka_plan, done - {"dka_monitoring"}).all_immediate_complete

    def test_gate_opens_exactly_on_last_stat_test(self, dka_plan):
        names = stat_names(dka_plan)
        sent = set()
        for name in names[:-1]:
            sent.add(name)
            view = stratify_interventions(dka_plan, completed_tests=sent)
            assert not view.all_stat_tests_sent
            assert not view.confirmatory[0].actionable
        sent.add(names[-1])
        view = stratify_interventions(dka_plan, completed_tests=sent)
        assert view.all_stat_tests_sent
        assert view.confirmatory[0].actionable
        assert view.pending_stat_tests == []

    def test_pending_stat_tests_listed(self, dka_plan):
        view = stratify_interventions(dka_plan, completed_tests={"pH"})
        assert "pH" not in view.pending_stat_tests
        assert "Ketones (blood or urine)" in view.pending_stat_tests

    def test_empty_plan_gates_vacuously_open(self):
        view = stratify_interventions(CarePlan(condition_id="none"))
        assert view.all_immediate_complete
        assert view.all_stat_tests_sent

    def test_stateless(self, dka_plan):
        stratify_interventions(dka_plan, {"dka_fluid_bolus"}, set(stat_names(dka_plan)))
        view = stratify_interventions(dka_plan)
        assert not any(t.completed for t in view.immediate)
        assert not view.all_stat_tests_sent
