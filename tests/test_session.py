"""Tests for the results-screen session state."""
from unittest.mock import Mock

import pytest

from resus_gps.application.session import ResultsSession, ResultsStage
from resus_gps.application.use_cases import ClinicalReasoningUseCase
from resus_gps.domain.stratifier import stat_tests_for
from resus_gps.infrastructure.scenarios import SCENARIOS


IMMEDIATE_IDS = ["dka_fluid_bolus", "dka_monitoring", "dka_age_specific"]


@pytest.fixture
def launcher():
    return Mock()


@pytest.fixture
def session(launcher):
    result = ClinicalReasoningUseCase().reason(SCENARIOS["Diabetic ketoacidosis (10 y)"])
    return ResultsSession(result, launcher=launcher)


class TestStages:
    """Stage follows the checkbox state."""

    def test_initial_stage(self, session):
        assert session.stage == ResultsStage.RECOGNITION
        assert [t.intervention.id for t in session.stratified().immediate] == IMMEDIATE_IDS

    def test_partial_completion(self, session):
        session.toggle_intervention("dka_fluid_bolus")
        assert session.stage == ResultsStage.AWAITING_IMMEDIATE
        assert session.completed_interventions == frozenset({"dka_fluid_bolus"})

    def test_all_immediate_enables_launch(self, session):
        for intervention_id in IMMEDIATE_IDS:
            session.toggle_intervention(intervention_id)
        assert session.stage == ResultsStage.PROTOCOL_LAUNCH_ENABLED

    def test_toggle_twice_clears(self, session):
        session.toggle_intervention("dka_monitoring")
        session.toggle_intervention("dka_monitoring")
        assert session.completed_interventions == frozenset()
        assert session.stage == ResultsStage.RECOGNITION


class TestLaunch:
    def test_launch_blocked_until_immediate_complete(self, session, launcher):
        session.toggle_intervention("dka_fluid_bolus")
        with pytest.raises(RuntimeError):
            session.launch_protocol()
        launcher.launch.assert_not_called()
        assert not session.launched

    def test_launch_calls_launcher(self, session, launcher):
        for intervention_id in IMMEDIATE_IDS:
            session.toggle_intervention(intervention_id)
        route = session.launch_protocol()
        assert route == "/clinical-assessment"
        launcher.launch.assert_called_once_with("/clinical-assessment", "dka")
        assert session.stage == ResultsStage.LAUNCHED

    def test_launch_without_launcher(self):
        result = ClinicalReasoningUseCase().reason(SCENARIOS["Eclampsia (34 weeks)"])
        session = ResultsSession(result)
        session.toggle_intervention("eclampsia_magnesium_loading")
        session.toggle_intervention("eclampsia_antihypertensive")
        assert session.launch_protocol() == "/eclampsia-protocol"
        assert session.stage == ResultsStage.LAUNCHED


class TestTests:
    """Stat tests unlock the confirmatory tier."""

    def test_confirmatory_locked_initially(self, session):
        assert not session.stratified().confirmatory[0].actionable

    def test_sending_stat_tests_unlocks_insulin(self, session):
        for test in stat_tests_for(session.plan):
            session.toggle_test(test.name)
        view = session.stratified()
        assert view.all_stat_tests_sent
        assert view.confirmatory[0].actionable

    def test_intervention_attached_test_is_known(self, session):
        session.toggle_test("pH")
        assert "pH" in session.completed_tests

    def test_unknown_ids_rejected(self, session):
        with pytest.raises(ValueError):
            session.toggle_intervention("not_an_intervention")
        with pytest.raises(ValueError):
            session.toggle_test("Not a test")
