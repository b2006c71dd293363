import logging
from enum import Enum
from typing import FrozenSet, Optional, Set

from resus_gps.application.ports import ProtocolLauncherPort
from resus_gps.application.schemas import ReasoningResult
from resus_gps.domain.models import CarePlan
from resus_gps.domain.stratifier import StratifiedInterventions, stratify_interventions


logger = logging.getLogger(__name__)


class ResultsStage(str, Enum):
    RECOGNITION = "recognition"
    AWAITING_IMMEDIATE = "awaiting_immediate"
    PROTOCOL_LAUNCH_ENABLED = "protocol_launch_enabled"
    LAUNCHED = "launched"


class ResultsSession:
    """Checkbox state for one results screen, owned by the UI layer."""

    def __init__(self, result: ReasoningResult, launcher: Optional[ProtocolLauncherPort] = None):
        self.result = result
        self.launcher = launcher
        self.plan: CarePlan = result.care_plan()
        self._completed_interventions: Set[str] = set()
        self._completed_tests: Set[str] = set()
        self.launched = False

        self._intervention_ids = {i.id for i in self.plan.interventions}
        self._test_names = {t.name for t in self.plan.required_tests}
        for item in self.plan.interventions:
            self._test_names.update(t.name for t in item.required_tests)

    @property
    def completed_interventions(self) -> FrozenSet[str]:
        return frozenset(self._completed_interventions)

    @property
    def completed_tests(self) -> FrozenSet[str]:
        return frozenset(self._completed_tests)

    def stratified(self) -> StratifiedInterventions:
        return stratify_interventions(
            self.plan, self._completed_interventions, self._completed_tests
        )

    @property
    def stage(self) -> ResultsStage:
        if self.launched:
            return ResultsStage.LAUNCHED
        if self.stratified().all_immediate_complete:
            return ResultsStage.PROTOCOL_LAUNCH_ENABLED
        if self._completed_interventions:
            return ResultsStage.AWAITING_IMMEDIATE
        return ResultsStage.RECOGNITION

    def toggle_intervention(self, intervention_id: str) -> StratifiedInterventions:
        if intervention_id not in self._intervention_ids:
            raise ValueError(f"Unknown intervention: {intervention_id}")
        if intervention_id in self._completed_interventions:
            self._completed_interventions.discard(intervention_id)
        else:
            self._completed_interventions.add(intervention_id)
        return self.stratified()

    def toggle_test(self, test_name: str) -> StratifiedInterventions:
        if test_name not in self._test_names:
            raise ValueError(f"Unknown test: {test_name}")
        if test_name in self._completed_tests:
            self._completed_tests.discard(test_name)
        else:
            self._completed_tests.add(test_name)
        return self.stratified()

    def launch_protocol(self) -> str:
        if not self.stratified().all_immediate_complete:
            raise RuntimeError("Complete immediate interventions before launching the protocol")
        route = self.result.protocol_route
        if self.launcher is not None:
            self.launcher.launch(route, self.plan.condition_id)
        self.launched = True
        logger.info("Launched protocol %s for %s", route, self.plan.condition_id)
        return route
