import logging
from typing import Callable, List, Optional

from resus_gps.application.schemas import ReasoningResult
from resus_gps.domain.age_modifiers import apply_age_modifiers, snapshot_age_group
from resus_gps.domain.care_plans import build_care_plan
from resus_gps.domain.models import Differential, InterventionTier, SurveySnapshot
from resus_gps.domain.protocols import DEFAULT_PROTOCOL_ROUTE, resolve_protocol_route
from resus_gps.domain.rules import generate_differentials
from resus_gps.domain.shock import differentiate_shock, shock_analysis_to_differential


logger = logging.getLogger(__name__)


class ClinicalReasoningUseCase:
    """
    Full reasoning pass over one primary-survey snapshot.

    Generates every condition score, shifts each for the patient's age
    group, adds the shock-type hypotheses, ranks the merged list and
    builds the care plan for the top differential. Holds no state between
    calls, so callers can re-run it on every edit of the survey form.
    """

    def __init__(
        self,
        default_route: str = DEFAULT_PROTOCOL_ROUTE,
        generator: Callable[[SurveySnapshot], List[Differential]] = generate_differentials,
    ):
        self.default_route = default_route
        self.generator = generator

    def reason(self, snapshot: SurveySnapshot) -> ReasoningResult:
        differentials = [apply_age_modifiers(d, snapshot) for d in self.generator(snapshot)]

        shock_analyses = differentiate_shock(snapshot)
        differentials.extend(shock_analysis_to_differential(a) for a in shock_analyses)

        # sorted() is stable: ties keep generation order
        ranked = sorted(differentials, key=lambda d: d.probability, reverse=True)
        top: Optional[Differential] = ranked[0] if ranked else None
        route = resolve_protocol_route(top.id if top else None, self.default_route)

        if top is None:
            interventions, tests = [], []
        else:
            plan = build_care_plan(top.id, snapshot)
            interventions, tests = plan.interventions, plan.required_tests

        def tier(category):
            return [i for i in interventions if i.category == category]

        result = ReasoningResult(
            differentials=ranked,
            top_differential=top,
            shock_analyses=shock_analyses,
            immediate_interventions=tier(InterventionTier.IMMEDIATE),
            urgent_interventions=tier(InterventionTier.URGENT),
            confirmatory_interventions=tier(InterventionTier.CONFIRMATORY),
            required_tests=tests,
            protocol_route=route,
            age_group=snapshot_age_group(snapshot),
        )
        if top is not None:
            logger.info(
                "Top differential %s (%.2f) -> %s; %d shock hypotheses",
                top.id, top.probability, route, len(shock_analyses),
            )
        return result
