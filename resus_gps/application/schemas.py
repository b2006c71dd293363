from typing import List, Optional

from pydantic import BaseModel

from resus_gps.domain.models import (
    AgeGroup,
    CarePlan,
    Differential,
    Intervention,
    RequiredTest,
    ShockAnalysis,
)


class ReasoningResult(BaseModel):
    differentials: List[Differential]
    top_differential: Optional[Differential] = None
    shock_analyses: List[ShockAnalysis] = []
    immediate_interventions: List[Intervention] = []
    urgent_interventions: List[Intervention] = []
    confirmatory_interventions: List[Intervention] = []
    required_tests: List[RequiredTest] = []
    protocol_route: str
    age_group: AgeGroup

    def care_plan(self) -> CarePlan:
        """The top differential's plan, rebuilt from the three tiers."""
        return CarePlan(
            condition_id=self.top_differential.id if self.top_differential else "",
            interventions=(
                self.immediate_interventions
                + self.urgent_interventions
                + self.confirmatory_interventions
            ),
            required_tests=self.required_tests,
        )

    def above_threshold(self, threshold: float, limit: Optional[int] = None) -> List[Differential]:
        shown = [d for d in self.differentials if d.probability > threshold]
        return shown[:limit] if limit is not None else shown
