from typing import Protocol

from resus_gps.application.schemas import ReasoningResult
from resus_gps.domain.stratifier import StratifiedInterventions


class ProtocolLauncherPort(Protocol):
    def launch(self, route: str, condition_id: str) -> None:
        """
        Hand off to the protocol screen for ``condition_id`` at ``route``.
        """
        ...


class ResultsRendererPort(Protocol):
    def render(self, result: ReasoningResult, interventions: StratifiedInterventions) -> None:
        ...
