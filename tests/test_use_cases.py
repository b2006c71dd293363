import pytest

from resus_gps.application.schemas import ReasoningResult
from resus_gps.application.use_cases import ClinicalReasoningUseCase
from resus_gps.domain.models import AgeGroup, Differential, DifferentialCategory, ShockType, SurveySnapshot
from resus_gps.infrastructure.scenarios import SCENARIOS


WELL_PERFUSED = {"perfusion": {"capillary_refill": "normal", "skin_temperature": "warm"}}


def stable_adult():
    return SurveySnapshot(age_years=30, circulation=WELL_PERFUSED)


def make_differential(condition_id, probability):
    return Differential(
        id=condition_id,
        diagnosis=condition_id.title(),
        probability=probability,
        category=DifferentialCategory.URGENT,
    )


@pytest.fixture
def usecase():
    return ClinicalReasoningUseCase()


def test_reason_returns_ranked_result(usecase):
    result = usecase.reason(SCENARIOS["Cardiogenic shock (8 y)"])
    assert isinstance(result, ReasoningResult)
    scores = [d.probability for d in result.differentials]
    assert scores == sorted(scores, reverse=True)
    assert result.top_differential == result.differentials[0]
    assert result.age_group == AgeGroup.CHILD


def test_shock_hypotheses_merged_into_ranking(usecase):
    result = usecase.reason(SCENARIOS["Cardiogenic shock (8 y)"])
    ids = {d.id for d in result.differentials}
    assert "shock_cardiogenic" in ids
    assert result.shock_analyses[0].type == ShockType.CARDIOGENIC
    assert len(result.differentials) == 23 + len(result.shock_analyses)


def test_no_shock_hypotheses_when_well_perfused(usecase):
    result = usecase.reason(stable_adult())
    assert result.shock_analyses == []
    assert not any(d.id.startswith("shock_") for d in result.differentials)


def test_eclampsia_routes_to_protocol(usecase):
    result = usecase.reason(SCENARIOS["Eclampsia (34 weeks)"])
    assert result.top_differential.id == "eclampsia"
    assert result.protocol_route == "/eclampsia-protocol"
    assert result.age_group == AgeGroup.PREGNANT
    assert [i.id for i in result.immediate_interventions] == [
        "eclampsia_magnesium_loading",
        "eclampsia_antihypertensive",
    ]


def test_age_modifiers_applied(usecase):
    snap = SurveySnapshot(age_years=0.05, exposure={"temperature": 35.5}, disability={"avpu": "voice"})
    result = usecase.reason(snap)
    sepsis = [d for d in result.differentials if d.id == "sepsis"][0]
    assert sepsis.probability == pytest.approx(0.7)
    assert result.age_group == AgeGroup.NEONATE


def test_dka_plan_split_into_tiers(usecase):
    result = usecase.reason(SCENARIOS["Diabetic ketoacidosis (10 y)"])
    assert result.top_differential.id == "dka"
    assert result.top_differential.probability == 1.0
    assert [i.id for i in result.confirmatory_interventions] == ["dka_insulin"]
    assert result.urgent_interventions == []
    assert result.protocol_route == "/clinical-assessment"
    assert result.care_plan().condition_id == "dka"


def test_ties_keep_generation_order():
    usecase = ClinicalReasoningUseCase(
        generator=lambda s: [make_differential("first", 0.5), make_differential("second", 0.5)]
    )
    result = usecase.reason(stable_adult())
    assert [d.id for d in result.differentials] == ["first", "second"]


def test_unknown_top_uses_configured_route():
    usecase = ClinicalReasoningUseCase(
        default_route="/triage",
        generator=lambda s: [make_differential("mystery", 0.8)],
    )
    result = usecase.reason(stable_adult())
    assert result.protocol_route == "/triage"
    assert result.immediate_interventions == []
    assert result.required_tests == []


def test_empty_generator_gives_no_top():
    usecase = ClinicalReasoningUseCase(generator=lambda s: [])
    result = usecase.reason(stable_adult())
    assert result.top_differential is None
    assert result.protocol_route == "/clinical-assessment"


def test_above_threshold_filters_and_limits(usecase):
    result = usecase.reason(SCENARIOS["Diabetic ketoacidosis (10 y)"])
    shown = result.above_threshold(0.3)
    assert all(d.probability > 0.3 for d in shown)
    assert len(result.above_threshold(0.0, limit=2)) <= 2


def test_unrecorded_perfusion_still_classifies_shock(usecase):
    result = usecase.reason(SCENARIOS["Opioid overdose (16 y)"])
    assert {a.type for a in result.shock_analyses} == set(ShockType)
    assert "shock_neurogenic" in {d.id for d in result.differentials}
