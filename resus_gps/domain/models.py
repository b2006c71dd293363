from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Finding(BaseModel):
    """Base for every snapshot record: immutable once built."""

    model_config = ConfigDict(frozen=True)


class PhysiologicState(str, Enum):
    CARDIAC_ARREST = "cardiac_arrest"
    RESPIRATORY_ARREST = "respiratory_arrest"
    SEVERE_BLEEDING = "severe_bleeding"
    UNRESPONSIVE = "unresponsive"
    SEIZURE = "seizure"
    SHOCK = "shock"
    SEVERE_RESPIRATORY_DISTRESS = "severe_respiratory_distress"
    SEPSIS_SUSPECTED = "sepsis_suspected"
    POISONING = "poisoning"
    OTHER_EMERGENCY = "other_emergency"


class AgeGroup(str, Enum):
    NEONATE = "neonate"
    INFANT = "infant"
    CHILD = "child"
    ADOLESCENT = "adolescent"
    ADULT = "adult"
    ELDERLY = "elderly"
    PREGNANT = "pregnant"


# --- Airway -----------------------------------------------------------------

class AirwayObservations(Finding):
    vomiting: Optional[bool] = None
    blood_secretions: Optional[bool] = None
    foreign_body: Optional[bool] = None
    stridor: Optional[bool] = None
    snoring: Optional[bool] = None
    gurgling: Optional[bool] = None


class AirwayFindings(Finding):
    status: Optional[str] = Field(None, description="patent/obstructed/secured")
    observations: AirwayObservations = AirwayObservations()


# --- Breathing --------------------------------------------------------------

class Auscultation(Finding):
    wheezing: Optional[bool] = None
    crackles: Optional[bool] = None
    decreased_air_entry: Optional[bool] = None
    stridor: Optional[bool] = None
    silent_chest: Optional[bool] = None


class BreathingFindings(Finding):
    rate: Optional[float] = Field(None, ge=0)
    pattern: Optional[str] = Field(None, description="normal/deep_kussmaul/shallow/irregular/apneic")
    effort: Optional[str] = Field(None, description="normal/increased/minimal")
    spo2: Optional[float] = Field(None, ge=0, le=100)
    auscultation: Auscultation = Auscultation()


# --- Circulation ------------------------------------------------------------

class BloodPressure(Finding):
    systolic: float = Field(..., ge=0)
    diastolic: float = Field(..., ge=0)


class Perfusion(Finding):
    capillary_refill: Optional[str] = Field(None, description="normal/delayed/very_delayed")
    skin_temperature: Optional[str] = Field(None, description="warm/cool/cold")
    peripheral_pulses: Optional[str] = Field(None, description="strong/weak/absent")
    central_pulses: Optional[str] = Field(None, description="strong/weak/absent")
    skin_color: Optional[str] = Field(None, description="pink/pale/mottled/cyanotic")


class HeartFailureSigns(Finding):
    hepatomegaly: Optional[bool] = None
    peripheral_edema: Optional[bool] = None
    pulmonary_edema: Optional[bool] = None


class CirculationHistory(Finding):
    bleeding: Optional[bool] = None
    diarrhea: Optional[bool] = None
    vomiting: Optional[bool] = None
    polyuria: Optional[bool] = None
    oliguria: Optional[bool] = None
    poor_feeding: Optional[bool] = None


class CirculationFindings(Finding):
    heart_rate: Optional[float] = Field(None, ge=0)
    blood_pressure: Optional[BloodPressure] = None
    jvp: Optional[str] = Field(None, description="not_visible/normal/elevated")
    perfusion: Perfusion = Perfusion()
    rhythm: Optional[str] = Field(None, description="regular/irregular/svt/bradycardia")
    murmur: Optional[bool] = None
    heart_failure: HeartFailureSigns = HeartFailureSigns()
    history: CirculationHistory = CirculationHistory()


# --- Disability -------------------------------------------------------------

class Pupils(Finding):
    size_left: float = Field(..., ge=0)
    size_right: float = Field(..., ge=0)
    reactive_left: bool = True
    reactive_right: bool = True


class Seizure(Finding):
    active: Optional[bool] = None
    just_stopped: Optional[bool] = None
    duration_minutes: Optional[float] = Field(None, ge=0)


class DisabilityFindings(Finding):
    avpu: Optional[str] = Field(None, description="alert/voice/pain/unresponsive")
    gcs: Optional[int] = Field(None, ge=3, le=15)
    pupils: Optional[Pupils] = None
    blood_glucose: Optional[float] = Field(None, ge=0, description="mmol/L")
    seizure: Seizure = Seizure()
    posturing: Optional[str] = Field(None, description="none/decorticate/decerebrate")


# --- Exposure ---------------------------------------------------------------

class VisibleInjuries(Finding):
    bruising: Optional[bool] = None
    burns: Optional[bool] = None
    bleeding: Optional[bool] = None
    deformities: Optional[bool] = None
    rash: Optional[bool] = None


class SkinFindings(Finding):
    petechiae: Optional[bool] = None
    purpura: Optional[bool] = None
    flushing: Optional[bool] = None


class TraumaHistory(Finding):
    mechanism: Optional[str] = Field(None, description="e.g. blunt, penetrating, fall, burn")


class ToxinExposure(Finding):
    substance: Optional[str] = None


class PregnancyDetails(Finding):
    gestational_age_weeks: Optional[float] = Field(None, ge=0)
    postpartum: Optional[bool] = None
    days_postpartum: Optional[int] = Field(None, ge=0)


class ExposureFindings(Finding):
    temperature: Optional[float] = Field(None, description="Celsius")
    weight_kg: Optional[float] = Field(None, gt=0)
    visible_injuries: VisibleInjuries = VisibleInjuries()
    skin_findings: SkinFindings = SkinFindings()
    trauma: TraumaHistory = TraumaHistory()
    toxin_exposure: ToxinExposure = ToxinExposure()
    pregnancy: PregnancyDetails = PregnancyDetails()


class SurveySnapshot(Finding):
    age_years: float = Field(..., ge=0)
    pregnant_or_postpartum: bool = False
    physiologic_state: Optional[PhysiologicState] = None
    airway: AirwayFindings = AirwayFindings()
    breathing: BreathingFindings = BreathingFindings()
    circulation: CirculationFindings = CirculationFindings()
    disability: DisabilityFindings = DisabilityFindings()
    exposure: ExposureFindings = ExposureFindings()

    @field_validator("physiologic_state", mode="before")
    @classmethod
    def blank_state_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def in_shock(self) -> bool:
        return self.physiologic_state == PhysiologicState.SHOCK


# --- Reasoning records ------------------------------------------------------

class DifferentialCategory(str, Enum):
    IMMEDIATE_THREAT = "immediate_threat"
    CRITICAL = "critical"
    URGENT = "urgent"
    NON_URGENT = "non_urgent"


class Differential(Finding):
    id: str
    diagnosis: str
    probability: float = Field(..., ge=0.0, le=1.0)
    evidence: List[str] = []
    missing: List[str] = []
    next_questions: List[str] = []
    category: DifferentialCategory


class AgeModifier(Finding):
    condition_id: str
    age_group: AgeGroup
    probability_adjustment: float
    presentation_changes: List[str] = []
    risk_factor_changes: List[str] = []
    intervention_modifications: List[str] = []


class ShockType(str, Enum):
    HYPOVOLEMIC = "hypovolemic"
    CARDIOGENIC = "cardiogenic"
    OBSTRUCTIVE = "obstructive"
    DISTRIBUTIVE_SEPTIC = "distributive_septic"
    DISTRIBUTIVE_ANAPHYLACTIC = "distributive_anaphylactic"
    NEUROGENIC = "neurogenic"


class FluidRecommendation(str, Enum):
    BOLUS = "bolus"
    CAUTIOUS = "cautious"
    AVOID = "avoid"


class ShockAnalysis(Finding):
    type: ShockType
    probability: float = Field(..., ge=0.0, le=1.0)
    evidence: List[str] = []
    fluid_recommendation: FluidRecommendation
    immediate_actions: List[str] = []


# --- Interventions ----------------------------------------------------------

class InterventionTier(str, Enum):
    IMMEDIATE = "immediate"
    URGENT = "urgent"
    CONFIRMATORY = "confirmatory"


class Priority(str, Enum):
    STAT = "stat"
    URGENT = "urgent"
    ROUTINE = "routine"


class RiskLevel(str, Enum):
    NONE = "none"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class RequiredTest(Finding):
    name: str
    threshold: Optional[str] = None
    priority: Priority


class Dosing(Finding):
    calculation: Optional[str] = None
    max_dose: Optional[float] = None
    min_dose: Optional[float] = None
    route: Optional[str] = None


class Intervention(Finding):
    id: str
    name: str
    category: InterventionTier
    indication: str
    contraindications: List[str] = []
    required_tests: List[RequiredTest] = []
    risk_if_wrong: RiskLevel = RiskLevel.LOW
    benefit_if_right: str = Field("high", description="low/moderate/high/life_saving")
    time_window: str = Field("minutes", description="minutes/hours")
    dosing: Optional[Dosing] = None
    monitoring: List[str] = []


class CarePlan(Finding):
    condition_id: str
    interventions: List[Intervention] = []
    required_tests: List[RequiredTest] = []
