"""
Shock etiology classifier.

Fluid therapy is opposite across shock types: hypovolemic and distributive
shock need boluses, cardiogenic shock is made worse by them, obstructive
shock needs the obstruction removed. Each hypothesis is scored on its own
discriminating findings and carries a fixed fluid policy from
``FLUID_POLICY``.
"""
import logging
from types import MappingProxyType
from typing import List, Mapping, Optional

from . import findings as f
from .dosing import dosing_weight, per_kg
from .models import (
    Differential,
    DifferentialCategory,
    FluidRecommendation,
    ShockAnalysis,
    ShockType,
    SurveySnapshot,
)
from .rules import clamp_score


logger = logging.getLogger(__name__)

FLUID_POLICY: Mapping[ShockType, FluidRecommendation] = MappingProxyType({
    ShockType.HYPOVOLEMIC: FluidRecommendation.BOLUS,
    ShockType.CARDIOGENIC: FluidRecommendation.AVOID,
    ShockType.OBSTRUCTIVE: FluidRecommendation.CAUTIOUS,
    ShockType.DISTRIBUTIVE_SEPTIC: FluidRecommendation.BOLUS,
    ShockType.DISTRIBUTIVE_ANAPHYLACTIC: FluidRecommendation.BOLUS,
    ShockType.NEUROGENIC: FluidRecommendation.CAUTIOUS,
})

SHOCK_LABELS: Mapping[ShockType, str] = MappingProxyType({
    ShockType.HYPOVOLEMIC: "Hypovolemic Shock",
    ShockType.CARDIOGENIC: "Cardiogenic Shock",
    ShockType.OBSTRUCTIVE: "Obstructive Shock",
    ShockType.DISTRIBUTIVE_SEPTIC: "Septic Shock",
    ShockType.DISTRIBUTIVE_ANAPHYLACTIC: "Anaphylactic Shock",
    ShockType.NEUROGENIC: "Neurogenic Shock",
})


def _analysis(shock_type: ShockType, probability: float, evidence: List[str], actions: List[str]) -> ShockAnalysis:
    return ShockAnalysis(
        type=shock_type,
        probability=clamp_score(probability),
        evidence=evidence,
        fluid_recommendation=FLUID_POLICY[shock_type],
        immediate_actions=actions,
    )


def analyze_hypovolemic(s: SurveySnapshot, weight: Optional[float]) -> ShockAnalysis:
    p = 0.0
    evidence: List[str] = []
    history = s.circulation.history

    if history.bleeding:
        p += 0.4
        evidence.append("Active bleeding")
    if history.diarrhea or history.vomiting:
        p += 0.3
        evidence.append("Fluid losses (diarrhea/vomiting)")
    if s.exposure.visible_injuries.burns:
        p += 0.3
        evidence.append("Burns (fluid losses)")
    if f.jvp_not_elevated(s):
        p += 0.2
        evidence.append("JVP not elevated")
    if not f.pulmonary_edema(s):
        p += 0.1
        evidence.append("Clear lung fields")
    if f.delayed_refill(s):
        p += 0.1
        evidence.append("Delayed capillary refill")
    if f.heart_rate_above(s, 120):
        p += 0.05
        evidence.append("Tachycardia")

    return _analysis(ShockType.HYPOVOLEMIC, p, evidence, [
        f"Crystalloid bolus (NS or Ringer's lactate): {per_kg(20, 'mL', weight)}",
        "Repeat boluses as needed (up to 60 mL/kg)",
        "Control bleeding if hemorrhagic",
        "Monitor for fluid overload (lung sounds, work of breathing)",
    ])


def analyze_cardiogenic(s: SurveySnapshot, weight: Optional[float]) -> ShockAnalysis:
    p = 0.0
    evidence: List[str] = []
    heart_failure = s.circulation.heart_failure

    if f.jvp_elevated(s):
        p += 0.4
        evidence.append("Elevated JVP")
    if f.pulmonary_edema(s):
        p += 0.3
        evidence.append("Pulmonary edema (crackles)")
    if heart_failure.hepatomegaly:
        p += 0.2
        evidence.append("Hepatomegaly")
    if heart_failure.peripheral_edema:
        p += 0.1
        evidence.append("Peripheral edema")
    if s.circulation.murmur:
        p += 0.1
        evidence.append("Heart murmur")
    if f.is_adult(s) and s.age_years > 40:
        p += 0.05

    return _analysis(ShockType.CARDIOGENIC, p, evidence, [
        "⚠️ DO NOT GIVE FLUID BOLUSES (will worsen pulmonary edema)",
        f"Furosemide IV: {per_kg(1, 'mg', weight, max_dose=40)}",
        "Consider inotropes (dobutamine, milrinone)",
        "Oxygen to maintain SpO2 >94%",
        "ECG (rule out MI, arrhythmia)",
        "Urgent cardiology consult",
    ])


def analyze_obstructive(s: SurveySnapshot, weight: Optional[float]) -> ShockAnalysis:
    p = 0.0
    evidence: List[str] = []

    if f.jvp_elevated(s):
        p += 0.3
        evidence.append("Elevated JVP")
    if not f.crackles(s):
        p += 0.1
        evidence.append("Clear lung fields")
    if f.reduced_air_entry(s):
        p += 0.3
        evidence.append("Decreased air entry (tension pneumothorax?)")
    mechanism = f.trauma_mechanism(s)
    if mechanism:
        p += 0.2
        evidence.append(f"Trauma ({mechanism})")
    if f.spo2_below(s, 90):
        p += 0.1
        evidence.append("Severe hypoxia")

    return _analysis(ShockType.OBSTRUCTIVE, p, evidence, [
        "Identify and remove obstruction:",
        "  - Tension pneumothorax → Needle decompression (2nd intercostal space, midclavicular line)",
        "  - Cardiac tamponade → Pericardiocentesis",
        "  - Massive PE → Thrombolysis (if confirmed)",
        f"Cautious fluid bolus while preparing definitive treatment: {per_kg(10, 'mL', weight)}",
        "Urgent imaging (CXR, ultrasound, CTPA)",
    ])


def analyze_septic(s: SurveySnapshot, weight: Optional[float]) -> ShockAnalysis:
    p = 0.0
    evidence: List[str] = []

    if f.fever_or_hypothermia(s):
        p += 0.3
        evidence.append(f"Temperature {s.exposure.temperature:g}°C")
    if f.warm_peripheries(s) and f.delayed_refill(s):
        p += 0.2
        evidence.append("Warm shock (early septic)")
    if f.altered_consciousness(s):
        p += 0.2
        evidence.append(f"Altered mental status ({s.disability.avpu})")
    if f.heart_rate_above(s, 140):
        p += 0.1
        evidence.append("Tachycardia")
    if f.resp_rate_above(s, 40):
        p += 0.1
        evidence.append("Tachypnea")
    if f.petechiae_or_purpura(s):
        p += 0.2
        evidence.append("Petechiae/purpura (meningococcemia?)")

    return _analysis(ShockType.DISTRIBUTIVE_SEPTIC, p, evidence, [
        f"Crystalloid bolus: {per_kg(20, 'mL', weight)} (repeat up to 60 mL/kg in first hour)",
        "Broad-spectrum antibiotics within 1 hour (ceftriaxone + vancomycin)",
        "Blood cultures BEFORE antibiotics (but don't delay antibiotics)",
        "Source control (drain abscess, remove infected catheter)",
        "Consider vasopressors if fluid-refractory (norepinephrine)",
    ])


def analyze_anaphylactic(s: SurveySnapshot, weight: Optional[float]) -> ShockAnalysis:
    p = 0.0
    evidence: List[str] = []

    if f.respiratory_distress(s):
        p += 0.3
        evidence.append("Respiratory distress")
    if s.breathing.auscultation.wheezing:
        p += 0.2
        evidence.append("Wheezing (bronchospasm)")
    if f.stridor(s):
        p += 0.2
        evidence.append("Stridor (upper airway edema)")
    if s.exposure.skin_findings.flushing or s.exposure.visible_injuries.rash:
        p += 0.2
        evidence.append("Urticaria/flushing")

    return _analysis(ShockType.DISTRIBUTIVE_ANAPHYLACTIC, p, evidence, [
        f"Epinephrine IM: {per_kg(0.01, 'mg', weight, max_dose=0.5, decimals=2)} - IMMEDIATE, DO NOT DELAY",
        "Repeat epinephrine every 5-15 minutes if no improvement",
        f"Crystalloid bolus: {per_kg(20, 'mL', weight)}",
        f"H1 blocker: Diphenhydramine IV {per_kg(1, 'mg', weight)}",
        f"H2 blocker: Ranitidine IV {per_kg(1, 'mg', weight)}",
        "Corticosteroids: Methylprednisolone 1-2 mg/kg IV",
        "Bronchodilators if wheezing: Salbutamol nebulizer",
    ])


def analyze_neurogenic(s: SurveySnapshot, weight: Optional[float]) -> ShockAnalysis:
    p = 0.0
    evidence: List[str] = []

    mechanism = f.trauma_mechanism(s)
    if mechanism:
        p += 0.3
        evidence.append(f"Trauma ({mechanism})")
    if f.heart_rate_below(s, 60) and f.hypotensive(s):
        p += 0.4
        evidence.append("Bradycardia + hypotension (neurogenic pattern)")
    if f.warm_peripheries(s) and f.delayed_refill(s):
        p += 0.2
        evidence.append("Warm peripheries despite shock")

    return _analysis(ShockType.NEUROGENIC, p, evidence, [
        "Spinal immobilization (C-collar, backboard)",
        f"Cautious fluid bolus: {per_kg(10, 'mL', weight)} - avoid overload",
        "Vasopressors if fluid-refractory (norepinephrine)",
        "Atropine if severe bradycardia (<40 bpm)",
        "Urgent neurosurgery consult",
        "MRI spine to identify level of injury",
    ])


SHOCK_ANALYZERS: tuple = (
    analyze_hypovolemic,
    analyze_cardiogenic,
    analyze_obstructive,
    analyze_septic,
    analyze_anaphylactic,
    analyze_neurogenic,
)


def shock_suspected(snapshot: SurveySnapshot) -> bool:
    """
    False only for an unflagged patient with documented normal refill and warm skin.

    An unrecorded perfusion field is not evidence of good perfusion.
    """
    perfusion = snapshot.circulation.perfusion
    well_perfused = perfusion.capillary_refill == "normal" and perfusion.skin_temperature == "warm"
    return snapshot.in_shock or not well_perfused


def differentiate_shock(snapshot: SurveySnapshot) -> List[ShockAnalysis]:
    """
    Score every shock hypothesis, highest first.

    Returns an empty list only for a patient who is not flagged in shock
    and has normal capillary refill and warm skin on record.
    """
    if not shock_suspected(snapshot):
        logger.debug("Shock gate closed: no shock flag, normal refill and warm skin")
        return []

    weight = dosing_weight(snapshot)
    analyses = [analyze(snapshot, weight) for analyze in SHOCK_ANALYZERS]
    analyses.sort(key=lambda a: a.probability, reverse=True)
    for analysis in analyses:
        logger.debug(
            "Shock %s scored %.2f (%s)",
            analysis.type.value, analysis.probability, analysis.fluid_recommendation.value,
        )
    return analyses


def shock_analysis_to_differential(analysis: ShockAnalysis) -> Differential:
    return Differential(
        id=f"shock_{analysis.type.value}",
        diagnosis=SHOCK_LABELS[analysis.type],
        probability=analysis.probability,
        evidence=list(analysis.evidence),
        missing=[],
        next_questions=[],
        category=DifferentialCategory.IMMEDIATE_THREAT,
    )
