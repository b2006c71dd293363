"""
Snapshot predicates shared by the pattern rules and the shock classifier.

Every predicate treats an unset field as "finding not present" and returns
False rather than raising.
"""
from .models import SurveySnapshot


def fever_or_hypothermia(s: SurveySnapshot) -> bool:
    t = s.exposure.temperature
    return t is not None and (t > 38 or t < 36)


def fever_above(s: SurveySnapshot, threshold: float) -> bool:
    t = s.exposure.temperature
    return t is not None and t > threshold


def delayed_refill(s: SurveySnapshot) -> bool:
    return s.circulation.perfusion.capillary_refill in ("delayed", "very_delayed")


def cool_peripheries(s: SurveySnapshot) -> bool:
    return s.circulation.perfusion.skin_temperature in ("cool", "cold")


def warm_peripheries(s: SurveySnapshot) -> bool:
    return s.circulation.perfusion.skin_temperature == "warm"


def shock_or_poor_perfusion(s: SurveySnapshot) -> bool:
    return s.in_shock or delayed_refill(s)


def altered_consciousness(s: SurveySnapshot) -> bool:
    return s.disability.avpu in ("voice", "pain", "unresponsive")


def hypotensive(s: SurveySnapshot, systolic_below: float = 90) -> bool:
    bp = s.circulation.blood_pressure
    return bp is not None and bp.systolic < systolic_below


def systolic_above(s: SurveySnapshot, threshold: float) -> bool:
    bp = s.circulation.blood_pressure
    return bp is not None and bp.systolic > threshold


def heart_rate_above(s: SurveySnapshot, threshold: float) -> bool:
    hr = s.circulation.heart_rate
    return hr is not None and hr > threshold


def heart_rate_below(s: SurveySnapshot, threshold: float) -> bool:
    hr = s.circulation.heart_rate
    return hr is not None and hr < threshold


def resp_rate_above(s: SurveySnapshot, threshold: float) -> bool:
    rr = s.breathing.rate
    return rr is not None and rr > threshold


def resp_rate_below(s: SurveySnapshot, threshold: float) -> bool:
    rr = s.breathing.rate
    return rr is not None and rr < threshold


def spo2_below(s: SurveySnapshot, threshold: float) -> bool:
    spo2 = s.breathing.spo2
    return spo2 is not None and spo2 < threshold


def glucose_above(s: SurveySnapshot, threshold: float) -> bool:
    bg = s.disability.blood_glucose
    return bg is not None and bg > threshold


def glucose_below(s: SurveySnapshot, threshold: float) -> bool:
    bg = s.disability.blood_glucose
    return bg is not None and bg < threshold


def increased_effort(s: SurveySnapshot) -> bool:
    return s.breathing.effort == "increased"


def respiratory_distress(s: SurveySnapshot) -> bool:
    return s.physiologic_state == "severe_respiratory_distress" or increased_effort(s)


def stridor(s: SurveySnapshot) -> bool:
    return bool(s.airway.observations.stridor or s.breathing.auscultation.stridor)


def crackles(s: SurveySnapshot) -> bool:
    return bool(s.breathing.auscultation.crackles)


def pulmonary_edema(s: SurveySnapshot) -> bool:
    return crackles(s) or bool(s.circulation.heart_failure.pulmonary_edema)


def reduced_air_entry(s: SurveySnapshot) -> bool:
    a = s.breathing.auscultation
    return bool(a.decreased_air_entry or a.silent_chest)


def jvp_elevated(s: SurveySnapshot) -> bool:
    return s.circulation.jvp == "elevated"


def jvp_not_elevated(s: SurveySnapshot) -> bool:
    return s.circulation.jvp in ("not_visible", "normal")


def petechiae_or_purpura(s: SurveySnapshot) -> bool:
    skin = s.exposure.skin_findings
    return bool(skin.petechiae or skin.purpura)


def seizure_now_or_recent(s: SurveySnapshot) -> bool:
    seizure = s.disability.seizure
    return bool(seizure.active or seizure.just_stopped)


def vomiting(s: SurveySnapshot) -> bool:
    return bool(s.airway.observations.vomiting or s.circulation.history.vomiting)


def trauma_mechanism(s: SurveySnapshot):
    return s.exposure.trauma.mechanism or None


def unequal_pupils(s: SurveySnapshot) -> bool:
    p = s.disability.pupils
    if p is None:
        return False
    return p.size_left != p.size_right or p.reactive_left != p.reactive_right


def pinpoint_pupils(s: SurveySnapshot) -> bool:
    p = s.disability.pupils
    return p is not None and p.size_left < 2 and p.size_right < 2


def posturing(s: SurveySnapshot):
    value = s.disability.posturing
    if value in (None, "", "none"):
        return None
    return value


def is_neonate(s: SurveySnapshot) -> bool:
    return not s.pregnant_or_postpartum and s.age_years < 0.08


def is_pediatric(s: SurveySnapshot) -> bool:
    return not s.pregnant_or_postpartum and s.age_years < 18


def is_adult(s: SurveySnapshot) -> bool:
    return not s.pregnant_or_postpartum and s.age_years >= 18
