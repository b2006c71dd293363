"""
Pattern rules: one independent evidence scorer per condition.

Each scorer adds a fixed weight per matching finding and reports what it
saw, what it could not assess and what to ask next. Scores are
severity-weighted heuristics, not a probability distribution: two
competing conditions may both score high and nothing is renormalised.
"""
import logging
from typing import Callable, List, Optional

from . import findings as f
from .dosing import age_appropriate_rr
from .models import Differential, DifferentialCategory, SurveySnapshot


logger = logging.getLogger(__name__)

MAX_SCORE = 0.99

IMMEDIATE = DifferentialCategory.IMMEDIATE_THREAT
CRITICAL = DifferentialCategory.CRITICAL


def clamp_score(value: float, ceiling: float = MAX_SCORE) -> float:
    return max(0.0, min(value, ceiling))


def _differential(
    condition_id: str,
    diagnosis: str,
    probability: float,
    evidence: List[str],
    missing: List[str],
    questions: List[str],
    category: DifferentialCategory,
) -> Differential:
    return Differential(
        id=condition_id,
        diagnosis=diagnosis,
        probability=clamp_score(probability),
        evidence=evidence,
        missing=missing,
        next_questions=questions,
        category=category,
    )


# --- Metabolic / infectious -------------------------------------------------

def analyze_dka(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if f.glucose_above(s, 11):
        p += 0.4
        evidence.append(f"Hyperglycemia ({s.disability.blood_glucose:g} mmol/L)")
    else:
        missing.append("blood_glucose")

    if s.breathing.pattern == "deep_kussmaul":
        p += 0.3
        evidence.append("Kussmaul breathing (deep, rapid)")
    else:
        missing.append("kussmaul_breathing")

    if f.shock_or_poor_perfusion(s) or s.circulation.perfusion.skin_temperature == "cold":
        p += 0.15
        evidence.append("Shock/poor perfusion")

    if s.circulation.history.polyuria:
        p += 0.1
        evidence.append("Polyuria (osmotic diuresis)")
    else:
        missing.append("polyuria_history")

    if f.vomiting(s):
        p += 0.05
        evidence.append("Vomiting")

    if f.is_pediatric(s) and s.age_years > 5:
        p += 0.05

    return _differential(
        "dka", "Diabetic Ketoacidosis (DKA)", p, evidence, missing,
        [
            "Fruity/sweet breath smell (ketones)?",
            "Abdominal pain?",
            "Known diabetes or new diagnosis?",
            "Recent illness or infection?",
        ],
        CRITICAL,
    )


def analyze_sepsis(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if f.fever_or_hypothermia(s):
        p += 0.3
        evidence.append(f"Temperature {s.exposure.temperature:g}°C")
    else:
        missing.append("fever")

    if f.shock_or_poor_perfusion(s):
        p += 0.3
        evidence.append("Shock/poor perfusion")

    if f.altered_consciousness(s):
        p += 0.2
        evidence.append(f"Altered mental status ({s.disability.avpu})")

    if f.heart_rate_above(s, 140):
        p += 0.1
        evidence.append("Tachycardia")

    if f.resp_rate_above(s, 40):
        p += 0.1
        evidence.append("Tachypnea")

    return _differential(
        "sepsis", "Septic Shock", p, evidence, missing,
        [
            "Source of infection (pneumonia, UTI, meningitis)?",
            "Recent illness or surgery?",
            "Immunocompromised?",
            "Rash or petechiae?",
        ],
        CRITICAL,
    )


def analyze_neonatal_sepsis(s: SurveySnapshot) -> Differential:
    if not f.is_neonate(s):
        return _differential(
            "neonatal_sepsis", "Neonatal Sepsis", 0.0, [], [], [], CRITICAL
        )

    p = 0.2
    evidence = ["Neonate (0-28 days)"]
    missing: List[str] = []

    if f.fever_or_hypothermia(s):
        p += 0.3
        evidence.append(f"Temperature {s.exposure.temperature:g}°C")
    else:
        missing.append("fever")

    if s.circulation.history.poor_feeding:
        p += 0.2
        evidence.append("Poor feeding")
    else:
        missing.append("feeding_history")

    if f.altered_consciousness(s):
        p += 0.2
        evidence.append("Lethargy")

    if f.increased_effort(s) or f.resp_rate_above(s, 60):
        p += 0.1
        evidence.append("Respiratory distress")

    return _differential(
        "neonatal_sepsis", "Neonatal Sepsis", p, evidence, missing,
        [
            "Maternal risk factors (prolonged rupture of membranes, chorioamnionitis)?",
            "Jaundice present?",
            "Seizures or abnormal movements?",
            "Umbilical stump infection?",
        ],
        CRITICAL,
    )


def analyze_hyperkalemia(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if s.physiologic_state == "cardiac_arrest":
        p += 0.3
        evidence.append("Cardiac arrest (PEA)")

    if s.circulation.history.oliguria:
        p += 0.3
        evidence.append("Reduced urine output")
    else:
        missing.append("urine_output")

    if s.circulation.rhythm in ("bradycardia", "irregular"):
        p += 0.2
        evidence.append("Cardiac rhythm abnormality")

    missing.extend(["ecg_changes", "renal_history"])

    return _differential(
        "hyperkalemia", "Hyperkalemia", p, evidence, missing,
        [
            "ECG shows peaked T waves, wide QRS, or other changes?",
            "History of kidney disease or dialysis?",
            "Recent crush injury or rhabdomyolysis?",
            "Medications (ACE inhibitors, potassium supplements)?",
        ],
        IMMEDIATE,
    )


def analyze_hypoglycemia(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if f.glucose_below(s, 3):
        p += 0.9
        evidence.append(f"Hypoglycemia ({s.disability.blood_glucose:g} mmol/L)")
    elif f.glucose_below(s, 4):
        p += 0.5
        evidence.append(f"Low-normal glucose ({s.disability.blood_glucose:g} mmol/L)")
    else:
        missing.append("blood_glucose")

    if f.altered_consciousness(s) or s.physiologic_state == "unresponsive":
        p += 0.1
        evidence.append("Altered mental status")

    if f.seizure_now_or_recent(s):
        p += 0.05
        evidence.append("Seizure (possible hypoglycemic cause)")

    return _differential(
        "hypoglycemia", "Hypoglycemia", p, evidence, missing,
        [
            "Known diabetes?",
            "Missed meals or prolonged fasting?",
            "Recent insulin or oral hypoglycemic medication?",
            "Sweating, tremor, or palpitations?",
        ],
        IMMEDIATE,
    )


def analyze_meningitis(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if f.fever_above(s, 38):
        p += 0.3
        evidence.append(f"Fever ({s.exposure.temperature:g}°C)")
    else:
        missing.append("fever")

    if f.altered_consciousness(s):
        p += 0.3
        evidence.append(f"Altered mental status ({s.disability.avpu})")

    if f.petechiae_or_purpura(s):
        p += 0.3
        evidence.append("Petechiae/purpura (meningococcemia)")

    if s.in_shock:
        p += 0.2
        evidence.append("Shock")

    if f.seizure_now_or_recent(s):
        p += 0.1
        evidence.append("Seizure")

    missing.append("neck_stiffness")

    return _differential(
        "bacterial_meningitis", "Bacterial Meningitis", p, evidence, missing,
        [
            "Neck stiffness/pain with neck flexion?",
            "Severe headache?",
            "Photophobia (light sensitivity)?",
            "Recent upper respiratory infection?",
            "Immunization status (Hib, pneumococcal, meningococcal)?",
        ],
        IMMEDIATE,
    )


# --- Obstetric --------------------------------------------------------------

def analyze_eclampsia(s: SurveySnapshot) -> Differential:
    seizure = s.disability.seizure
    if not s.pregnant_or_postpartum:
        return _differential(
            "eclampsia", "Eclampsia", 0.0, [], ["pregnancy_status"], [], IMMEDIATE
        )

    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if seizure.active or seizure.just_stopped:
        p += 0.4
        evidence.append("Seizure activity")
    elif s.physiologic_state == "seizure":
        p += 0.4
        evidence.append("Seizure reported")
    else:
        return _differential(
            "eclampsia", "Eclampsia", 0.0, [], ["seizure"], [], IMMEDIATE
        )

    bp = s.circulation.blood_pressure
    if f.systolic_above(s, 140):
        p += 0.3
        evidence.append(f"Hypertension ({bp.systolic:g}/{bp.diastolic:g})")
    else:
        missing.append("blood_pressure")

    p += 0.2
    evidence.append("Pregnant or postpartum")

    weeks = s.exposure.pregnancy.gestational_age_weeks
    if weeks is not None and weeks > 20:
        p += 0.1
        evidence.append(f"Gestational age {weeks:g} weeks")

    return _differential(
        "eclampsia", "Eclampsia", p, evidence, missing,
        [
            "Severe headache?",
            "Vision changes (blurred, spots)?",
            "Swelling (hands, face, feet)?",
            "Right upper quadrant pain?",
            "Known preeclampsia diagnosis?",
        ],
        IMMEDIATE,
    )


def analyze_postpartum_hemorrhage(s: SurveySnapshot) -> Differential:
    if not (s.pregnant_or_postpartum and s.exposure.pregnancy.postpartum):
        return _differential(
            "postpartum_hemorrhage", "Postpartum Hemorrhage", 0.0, [],
            ["postpartum_status"], [], IMMEDIATE,
        )

    p = 0.4
    evidence = ["Postpartum status"]
    missing: List[str] = []

    if s.physiologic_state == "severe_bleeding":
        p += 0.5
        evidence.append("Severe bleeding reported")
    else:
        missing.append("bleeding_assessment")

    if f.shock_or_poor_perfusion(s):
        p += 0.1
        evidence.append("Shock/poor perfusion")

    return _differential(
        "postpartum_hemorrhage", "Postpartum Hemorrhage", p, evidence, missing,
        [
            "How much blood loss (estimated)?",
            "Uterus firm or soft (boggy)?",
            "Placenta delivered completely?",
            "Perineal or vaginal lacerations?",
        ],
        IMMEDIATE,
    )


# --- Neurological -----------------------------------------------------------

def analyze_status_epilepticus(s: SurveySnapshot) -> Differential:
    seizure = s.disability.seizure
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if seizure.active:
        p += 0.5
        evidence.append("Seizure active now")
    elif seizure.just_stopped:
        p += 0.3
        evidence.append("Seizure just stopped")
    elif s.physiologic_state == "seizure":
        p += 0.4
        evidence.append("Seizure reported")
    else:
        return _differential(
            "status_epilepticus", "Status Epilepticus", 0.0, [], ["seizure"], [], CRITICAL
        )

    if seizure.duration_minutes is not None and seizure.duration_minutes >= 5:
        p += 0.3
        evidence.append(f"Seizure duration {seizure.duration_minutes:g} minutes")
    else:
        missing.append("seizure_duration")

    if seizure.just_stopped and f.altered_consciousness(s):
        p += 0.1
        evidence.append("Not waking up after seizure")

    if s.pregnant_or_postpartum and not f.systolic_above(s, 139):
        p += 0.1
        evidence.append("No hypertension (less likely eclampsia)")

    return _differential(
        "status_epilepticus", "Status Epilepticus", p, evidence, missing,
        [
            "Known epilepsy or seizure disorder?",
            "Recent head injury?",
            "Medication non-compliance?",
            "Fever present (febrile seizure)?",
            "For pregnant patients: High BP, headache, or vision changes (eclampsia)?",
        ],
        CRITICAL,
    )


def analyze_stroke(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []

    if f.altered_consciousness(s):
        p += 0.3
        evidence.append(f"Altered mental status ({s.disability.avpu})")

    if f.unequal_pupils(s):
        p += 0.3
        evidence.append("Unequal/unreactive pupils")

    abnormal_posture = f.posturing(s)
    if abnormal_posture:
        p += 0.2
        evidence.append(f"Posturing ({abnormal_posture})")

    if f.systolic_above(s, 180):
        p += 0.2
        evidence.append("Severe hypertension")

    if f.is_adult(s) and s.age_years > 60:
        p += 0.1
        evidence.append("Age >60 years")

    if s.pregnant_or_postpartum:
        p += 0.1
        evidence.append("Pregnancy (increased stroke risk)")

    return _differential(
        "stroke", "Stroke (Ischemic/Hemorrhagic)", p, evidence, [],
        [
            "Sudden onset of symptoms?",
            "Facial droop?",
            "Arm/leg weakness (one-sided)?",
            "Speech difficulty?",
            "Severe headache (worst of life)?",
            "Time of symptom onset? (Critical for tPA eligibility)",
        ],
        IMMEDIATE,
    )


def analyze_opioid_overdose(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    substance = s.exposure.toxin_exposure.substance
    if substance:
        p += 0.4
        evidence.append(f"Toxin exposure: {substance}")
    else:
        missing.append("toxin_exposure_history")

    if f.resp_rate_below(s, 10) or s.physiologic_state == "respiratory_arrest":
        p += 0.4
        evidence.append("Severe respiratory depression")

    if f.pinpoint_pupils(s):
        p += 0.3
        evidence.append("Pinpoint pupils (miosis)")

    if f.altered_consciousness(s):
        p += 0.2
        evidence.append(f"Altered mental status ({s.disability.avpu})")

    if f.spo2_below(s, 90):
        p += 0.1
        evidence.append("Hypoxia")

    return _differential(
        "opioid_overdose", "Opioid Overdose", p, evidence, missing,
        [
            "Known opioid use (prescribed or recreational)?",
            "Found with drug paraphernalia?",
            "Witnessed ingestion/injection?",
            "Time since exposure?",
        ],
        IMMEDIATE,
    )


# --- Respiratory ------------------------------------------------------------

def analyze_anaphylaxis(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if f.respiratory_distress(s) or s.breathing.auscultation.wheezing:
        p += 0.3
        evidence.append("Respiratory distress")
    else:
        missing.append("respiratory_distress")

    if f.shock_or_poor_perfusion(s):
        p += 0.3
        evidence.append("Shock/poor perfusion")

    if f.stridor(s):
        p += 0.2
        evidence.append("Stridor (upper airway swelling)")

    skin = s.exposure.skin_findings
    if skin.flushing or s.exposure.visible_injuries.rash:
        p += 0.2
        evidence.append("Urticaria/flushing")
    else:
        missing.append("skin_findings")
    missing.append("allergen_exposure")

    return _differential(
        "anaphylaxis", "Anaphylaxis", p, evidence, missing,
        [
            "Swelling of face, lips, or tongue?",
            "Rash, hives, or itching?",
            "Recent exposure to allergen (food, medication, bee sting)?",
            "Known allergies?",
        ],
        IMMEDIATE,
    )


def analyze_asthma(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if s.breathing.auscultation.wheezing:
        p += 0.4
        evidence.append("Wheezing")
    else:
        missing.append("wheezing")

    if f.respiratory_distress(s):
        p += 0.3
        evidence.append("Respiratory distress")

    if s.breathing.auscultation.silent_chest:
        p += 0.2
        evidence.append("Silent chest (severe obstruction)")

    if f.spo2_below(s, 92):
        p += 0.1
        evidence.append("Hypoxia")

    missing.extend(["asthma_history", "trigger"])

    return _differential(
        "status_asthmaticus", "Asthma / Status Asthmaticus", p, evidence, missing,
        [
            "Known asthma history?",
            "Recent trigger (infection, allergen, exercise)?",
            "Medications used (bronchodilators, steroids)?",
            "Previous ICU admissions for asthma?",
        ],
        CRITICAL,
    )


def analyze_pulmonary_embolism(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if s.physiologic_state == "severe_respiratory_distress" or f.spo2_below(s, 94):
        p += 0.3
        evidence.append("Respiratory distress/hypoxia")
    else:
        missing.append("respiratory_distress")

    if f.heart_rate_above(s, 100):
        p += 0.2
        evidence.append("Tachycardia")

    if f.is_pediatric(s) and s.age_years < 12:
        p -= 0.2
    elif f.is_adult(s) or s.pregnant_or_postpartum:
        p += 0.1

    if s.pregnant_or_postpartum:
        p += 0.1
        evidence.append("Pregnancy (risk factor)")

    missing.extend(["chest_pain", "leg_pain_swelling", "risk_factors"])

    return _differential(
        "pulmonary_embolism", "Pulmonary Embolism", p, evidence, missing,
        [
            "Chest pain (sharp, worse with breathing)?",
            "Unilateral leg pain or swelling (calf pain)?",
            "Recent surgery or immobilization?",
            "Oral contraceptives or hormone therapy?",
            "Recent long travel (plane, car)?",
        ],
        CRITICAL,
    )


def analyze_foreign_body_aspiration(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []

    if s.airway.status == "obstructed":
        p += 0.5
        evidence.append("Airway obstructed")

    if f.stridor(s):
        p += 0.3
        evidence.append("Stridor (partial airway obstruction)")

    if s.physiologic_state == "severe_respiratory_distress":
        p += 0.2
        evidence.append("Severe respiratory distress")

    if f.is_pediatric(s) and s.age_years < 5:
        p += 0.1
        evidence.append("High-risk age group (<5 years)")

    if f.spo2_below(s, 90):
        p += 0.1
        evidence.append("Severe hypoxia")

    return _differential(
        "foreign_body_aspiration", "Foreign Body Aspiration (Choking)", p, evidence, [],
        [
            "Witnessed choking episode?",
            "Eating or playing with small objects before onset?",
            "Sudden onset of symptoms?",
            "Able to speak/cry?",
        ],
        IMMEDIATE,
    )


def analyze_pneumonia(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []

    if f.resp_rate_above(s, age_appropriate_rr(s.age_years).max):
        p += 0.25
        evidence.append("Tachypnea")

    if f.spo2_below(s, 92):
        p += 0.25
        evidence.append(f"Hypoxia (SpO2 {s.breathing.spo2:g}%)")

    if f.crackles(s):
        p += 0.3
        evidence.append("Crackles on auscultation")

    if f.fever_above(s, 38.5):
        p += 0.2
        evidence.append(f"Fever ({s.exposure.temperature:g}°C)")

    if f.altered_consciousness(s):
        p += 0.1
        evidence.append("Altered mental status")

    if f.increased_effort(s):
        p += 0.15
        evidence.append("Increased work of breathing")

    return _differential(
        "pneumonia", "Severe Pneumonia", p, evidence, [],
        [
            "Productive cough?",
            "Chest pain or pleuritic pain?",
            "Symptoms >3 days?",
        ],
        CRITICAL,
    )


def analyze_bronchiolitis(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []

    if s.age_years < 2:
        p += 0.2
        evidence.append("Age <2 years")
    else:
        p -= 0.3

    if f.resp_rate_above(s, age_appropriate_rr(s.age_years).max):
        p += 0.2
        evidence.append("Tachypnea")

    if s.breathing.auscultation.wheezing:
        p += 0.3
        evidence.append("Wheezing")

    if f.crackles(s):
        p += 0.2
        evidence.append("Crackles")

    if f.increased_effort(s):
        p += 0.2
        evidence.append("Increased work of breathing (nasal flaring, retractions)")

    if f.spo2_below(s, 92):
        p += 0.2
        evidence.append(f"Hypoxia (SpO2 {s.breathing.spo2:g}%)")

    return _differential(
        "bronchiolitis", "Severe Bronchiolitis (RSV)", p, evidence, [],
        [
            "Runny nose (rhinorrhea)?",
            "Difficulty feeding?",
            "Winter/early spring season?",
        ],
        CRITICAL,
    )


def analyze_croup(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []

    if 0.5 <= s.age_years <= 3:
        p += 0.2
        evidence.append("Age 6 months - 3 years")

    if f.stridor(s):
        p += 0.4
        evidence.append("Stridor (inspiratory)")

    if f.increased_effort(s):
        p += 0.2
        evidence.append("Increased work of breathing")

    if f.spo2_below(s, 92):
        p += 0.2
        evidence.append(f"Hypoxia (SpO2 {s.breathing.spo2:g}%)")

    return _differential(
        "croup", "Severe Croup (Laryngotracheobronchitis)", p, evidence, [],
        [
            "Barky/seal-like cough?",
            "Hoarse voice?",
            "Symptoms worse at night?",
        ],
        CRITICAL,
    )


def analyze_epiglottitis(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []

    if s.airway.status == "obstructed":
        p += 0.4
        evidence.append("Airway obstruction")

    if f.stridor(s):
        p += 0.3
        evidence.append("Stridor")

    if f.spo2_below(s, 90):
        p += 0.2
        evidence.append(f"Severe hypoxia (SpO2 {s.breathing.spo2:g}%)")

    if f.fever_above(s, 39):
        p += 0.2
        evidence.append(f"High fever ({s.exposure.temperature:g}°C)")

    if f.altered_consciousness(s):
        p += 0.1
        evidence.append("Altered mental status")

    return _differential(
        "epiglottitis", "Epiglottitis (Airway Emergency)", p, evidence, [],
        [
            "Drooling or unable to swallow?",
            "Tripod positioning (sitting forward, mouth open)?",
            "Toxic appearance?",
            "Muffled/hot potato voice?",
        ],
        IMMEDIATE,
    )


# --- Cardiothoracic / trauma ------------------------------------------------

def analyze_tension_pneumothorax(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []

    if f.reduced_air_entry(s):
        p += 0.4
        evidence.append("Decreased/absent air entry")

    if s.in_shock or f.hypotensive(s):
        p += 0.3
        evidence.append("Hypotension/shock")

    if f.jvp_elevated(s):
        p += 0.2
        evidence.append("Elevated JVP")

    mechanism = f.trauma_mechanism(s)
    if mechanism:
        p += 0.2
        evidence.append(f"Trauma ({mechanism})")

    if f.spo2_below(s, 85):
        p += 0.1
        evidence.append("Severe hypoxia")

    if f.heart_rate_above(s, 120):
        p += 0.05
        evidence.append("Tachycardia")

    return _differential(
        "tension_pneumothorax", "Tension Pneumothorax", p, evidence, [],
        [
            "Tracheal deviation?",
            "Recent chest trauma or procedure?",
            "On mechanical ventilation?",
            "Subcutaneous emphysema?",
        ],
        IMMEDIATE,
    )


def analyze_cardiac_tamponade(s: SurveySnapshot) -> Differential:
    p = 0.0
    evidence: List[str] = []
    missing: List[str] = []

    if f.jvp_elevated(s):
        p += 0.4
        evidence.append("Elevated JVP")
    else:
        missing.append("jvp_assessment")

    if s.in_shock or f.hypotensive(s):
        p += 0.3
        evidence.append("Hypotension/shock")

    mechanism = f.trauma_mechanism(s)
    if mechanism == "penetrating":
        p += 0.3
        evidence.append("Penetrating chest trauma")
    elif mechanism:
        p += 0.1
        evidence.append(f"Trauma ({mechanism})")

    if not f.crackles(s):
        p += 0.1
        evidence.append("Clear lung fields")

    if f.heart_rate_above(s, 120):
        p += 0.05
        evidence.append("Tachycardia")

    return _differential(
        "cardiac_tamponade", "Cardiac Tamponade", p, evidence, missing,
        [
            "Muffled/distant heart sounds?",
            "Pulsus paradoxus (BP drops >10 mmHg on inspiration)?",
            "Recent chest trauma or cardiac procedure?",
            "History of pericarditis or malignancy?",
        ],
        IMMEDIATE,
    )


def analyze_myocardial_infarction(s: SurveySnapshot) -> Differential:
    if f.is_pediatric(s):
        return _differential(
            "acute_mi", "Acute Myocardial Infarction", 0.05,
            ["Rare in pediatric population"], [], [], CRITICAL,
        )

    p = 0.0
    evidence: List[str] = []

    if s.age_years > 40:
        p += 0.2
        evidence.append("Age >40 years")

    if s.in_shock:
        p += 0.3
        evidence.append("Shock (possible cardiogenic)")

    if f.jvp_elevated(s):
        p += 0.2
        evidence.append("Elevated JVP (heart failure)")

    if f.crackles(s):
        p += 0.2
        evidence.append("Pulmonary edema")

    return _differential(
        "acute_mi", "Acute Myocardial Infarction (STEMI/NSTEMI)", p, evidence, ["chest_pain"],
        [
            "Chest pain (crushing, radiating to arm/jaw)?",
            "Shortness of breath?",
            "Nausea/vomiting?",
            "Diaphoresis (sweating)?",
            "Risk factors (diabetes, hypertension, smoking, family history)?",
        ],
        IMMEDIATE,
    )


def analyze_severe_burns(s: SurveySnapshot) -> Differential:
    if not s.exposure.visible_injuries.burns:
        return _differential(
            "severe_burns", "Severe Burns", 0.0, [], ["visible_burns"], [], CRITICAL
        )

    p = 0.5
    evidence = ["Visible burns"]

    if f.trauma_mechanism(s) == "burn":
        p += 0.3
        evidence.append("Burn mechanism confirmed")

    if s.in_shock:
        p += 0.2
        evidence.append("Shock (fluid losses)")

    if s.airway.status == "obstructed" or f.stridor(s):
        p += 0.2
        evidence.append("Airway compromise (inhalation injury)")

    if f.spo2_below(s, 90):
        p += 0.1
        evidence.append("Hypoxia (smoke inhalation)")

    return _differential(
        "severe_burns", "Severe Burns", p, evidence, [],
        [
            "Burn mechanism (flame, scald, chemical, electrical)?",
            "Enclosed space fire (smoke inhalation)?",
            "Estimated body surface area burned (%)?",
            "Depth of burns (superficial, partial thickness, full thickness)?",
            "Circumferential burns (chest, limbs)?",
        ],
        IMMEDIATE,
    )


SCORERS: tuple = (
    analyze_dka,
    analyze_sepsis,
    analyze_eclampsia,
    analyze_status_epilepticus,
    analyze_anaphylaxis,
    analyze_pulmonary_embolism,
    analyze_hyperkalemia,
    analyze_hypoglycemia,
    analyze_postpartum_hemorrhage,
    analyze_asthma,
    analyze_neonatal_sepsis,
    analyze_foreign_body_aspiration,
    analyze_tension_pneumothorax,
    analyze_cardiac_tamponade,
    analyze_myocardial_infarction,
    analyze_stroke,
    analyze_meningitis,
    analyze_opioid_overdose,
    analyze_severe_burns,
    analyze_pneumonia,
    analyze_bronchiolitis,
    analyze_croup,
    analyze_epiglottitis,
)


def generate_differentials(
    snapshot: SurveySnapshot,
    scorers: Optional[List[Callable[[SurveySnapshot], Differential]]] = None,
) -> List[Differential]:
    """Run every condition scorer once; the result is unranked."""
    results: List[Differential] = []
    for scorer in scorers or SCORERS:
        differential = scorer(snapshot)
        logger.debug("%s scored %.2f", differential.id, differential.probability)
        results.append(differential)
    return results
