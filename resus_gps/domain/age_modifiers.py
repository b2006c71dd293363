"""
Age-specific modulation of differential scores.

The same condition presents differently across age groups: neonates with
sepsis are often afebrile, elderly patients have silent MIs, childhood
epiglottitis is rare after Hib vaccination. The table below carries one
authored modifier per (condition id, age group) pair; most pairs have none
and pass through untouched.
"""
import logging
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .models import AgeGroup, AgeModifier, Differential, SurveySnapshot


logger = logging.getLogger(__name__)

AGE_EVIDENCE_PREFIX = "[Age-specific] "


def get_age_group(age_years: float, pregnant: bool = False) -> AgeGroup:
    if pregnant:
        return AgeGroup.PREGNANT
    if age_years < 0.08:
        return AgeGroup.NEONATE
    if age_years < 1:
        return AgeGroup.INFANT
    if age_years < 12:
        return AgeGroup.CHILD
    if age_years < 18:
        return AgeGroup.ADOLESCENT
    if age_years < 65:
        return AgeGroup.ADULT
    return AgeGroup.ELDERLY


def _modifier(condition_id, age_group, adjustment, presentation, risk_factors, interventions):
    return AgeModifier(
        condition_id=condition_id,
        age_group=age_group,
        probability_adjustment=adjustment,
        presentation_changes=presentation,
        risk_factor_changes=risk_factors,
        intervention_modifications=interventions,
    )


_MODIFIERS = (
    _modifier(
        "sepsis", AgeGroup.NEONATE, 0.2,
        [
            "Fever NOT required (hypothermia common: temp <36.5°C)",
            "Lethargy/poor feeding primary signs",
            "Apnea/bradycardia common",
            "Jaundice may be present",
            "Hypoglycemia common",
        ],
        [
            "Maternal GBS colonization",
            "Prolonged rupture of membranes",
            "Maternal fever during labor",
            "Prematurity",
        ],
        [
            "Ampicillin + Gentamicin (NOT ceftriaxone in <28 days)",
            "Blood culture from two sites",
            "Lumbar puncture if stable",
        ],
    ),
    _modifier(
        "sepsis", AgeGroup.ELDERLY, 0.15,
        [
            "Fever may be absent or blunted",
            "Confusion/altered mental status primary sign",
            "Hypothermia more common than fever",
            "Tachypnea may be only vital sign abnormality",
        ],
        [
            "Immunosenescence",
            "Multiple comorbidities",
            "Polypharmacy",
            "Institutionalization",
        ],
        [
            "Renal dose adjustment for antibiotics",
            "Avoid nephrotoxic agents if possible",
            "Lower fluid bolus volumes (10 ml/kg, reassess)",
        ],
    ),
    _modifier(
        "acute_mi", AgeGroup.ELDERLY, 0.25,
        [
            "Chest pain may be ABSENT (silent MI in 30-40%)",
            "Dyspnea primary symptom",
            "Confusion/altered mental status",
            "Syncope",
            "Nausea/vomiting without chest pain",
        ],
        [
            "Diabetes (neuropathy → silent MI)",
            "Previous MI",
            "Heart failure",
        ],
        [
            "Aspirin dose same (162-325 mg)",
            "Caution with thrombolytics (bleeding risk)",
            "Consider primary PCI over thrombolysis",
        ],
    ),
    _modifier(
        "acute_mi", AgeGroup.PREGNANT, -0.3,
        [
            "Chest pain may be attributed to GERD/musculoskeletal",
            "Dyspnea may be attributed to pregnancy",
        ],
        [
            "Peripartum cardiomyopathy",
            "Preeclampsia/eclampsia",
            "Cocaine use",
        ],
        [
            "Aspirin safe in pregnancy",
            "Avoid ACE inhibitors (teratogenic)",
            "Thrombolytics: risk-benefit discussion",
            "Primary PCI preferred",
        ],
    ),
    _modifier(
        "dka", AgeGroup.PREGNANT, 0.2,
        [
            "Lower glucose threshold: >200 mg/dL (11 mmol/L) vs >250 mg/dL",
            "Occurs at lower glucose due to accelerated starvation",
            "Vomiting may be attributed to hyperemesis gravidarum",
        ],
        [
            "Gestational diabetes",
            "Beta-agonist tocolytics",
            "Corticosteroids for fetal lung maturity",
        ],
        [
            "More aggressive fluid resuscitation",
            "Insulin infusion same",
            "Monitor fetal heart rate",
            "Obstetric consultation",
        ],
    ),
    _modifier(
        "dka", AgeGroup.CHILD, 0.15,
        [
            "Abdominal pain prominent (may mimic appendicitis)",
            "Kussmaul breathing",
            "Fruity breath odor",
        ],
        [
            "New-onset type 1 diabetes (30-40% present in DKA)",
            "Insulin omission (adolescents)",
        ],
        [
            "CRITICAL: Cerebral edema risk (1-2%)",
            "Fluid resuscitation: 10 ml/kg bolus (NOT 20 ml/kg)",
            "Avoid rapid glucose correction",
            "Mannitol/hypertonic saline ready for cerebral edema",
        ],
    ),
    _modifier(
        "stroke", AgeGroup.CHILD, -0.4,
        [
            "Seizures more common presentation",
            "Altered mental status",
            "Hemiparesis",
        ],
        [
            "Sickle cell disease (most common cause)",
            "Congenital heart disease",
            "Moyamoya disease",
            "Arterial dissection (trauma)",
        ],
        [
            "tPA rarely used in children",
            "Sickle cell: exchange transfusion",
            "Neurology consultation",
        ],
    ),
    _modifier(
        "stroke", AgeGroup.PREGNANT, 0.15,
        [
            "Headache may be attributed to preeclampsia",
            "Seizures may be attributed to eclampsia",
        ],
        [
            "Preeclampsia/eclampsia",
            "Cerebral venous thrombosis",
            "Peripartum cardiomyopathy",
        ],
        [
            "tPA: risk-benefit discussion (pregnancy category C)",
            "Rule out eclampsia first",
            "Magnesium sulfate if eclampsia",
        ],
    ),
    _modifier(
        "pneumonia", AgeGroup.NEONATE, 0.2,
        [
            "Tachypnea primary sign",
            "Grunting",
            "Nasal flaring",
            "Subcostal retractions",
            "Apnea",
        ],
        ["Group B Streptococcus", "E. coli", "Listeria"],
        ["Ampicillin + Gentamicin", "Blood culture", "Chest X-ray"],
    ),
    _modifier(
        "pneumonia", AgeGroup.ELDERLY, 0.2,
        [
            "Fever may be absent",
            "Confusion primary presentation",
            "Falls",
            "Functional decline",
        ],
        ["Aspiration common", "Immunosenescence", "Comorbidities"],
        [
            "Broader antibiotic coverage",
            "Aspiration coverage (anaerobes)",
            "Lower threshold for admission",
        ],
    ),
    _modifier(
        "anaphylaxis", AgeGroup.CHILD, 0.1,
        [
            "Abdominal pain prominent",
            "Vomiting",
            "Behavioral changes (sense of impending doom)",
        ],
        [
            "Food allergies (peanuts, tree nuts, milk, eggs)",
            "Insect stings",
        ],
        [
            "Epinephrine 0.01 mg/kg IM (max 0.3 mg)",
            "Repeat every 5-15 minutes if needed",
        ],
    ),
    _modifier(
        "hyperkalemia", AgeGroup.NEONATE, 0.15,
        ["Bradycardia", "Arrhythmias", "Muscle weakness"],
        [
            "Prematurity",
            "Hemolysis",
            "Tissue breakdown",
            "Congenital adrenal hyperplasia",
        ],
        [
            "Calcium gluconate 100 mg/kg IV (1 ml/kg of 10%)",
            "Insulin + glucose",
            "Sodium bicarbonate if acidotic",
        ],
    ),
    _modifier(
        "hyperkalemia", AgeGroup.ELDERLY, 0.2,
        ["Weakness", "Arrhythmias"],
        [
            "Chronic kidney disease",
            "ACE inhibitors/ARBs",
            "Potassium-sparing diuretics",
            "NSAIDs",
        ],
        [
            "Calcium gluconate 1 g IV",
            "Insulin + glucose (monitor for hypoglycemia)",
            "Dialysis if refractory",
        ],
    ),
    _modifier(
        "bronchiolitis", AgeGroup.INFANT, 0.3,
        [
            "Wheezing",
            "Crackles",
            "Tachypnea",
            "Nasal flaring",
            "Retractions",
            "Feeding difficulty",
        ],
        [
            "Age <2 years (peak 2-6 months)",
            "RSV season (winter)",
            "Prematurity",
            "Congenital heart disease",
        ],
        [
            "Supportive care (oxygen, hydration)",
            "NO bronchodilators (ineffective)",
            "NO steroids (ineffective)",
            "High-flow nasal cannula if severe",
        ],
    ),
    _modifier(
        "croup", AgeGroup.CHILD, 0.3,
        [
            "Barky cough (seal-like)",
            "Stridor (inspiratory)",
            "Hoarse voice",
            "Worse at night",
        ],
        ["Age 6 months - 3 years", "Viral prodrome"],
        [
            "Dexamethasone 0.6 mg/kg PO/IM (single dose)",
            "Nebulized epinephrine if severe (0.5 ml/kg of 1:1000, max 5 ml)",
            "Cool mist (no evidence but traditional)",
        ],
    ),
    _modifier(
        "epiglottitis", AgeGroup.CHILD, -0.3,
        [
            "Tripod positioning",
            "Drooling",
            "Toxic appearance",
            "Muffled voice",
            "High fever",
        ],
        ["Unvaccinated (Hib)"],
        [
            "DO NOT examine throat (may precipitate airway obstruction)",
            "Keep child calm",
            "Prepare for emergency airway",
            "Ceftriaxone after airway secured",
        ],
    ),
)

AGE_MODIFIERS: Mapping[Tuple[str, AgeGroup], AgeModifier] = MappingProxyType(
    {(m.condition_id, m.age_group): m for m in _MODIFIERS}
)


def get_age_modifier(condition_id: str, age_group: AgeGroup) -> Optional[AgeModifier]:
    return AGE_MODIFIERS.get((condition_id, age_group))


def get_age_specific_interventions(condition_id: str, age_group: AgeGroup) -> List[str]:
    modifier = get_age_modifier(condition_id, age_group)
    if modifier is None:
        return []
    return list(modifier.intervention_modifications)


def snapshot_age_group(snapshot: SurveySnapshot) -> AgeGroup:
    return get_age_group(snapshot.age_years, snapshot.pregnant_or_postpartum)


def apply_age_modifiers(differential: Differential, snapshot: SurveySnapshot) -> Differential:
    """
    Shift a differential's score for the patient's age group.

    Returns the same differential when no modifier is authored for the
    pair. Otherwise returns a copy with the adjustment added (clamped to
    [0, 1]) and the modifier's presentation changes appended after the
    existing evidence, each tagged with ``AGE_EVIDENCE_PREFIX``.
    """
    age_group = snapshot_age_group(snapshot)
    modifier = get_age_modifier(differential.id, age_group)
    if modifier is None:
        logger.debug("No age modifier for %s/%s", differential.id, age_group.value)
        return differential

    probability = max(0.0, min(1.0, differential.probability + modifier.probability_adjustment))
    evidence = list(differential.evidence) + [
        AGE_EVIDENCE_PREFIX + change for change in modifier.presentation_changes
    ]
    logger.debug(
        "Age modifier %s/%s: %.2f -> %.2f",
        differential.id, age_group.value, differential.probability, probability,
    )
    return differential.model_copy(update={"probability": probability, "evidence": evidence})
