"""
Authored care plans: the interventions and work-up for a working diagnosis.

Interventions are tiered by risk-benefit. Immediate ones are safe to start
on clinical suspicion alone, urgent ones need minimal confirmation, and
confirmatory ones (thrombolysis, insulin, tPA) wait for their stat tests
because giving them for the wrong diagnosis causes serious harm.
Weight-based names use the measured weight or the APLS estimate.
"""
import logging
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Tuple

from .age_modifiers import get_age_specific_interventions, snapshot_age_group
from .dosing import dosing_weight, per_kg
from .models import (
    CarePlan,
    Dosing,
    Intervention,
    InterventionTier,
    Priority,
    RequiredTest,
    RiskLevel,
    SurveySnapshot,
)


logger = logging.getLogger(__name__)

IMMEDIATE = InterventionTier.IMMEDIATE
URGENT = InterventionTier.URGENT
CONFIRMATORY = InterventionTier.CONFIRMATORY

PlanItems = Tuple[List[Intervention], List[RequiredTest]]


def _test(name: str, priority: Priority, threshold: Optional[str] = None) -> RequiredTest:
    return RequiredTest(name=name, threshold=threshold, priority=priority)


def _stat(name, threshold=None):
    return _test(name, Priority.STAT, threshold)


def _urgent(name, threshold=None):
    return _test(name, Priority.URGENT, threshold)


def _intervention(id, name, category, indication, risk=RiskLevel.LOW, benefit="high", **kwargs) -> Intervention:
    return Intervention(
        id=id,
        name=name,
        category=category,
        indication=indication,
        risk_if_wrong=risk,
        benefit_if_right=benefit,
        **kwargs,
    )


def _dka(s: SurveySnapshot, w: Optional[float]) -> PlanItems:
    return [
        _intervention(
            "dka_fluid_bolus", f"Normal Saline Bolus: {per_kg(10, 'mL', w)}", IMMEDIATE,
            "DKA - Fluid resuscitation",
            contraindications=["Signs of heart failure", "Pulmonary edema"],
            dosing=Dosing(calculation="10 mL/kg", max_dose=1000, route="IV over 10-15 minutes"),
            monitoring=["Heart rate", "Blood pressure", "Urine output", "Blood glucose hourly"],
        ),
        _intervention(
            "dka_monitoring", "Continuous Cardiac Monitoring", IMMEDIATE,
            "DKA - Monitor for arrhythmias (hypokalemia risk)", risk=RiskLevel.NONE,
        ),
        _intervention(
            "dka_insulin", f"Regular Insulin: {per_kg(0.1, 'units/hr', w, decimals=2)}", CONFIRMATORY,
            "DKA - After confirmed ketoacidosis",
            risk=RiskLevel.HIGH,
            time_window="hours",
            contraindications=["HHS without ketones"],
            required_tests=[
                _stat("pH", "<7.3"),
                _stat("Ketones (blood or urine)", "positive"),
            ],
            dosing=Dosing(calculation="0.1 units/kg/hr", route="IV infusion"),
            monitoring=["Blood glucose hourly", "Electrolytes every 2-4 hours", "Neurological status"],
        ),
    ], [
        _stat("Venous blood gas (pH, HCO3, pCO2)"),
        _stat("Blood or urine ketones"),
        _stat("Basic metabolic panel (Na, K, Cl, BUN, Cr, glucose)"),
        _urgent("HbA1c (if new diagnosis)"),
    ]


def _sepsis(s, w):
    return [
        _intervention(
            "sepsis_fluid_bolus", f"Normal Saline Bolus: {per_kg(20, 'mL', w)}", IMMEDIATE,
            "Septic shock - Fluid resuscitation", benefit="life_saving",
            contraindications=["Signs of heart failure", "Pulmonary edema"],
            dosing=Dosing(
                calculation="20 mL/kg", max_dose=1000,
                route="IV over 5-10 minutes, may repeat up to 60 mL/kg",
            ),
            monitoring=["Heart rate", "Blood pressure", "Perfusion", "Urine output"],
        ),
        _intervention(
            "sepsis_antibiotics", "Broad-spectrum Antibiotics (within 1 hour)", URGENT,
            "Septic shock - Time-critical", benefit="life_saving",
            contraindications=["Known severe antibiotic allergy"],
            required_tests=[_stat("Blood cultures", "before antibiotics if possible")],
            monitoring=["Clinical response", "Fever curve", "WBC trend"],
        ),
    ], [
        _stat("Blood cultures (2 sets)"),
        _stat("Complete blood count"),
        _stat("Lactate"),
        _urgent("Procalcitonin"),
    ]


def _eclampsia(s, w):
    items = [
        _intervention(
            "eclampsia_magnesium_loading",
            f"Magnesium Sulfate Loading: {per_kg(40, 'mg', w, max_dose=4000)}", IMMEDIATE,
            "Eclampsia - Seizure prophylaxis and treatment", benefit="life_saving",
            contraindications=["Myasthenia gravis", "Heart block"],
            dosing=Dosing(calculation="40 mg/kg", max_dose=4000, route="IV over 15-20 minutes"),
            monitoring=["Respiratory rate", "Deep tendon reflexes", "Urine output", "Magnesium levels"],
        ),
    ]
    bp = s.circulation.blood_pressure
    if bp is not None and bp.systolic >= 160:
        items.append(_intervention(
            "eclampsia_antihypertensive", "Antihypertensive (Labetalol or Hydralazine)", IMMEDIATE,
            "Severe hypertension (SBP ≥160 or DBP ≥110)",
            contraindications=["Asthma (for labetalol)", "Heart failure"],
        ))
    return items, [
        _stat("Complete blood count (platelets)"),
        _stat("Liver enzymes (AST, ALT)"),
        _stat("Renal function (Cr, BUN)"),
        _urgent("Urine protein"),
    ]


def _pulmonary_embolism(s, w):
    return [
        _intervention(
            "pe_heparin_bolus", f"Unfractionated Heparin Bolus: {per_kg(75, 'units', w)}", IMMEDIATE,
            "Suspected PE - Start before imaging", benefit="life_saving",
            contraindications=["Active bleeding", "Recent surgery", "Recent head injury", "Known bleeding disorder"],
            dosing=Dosing(calculation="75 units/kg", route="IV bolus"),
        ),
        _intervention(
            "pe_heparin_infusion", f"Unfractionated Heparin Infusion: {per_kg(20, 'units/hr', w)}", IMMEDIATE,
            "Suspected PE - Continuous anticoagulation", benefit="life_saving",
            dosing=Dosing(calculation="20 units/kg/hr", route="IV infusion"),
            monitoring=["aPTT every 4-6 hours", "Signs of bleeding"],
        ),
    ], [
        _stat("CTPA (CT Pulmonary Angiography)"),
        _stat("Lower limb Doppler ultrasound"),
        _urgent("D-dimer"),
        _stat("ECG"),
        _urgent("Troponin"),
    ]


def _hyperkalemia(s, w):
    return [
        _intervention(
            "hyperkalemia_calcium", "Calcium Gluconate 10%: 10 mL (1 g) IV slow push", IMMEDIATE,
            "Suspected hyperkalemia with ECG changes or arrest",
            risk=RiskLevel.NONE, benefit="life_saving",
            contraindications=["Digoxin toxicity (relative)"],
            dosing=Dosing(calculation="1 g (10 mL of 10% solution)", route="IV over 2-5 minutes"),
            monitoring=["ECG - repeat if no improvement in 5 minutes"],
        ),
        _intervention(
            "hyperkalemia_insulin_dextrose", "Insulin 10 units + D50 50 mL IV push", IMMEDIATE,
            "Shift K+ intracellularly",
            monitoring=["Blood glucose every 15-30 minutes"],
        ),
        _intervention(
            "hyperkalemia_bicarbonate", "Sodium Bicarbonate 8.4%: 50 mEq (50 mL) IV push", IMMEDIATE,
            "Shift K+ intracellularly (especially if acidotic)",
        ),
    ], [
        _stat("Stat potassium (venous blood gas fastest)"),
        _stat("Basic metabolic panel"),
        _stat("ECG"),
    ]


def _hypoglycemia(s, w):
    items = []
    glucose = s.disability.blood_glucose
    if glucose is not None and glucose < 3:
        items.append(_intervention(
            "hypoglycemia_dextrose", f"Dextrose 10%: {per_kg(5, 'mL', w)} IV push", IMMEDIATE,
            "Hypoglycemia - Definitive treatment", risk=RiskLevel.NONE, benefit="life_saving",
            dosing=Dosing(
                calculation="5 mL/kg of D10 (or 2 mL/kg of D25, or 1 mL/kg of D50 in adults)",
                route="IV push",
            ),
            monitoring=["Blood glucose every 15 minutes until stable", "Neurological status"],
        ))
    return items, [
        _stat("Blood glucose (confirm)"),
        _urgent("Insulin level (if recurrent)"),
        _urgent("C-peptide (if recurrent)"),
    ]


def _postpartum_hemorrhage(s, w):
    items = [
        _intervention(
            "pph_oxytocin", "Oxytocin 10 units IM or 20 units in 1L NS IV", IMMEDIATE,
            "Postpartum hemorrhage - Uterine contraction", risk=RiskLevel.NONE, benefit="life_saving",
        ),
    ]
    if s.exposure.pregnancy.days_postpartum == 0:
        items.append(_intervention(
            "pph_tranexamic_acid", "Tranexamic Acid 1 g IV over 10 minutes", IMMEDIATE,
            "Postpartum hemorrhage - Antifibrinolytic",
            contraindications=["History of thrombosis", "Seizure disorder"],
        ))
    return items, [
        _stat("Complete blood count (Hgb, platelets)"),
        _stat("Coagulation panel (PT, aPTT, fibrinogen)"),
        _stat("Type and crossmatch (4-6 units)"),
    ]


def _anaphylaxis(s, w):
    return [
        _intervention(
            "anaphylaxis_epinephrine",
            f"Epinephrine 1:1000: {per_kg(0.01, 'mL', w, max_dose=0.5, decimals=2)} IM", IMMEDIATE,
            "Anaphylaxis - Definitive treatment", risk=RiskLevel.NONE, benefit="life_saving",
            dosing=Dosing(
                calculation="0.01 mL/kg of 1:1000 solution", max_dose=0.5,
                route="IM (anterolateral thigh)",
            ),
            monitoring=["Heart rate", "Blood pressure", "Respiratory status", "May repeat every 5-15 minutes"],
        ),
        _intervention(
            "anaphylaxis_oxygen", "High-flow Oxygen", IMMEDIATE,
            "Anaphylaxis - Respiratory support", risk=RiskLevel.NONE,
        ),
        _intervention(
            "anaphylaxis_antihistamine", "Diphenhydramine 1-2 mg/kg IV/IM", URGENT,
            "Anaphylaxis - Adjunct therapy", risk=RiskLevel.NONE, benefit="moderate",
        ),
    ], [
        _urgent("Tryptase level (within 1-2 hours)"),
    ]


def _status_epilepticus(s, w):
    items = [
        _intervention(
            "status_epilepticus_lorazepam",
            f"Lorazepam: {per_kg(0.1, 'mg', w, max_dose=4, decimals=2)} IV", IMMEDIATE,
            "Status epilepticus - First-line", benefit="life_saving",
            contraindications=["Respiratory depression"],
            dosing=Dosing(calculation="0.1 mg/kg", max_dose=4, route="IV over 2 minutes, may repeat once"),
            monitoring=["Respiratory status", "Seizure activity"],
        ),
    ]
    if s.pregnant_or_postpartum:
        items.append(_intervention(
            "status_epilepticus_pregnancy_note", "⚠️ Pregnancy-Safe Anticonvulsants", IMMEDIATE,
            "Avoid valproate (teratogenic)", risk=RiskLevel.NONE,
        ))
    return items, [
        _stat("Blood glucose (rule out hypoglycemia)"),
        _stat("Electrolytes (Na, Ca, Mg)"),
        _urgent("Anticonvulsant levels (if known epilepsy)"),
    ]


def _status_asthmaticus(s, w):
    return [
        _intervention(
            "asthma_albuterol", "Albuterol 2.5-5 mg nebulized (continuous if severe)", IMMEDIATE,
            "Status asthmaticus - Bronchodilation", risk=RiskLevel.NONE,
            monitoring=["Heart rate", "Respiratory rate", "SpO2", "Peak flow"],
        ),
        _intervention(
            "asthma_ipratropium", "Ipratropium 0.5 mg nebulized (with albuterol)", IMMEDIATE,
            "Status asthmaticus - Adjunct bronchodilation", risk=RiskLevel.NONE, benefit="moderate",
        ),
        _intervention(
            "asthma_steroids", "Methylprednisolone 1-2 mg/kg IV or Prednisone 1-2 mg/kg PO", URGENT,
            "Status asthmaticus - Reduce inflammation", risk=RiskLevel.NONE,
        ),
    ], [
        _urgent("Chest X-ray (if first episode or complications)"),
        _urgent("Arterial blood gas (if severe)"),
    ]


def _neonatal_sepsis(s, w):
    return [
        _intervention(
            "neonatal_sepsis_antibiotics", "Ampicillin + Gentamicin IV (within 1 hour)", URGENT,
            "Neonatal sepsis - Empiric coverage", benefit="life_saving",
            required_tests=[_stat("Blood cultures", "before antibiotics if possible")],
        ),
    ], [
        _stat("Blood cultures"),
        _stat("Complete blood count"),
        _stat("C-reactive protein"),
        _urgent("Lumbar puncture (if stable)"),
    ]


def _foreign_body_aspiration(s, w):
    return [
        _intervention(
            "foreign_body_removal", "Foreign Body Removal (Back Blows/Heimlich/Direct Laryngoscopy)", IMMEDIATE,
            "Choking - Airway obstruction", risk=RiskLevel.NONE, benefit="life_saving",
            dosing=Dosing(
                calculation="Age-appropriate technique",
                route=(
                    "Infant: 5 back blows + 5 chest thrusts. Child/Adult: Heimlich maneuver. "
                    "Complete obstruction: Direct laryngoscopy + Magill forceps"
                ),
            ),
            monitoring=["Airway patency", "SpO2", "Respiratory effort"],
        ),
    ], []


def _tension_pneumothorax(s, w):
    return [
        _intervention(
            "needle_decompression", "Needle Decompression (2nd Intercostal Space, Midclavicular Line)", IMMEDIATE,
            "Tension pneumothorax - Life-saving decompression", benefit="life_saving",
            dosing=Dosing(
                calculation="14-16G needle (adult), 18-20G (child)",
                route="Insert at 2nd intercostal space, midclavicular line, perpendicular to chest wall",
            ),
            monitoring=["Breath sounds", "Blood pressure", "Heart rate", "SpO2"],
        ),
        _intervention(
            "chest_tube", "Chest Tube Insertion (5th Intercostal Space, Anterior Axillary Line)", URGENT,
            "Tension pneumothorax - Definitive management",
            dosing=Dosing(calculation="28-32F (adult), 16-24F (child)", route="5th intercostal space, anterior axillary line"),
        ),
    ], [
        _urgent("Chest X-ray (after tube insertion)"),
    ]


def _cardiac_tamponade(s, w):
    return [
        _intervention(
            "pericardiocentesis", "Pericardiocentesis (Subxiphoid Approach)", IMMEDIATE,
            "Cardiac tamponade - Life-saving drainage", risk=RiskLevel.MODERATE, benefit="life_saving",
            contraindications=["Aortic dissection (relative)"],
            dosing=Dosing(
                calculation="16-18G needle",
                route="Subxiphoid approach: 45° angle toward left shoulder, aspirate while advancing",
            ),
            monitoring=["Blood pressure", "Heart rate", "JVP", "Cardiac ultrasound"],
        ),
        _intervention(
            "tamponade_fluid", f"Normal Saline Bolus: {per_kg(10, 'mL', w)}", URGENT,
            "Cardiac tamponade - Temporizing measure to increase preload", benefit="moderate",
        ),
    ], [
        _stat("Cardiac ultrasound (FAST exam)"),
        _stat("ECG"),
    ]


def _acute_mi(s, w):
    return [
        _intervention(
            "mi_aspirin", "Aspirin 325 mg PO (chewed)", IMMEDIATE,
            "Acute MI - Antiplatelet therapy",
            contraindications=["Active bleeding", "Known aspirin allergy"],
            dosing=Dosing(calculation="325 mg", route="PO (chewed for faster absorption)"),
        ),
        _intervention(
            "mi_oxygen", "Oxygen Therapy (Target SpO2 >94%)", IMMEDIATE,
            "Acute MI - Maintain oxygenation", risk=RiskLevel.NONE, benefit="moderate",
        ),
        _intervention(
            "mi_thrombolysis", "Thrombolysis (tPA/TNK) or Primary PCI", CONFIRMATORY,
            "STEMI - Reperfusion therapy", risk=RiskLevel.CRITICAL, benefit="life_saving",
            contraindications=[
                "Recent surgery", "Active bleeding", "Hemorrhagic stroke history",
                "Time >12 hours from symptom onset",
            ],
            required_tests=[_stat("ECG showing STEMI", "ST elevation ≥1 mm in 2+ contiguous leads")],
            dosing=Dosing(calculation="TNK: weight-based (30-50 mg IV bolus)", route="IV bolus over 5 seconds"),
        ),
    ], [
        _stat("12-lead ECG"),
        _stat("Troponin"),
        _urgent("Basic metabolic panel"),
    ]


def _stroke(s, w):
    return [
        _intervention(
            "stroke_airway", "Airway Protection (Positioning, Suctioning, Consider Intubation if GCS <8)", IMMEDIATE,
            "Stroke - Prevent aspiration", risk=RiskLevel.NONE,
        ),
        _intervention(
            "stroke_tpa", f"Alteplase (tPA) IV: {per_kg(0.9, 'mg', w, max_dose=90, decimals=1)}", CONFIRMATORY,
            "Ischemic stroke <4.5 hours - Thrombolysis", risk=RiskLevel.CRITICAL, benefit="life_saving",
            contraindications=["Hemorrhagic stroke", "Recent surgery", "Active bleeding", "Time >4.5 hours"],
            required_tests=[
                _stat("CT head (non-contrast)", "No hemorrhage"),
                _stat("Time of symptom onset", "<4.5 hours"),
            ],
            dosing=Dosing(
                calculation="0.9 mg/kg (10% bolus, 90% infusion over 60 min)", max_dose=90, route="IV",
            ),
        ),
    ], [
        _stat("CT head (non-contrast) - URGENT"),
        _stat("Blood glucose"),
        _stat("Coagulation studies (PT, aPTT, INR)"),
    ]


def _bacterial_meningitis(s, w):
    return [
        _intervention(
            "meningitis_antibiotics",
            f"Ceftriaxone: {per_kg(50, 'mg', w, max_dose=2000)} IV + Vancomycin: {per_kg(15, 'mg', w)} IV",
            IMMEDIATE,
            "Bacterial meningitis - Empiric antibiotics", benefit="life_saving",
            dosing=Dosing(
                calculation="Ceftriaxone 50 mg/kg (max 2g) + Vancomycin 15 mg/kg", max_dose=2000, route="IV",
            ),
            monitoring=["Vital signs", "Neurological status", "Seizure activity"],
        ),
        _intervention(
            "meningitis_dexamethasone",
            f"Dexamethasone: {per_kg(0.15, 'mg', w, max_dose=10, decimals=2)} IV", IMMEDIATE,
            "Bacterial meningitis - Reduce neurological sequelae",
            dosing=Dosing(calculation="0.15 mg/kg", max_dose=10, route="IV (before or with first antibiotic dose)"),
        ),
        _intervention(
            "meningitis_lp", "Lumbar Puncture (CSF Analysis)", URGENT,
            "Bacterial meningitis - Confirm diagnosis", risk=RiskLevel.MODERATE,
            contraindications=["Signs of raised ICP", "Coagulopathy", "Skin infection at LP site"],
            dosing=Dosing(route="L3-L4 or L4-L5 interspace"),
        ),
    ], [
        _stat("Blood cultures (before antibiotics)"),
        _stat("CSF analysis (cell count, glucose, protein, Gram stain, culture)"),
        _stat("CT head (if signs of raised ICP before LP)"),
    ]


def _opioid_overdose(s, w):
    return [
        _intervention(
            "naloxone", f"Naloxone: {per_kg(0.1, 'mg', w, max_dose=2, decimals=2)} IV/IM/IN", IMMEDIATE,
            "Opioid overdose - Reverse respiratory depression", risk=RiskLevel.NONE, benefit="life_saving",
            dosing=Dosing(
                calculation="0.1 mg/kg (max 2 mg initial dose)", max_dose=2, min_dose=0.4,
                route="IV/IM/Intranasal (repeat every 2-3 minutes if no response)",
            ),
            monitoring=["Respiratory rate", "SpO2", "Level of consciousness", "Withdrawal symptoms"],
        ),
        _intervention(
            "opioid_airway", "Bag-Valve-Mask Ventilation (if apneic or RR <10)", IMMEDIATE,
            "Opioid overdose - Respiratory support", risk=RiskLevel.NONE, benefit="life_saving",
        ),
    ], [
        _urgent("Urine drug screen"),
        _stat("Blood glucose"),
        _urgent("Arterial blood gas (if severe)"),
    ]


def _severe_burns(s, w):
    volume = f"{w * 4:.0f} mL per % TBSA burned (4 mL/kg)" if w else "4 mL/kg per % TBSA burned"
    return [
        _intervention(
            "burn_fluid_resuscitation", f"Fluid Resuscitation: {volume} (Parkland formula)", IMMEDIATE,
            "Severe burns - Prevent hypovolemic shock", benefit="life_saving",
            dosing=Dosing(
                calculation="4 mL/kg × % TBSA burned (give 50% in first 8 hours, 50% in next 16 hours)",
                route="IV (Ringer's lactate preferred)",
            ),
            monitoring=["Urine output (target 0.5-1 mL/kg/hr)", "Blood pressure", "Heart rate"],
        ),
        _intervention(
            "burn_airway", "Early Intubation (if inhalation injury suspected)", IMMEDIATE,
            "Inhalation injury - Prevent airway obstruction", benefit="life_saving",
            dosing=Dosing(route="Endotracheal intubation (before airway edema develops)"),
        ),
        _intervention(
            "escharotomy", "Escharotomy (if circumferential burns causing compartment syndrome)", URGENT,
            "Circumferential burns - Restore circulation/ventilation", time_window="hours",
        ),
    ], [
        _stat("Carboxyhemoglobin level (if smoke inhalation)"),
        _urgent("Arterial blood gas"),
        _urgent("Basic metabolic panel"),
    ]


def _shock_hypovolemic(s, w):
    return [
        _intervention(
            "hypovolemic_fluid_bolus", f"Normal Saline Bolus: {per_kg(20, 'mL', w)}", IMMEDIATE,
            "Hypovolemic shock - Aggressive fluid resuscitation", benefit="life_saving",
            dosing=Dosing(calculation="20 mL/kg (repeat up to 60 mL/kg in first hour)", route="IV push over 5-10 minutes"),
            monitoring=["Blood pressure", "Heart rate", "Capillary refill", "Urine output", "Lung sounds"],
        ),
    ], []


def _shock_cardiogenic(s, w):
    return [
        _intervention(
            "cardiogenic_diuretic", f"Furosemide: {per_kg(1, 'mg', w, max_dose=40)} IV", IMMEDIATE,
            "Cardiogenic shock - Reduce preload", risk=RiskLevel.MODERATE,
            contraindications=["Hypovolemia"],
            dosing=Dosing(calculation="1 mg/kg", max_dose=40, route="IV"),
            monitoring=["Urine output", "Blood pressure", "Lung sounds", "Electrolytes"],
        ),
        _intervention(
            "cardiogenic_inotrope", "Dobutamine Infusion (5-20 mcg/kg/min)", URGENT,
            "Cardiogenic shock - Increase cardiac output", risk=RiskLevel.MODERATE,
            contraindications=["Hypovolemia", "Severe tachycardia"],
            dosing=Dosing(calculation="Start at 5 mcg/kg/min, titrate to effect", route="IV infusion (central line preferred)"),
        ),
    ], []


def _shock_obstructive(s, w):
    return [
        _intervention(
            "obstructive_identify", "Identify and Remove Obstruction (Tension Pneumothorax, Tamponade, PE)", IMMEDIATE,
            "Obstructive shock - Definitive treatment", risk=RiskLevel.NONE, benefit="life_saving",
            dosing=Dosing(route="Needle decompression, pericardiocentesis, or thrombolysis as indicated"),
        ),
        _intervention(
            "obstructive_fluid", f"Cautious Fluid Bolus: {per_kg(10, 'mL', w)}", URGENT,
            "Obstructive shock - Temporizing measure", benefit="moderate",
        ),
    ], []


def _shock_neurogenic(s, w):
    return [
        _intervention(
            "neurogenic_fluid", f"Cautious Fluid Bolus: {per_kg(10, 'mL', w)}", URGENT,
            "Neurogenic shock - Avoid fluid overload", benefit="moderate",
        ),
        _intervention(
            "neurogenic_vasopressor", "Norepinephrine Infusion (0.05-0.5 mcg/kg/min)", URGENT,
            "Neurogenic shock - Restore vascular tone",
            dosing=Dosing(
                calculation="Start at 0.05 mcg/kg/min, titrate to MAP >65 mmHg",
                route="IV infusion (central line preferred)",
            ),
        ),
    ], []


# Distributive shock reuses the sepsis and anaphylaxis plans.
PLAN_BUILDERS: Mapping[str, Callable[[SurveySnapshot, Optional[float]], PlanItems]] = MappingProxyType({
    "dka": _dka,
    "sepsis": _sepsis,
    "eclampsia": _eclampsia,
    "pulmonary_embolism": _pulmonary_embolism,
    "hyperkalemia": _hyperkalemia,
    "hypoglycemia": _hypoglycemia,
    "postpartum_hemorrhage": _postpartum_hemorrhage,
    "anaphylaxis": _anaphylaxis,
    "status_epilepticus": _status_epilepticus,
    "status_asthmaticus": _status_asthmaticus,
    "neonatal_sepsis": _neonatal_sepsis,
    "foreign_body_aspiration": _foreign_body_aspiration,
    "tension_pneumothorax": _tension_pneumothorax,
    "cardiac_tamponade": _cardiac_tamponade,
    "acute_mi": _acute_mi,
    "stroke": _stroke,
    "bacterial_meningitis": _bacterial_meningitis,
    "opioid_overdose": _opioid_overdose,
    "severe_burns": _severe_burns,
    "shock_hypovolemic": _shock_hypovolemic,
    "shock_cardiogenic": _shock_cardiogenic,
    "shock_obstructive": _shock_obstructive,
    "shock_distributive_septic": _sepsis,
    "shock_distributive_anaphylactic": _anaphylaxis,
    "shock_neurogenic": _shock_neurogenic,
})


def build_care_plan(condition_id: str, snapshot: SurveySnapshot) -> CarePlan:
    """
    Assemble the care plan for ``condition_id``.

    Unknown ids give a plan with no authored interventions. When the
    patient's age group has intervention modifications for the condition
    they are added as one extra immediate "Age-Specific Modifications"
    entry, listed under ``monitoring``.
    """
    weight = dosing_weight(snapshot)
    builder = PLAN_BUILDERS.get(condition_id)
    if builder is None:
        logger.debug("No authored care plan for %s", condition_id)
        interventions, tests = [], []
    else:
        interventions, tests = builder(snapshot, weight)

    age_group = snapshot_age_group(snapshot)
    modifications = get_age_specific_interventions(condition_id, age_group)
    if modifications:
        interventions = interventions + [
            _intervention(
                f"{condition_id}_age_specific", "Age-Specific Modifications", IMMEDIATE,
                f"{age_group.value} population",
                dosing=Dosing(calculation="See modifications below", route="Various"),
                monitoring=modifications,
            )
        ]

    return CarePlan(condition_id=condition_id, interventions=interventions, required_tests=tests)
