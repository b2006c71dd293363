from types import MappingProxyType
from typing import List, Mapping

from resus_gps.domain.models import SurveySnapshot


_RAW = {
    "Cardiogenic shock (8 y)": {
        "age_years": 8,
        "physiologic_state": "shock",
        "breathing": {"rate": 36, "effort": "increased", "spo2": 91, "auscultation": {"crackles": True}},
        "circulation": {
            "heart_rate": 160,
            "blood_pressure": {"systolic": 78, "diastolic": 45},
            "jvp": "elevated",
            "perfusion": {"capillary_refill": "delayed", "skin_temperature": "cool"},
            "heart_failure": {"hepatomegaly": True},
        },
        "disability": {"avpu": "alert", "blood_glucose": 6.1},
        "exposure": {"temperature": 37.2},
    },
    "Gastroenteritis with hypovolemic shock (2 y)": {
        "age_years": 2,
        "physiologic_state": "shock",
        "breathing": {"rate": 40, "spo2": 97},
        "circulation": {
            "heart_rate": 175,
            "jvp": "not_visible",
            "perfusion": {"capillary_refill": "very_delayed", "skin_temperature": "cold"},
            "history": {"diarrhea": True, "vomiting": True},
        },
        "disability": {"avpu": "voice", "blood_glucose": 4.8},
        "exposure": {"temperature": 37.9, "weight_kg": 12},
    },
    "Diabetic ketoacidosis (10 y)": {
        "age_years": 10,
        "breathing": {"rate": 34, "pattern": "deep_kussmaul", "spo2": 98},
        "circulation": {
            "heart_rate": 130,
            "perfusion": {"capillary_refill": "delayed", "skin_temperature": "warm"},
            "history": {"polyuria": True, "vomiting": True},
        },
        "disability": {"avpu": "alert", "blood_glucose": 28},
        "exposure": {"temperature": 37.0, "weight_kg": 30},
    },
    "Neonatal sepsis (2 weeks)": {
        "age_years": 0.04,
        "breathing": {"rate": 68, "effort": "increased", "spo2": 93},
        "circulation": {
            "heart_rate": 185,
            "perfusion": {"capillary_refill": "delayed", "skin_temperature": "cool"},
            "history": {"poor_feeding": True},
        },
        "disability": {"avpu": "voice", "blood_glucose": 2.9},
        "exposure": {"temperature": 35.6, "weight_kg": 3.4},
    },
    "Eclampsia (34 weeks)": {
        "age_years": 24,
        "pregnant_or_postpartum": True,
        "physiologic_state": "seizure",
        "circulation": {"heart_rate": 110, "blood_pressure": {"systolic": 172, "diastolic": 112}},
        "disability": {"avpu": "pain", "seizure": {"active": True, "duration_minutes": 3}},
        "exposure": {"weight_kg": 72, "pregnancy": {"gestational_age_weeks": 34}},
    },
    "Anaphylaxis after peanut exposure (6 y)": {
        "age_years": 6,
        "physiologic_state": "severe_respiratory_distress",
        "airway": {"status": "patent", "observations": {"stridor": True}},
        "breathing": {"rate": 44, "effort": "increased", "spo2": 89, "auscultation": {"wheezing": True}},
        "circulation": {
            "heart_rate": 158,
            "perfusion": {"capillary_refill": "delayed", "skin_temperature": "warm"},
        },
        "disability": {"avpu": "alert"},
        "exposure": {"skin_findings": {"flushing": True}},
    },
    "Opioid overdose (16 y)": {
        "age_years": 16,
        "physiologic_state": "poisoning",
        "breathing": {"rate": 6, "effort": "minimal", "spo2": 84},
        "circulation": {"heart_rate": 58, "blood_pressure": {"systolic": 96, "diastolic": 60}},
        "disability": {"avpu": "pain", "pupils": {"size_left": 1, "size_right": 1}},
        "exposure": {"weight_kg": 55, "toxin_exposure": {"substance": "oxycodone"}},
    },
}

SCENARIOS: Mapping[str, SurveySnapshot] = MappingProxyType(
    {name: SurveySnapshot.model_validate(data) for name, data in _RAW.items()}
)


def scenario_names() -> List[str]:
    return list(SCENARIOS.keys())


def get_scenario(name: str) -> SurveySnapshot:
    try:
        return SCENARIOS[name]
    except KeyError:
        raise KeyError(f"Unknown scenario: {name}") from None
