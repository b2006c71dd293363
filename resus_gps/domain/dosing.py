"""Weight estimation, weight-based dose text and age-appropriate vital-sign ranges."""
from typing import NamedTuple, Optional

from .models import SurveySnapshot


class VitalRange(NamedTuple):
    min: float
    max: float


# (upper age bound in years, range); the last row has no upper bound
_RESPIRATORY_RATE = (
    (0.08, VitalRange(30, 60)),
    (1, VitalRange(24, 40)),
    (3, VitalRange(22, 30)),
    (6, VitalRange(20, 28)),
    (12, VitalRange(18, 25)),
    (18, VitalRange(12, 20)),
)
_ADULT_RESPIRATORY_RATE = VitalRange(12, 20)

_HEART_RATE = (
    (0.08, VitalRange(120, 160)),
    (1, VitalRange(100, 150)),
    (3, VitalRange(90, 140)),
    (6, VitalRange(80, 120)),
    (12, VitalRange(70, 110)),
    (18, VitalRange(60, 100)),
)
_ADULT_HEART_RATE = VitalRange(60, 100)


def _lookup(table, default: VitalRange, age_years: float) -> VitalRange:
    for upper, vital_range in table:
        if age_years < upper:
            return vital_range
    return default


def age_appropriate_rr(age_years: float) -> VitalRange:
    return _lookup(_RESPIRATORY_RATE, _ADULT_RESPIRATORY_RATE, age_years)


def age_appropriate_hr(age_years: float) -> VitalRange:
    return _lookup(_HEART_RATE, _ADULT_HEART_RATE, age_years)


def estimate_weight_kg(age_years: float) -> Optional[float]:
    """
    Estimate weight from age using the APLS formulas.

    Infants gain ~0.7 kg/month to six months and ~0.5 kg/month after that
    from a 3.5 kg birth weight; 1-10 years is (age + 4) x 2; 10-14 years
    is age x 3. Older patients return None: dose them on measured weight.
    """
    if age_years < 1:
        months = age_years * 12
        if months <= 6:
            weight = 3.5 + months * 0.7
        else:
            weight = 3.5 + 6 * 0.7 + (months - 6) * 0.5
    elif age_years <= 10:
        weight = (age_years + 4) * 2
    elif age_years <= 14:
        weight = age_years * 3
    else:
        return None
    return round(weight, 1)


def dosing_weight(snapshot: SurveySnapshot) -> Optional[float]:
    """Measured weight when recorded, otherwise the age-based estimate."""
    if snapshot.exposure.weight_kg:
        return snapshot.exposure.weight_kg
    return estimate_weight_kg(snapshot.age_years)


def _fmt(value: float, decimals: int) -> str:
    return f"{value:.{decimals}f}"


def per_kg(
    rate: float,
    unit: str,
    weight: Optional[float],
    max_dose: Optional[float] = None,
    decimals: int = 0,
) -> str:
    """
    Format a weight-based dose.

    ``per_kg(20, "mL", 18)`` -> ``"360 mL (20 mL/kg)"`` and
    ``per_kg(0.1, "units/hr", 18, decimals=2)`` ->
    ``"1.80 units/hr (0.1 units/kg/hr)"``. Without a weight
    only the per-kg rate is returned so the text never invents a number.
    """
    base, _, per = unit.partition("/")
    rate_text = f"{rate:g} {base}/kg/{per}" if per else f"{rate:g} {unit}/kg"
    if max_dose is not None:
        rate_text += f", max {max_dose:g} {unit}"
    if not weight:
        return rate_text
    dose = rate * weight
    if max_dose is not None:
        dose = min(dose, max_dose)
    return f"{_fmt(dose, decimals)} {unit} ({rate_text})"
