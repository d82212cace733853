"""Metabolic formulas for daily calorie recommendations.

All functions are pure. Incomplete input yields ``None`` instead of an
exception so callers can report "no recommendation" without guessing.
"""

from fitness_tracker.domain.models import ActivityLevel, Gender, UserRecord
from fitness_tracker.domain.rounding import round_half_up

MALE_OFFSET = 5
FEMALE_OFFSET = -161
DEFAULT_ACTIVITY_MULTIPLIER = 1.2

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    ActivityLevel.LOW.value: 1.2,
    ActivityLevel.MODERATE.value: 1.55,
    ActivityLevel.HIGH.value: 1.725,
}


def bmr(
    weight_kg: float, height_cm: float, age_years: float, gender: str | None
) -> float | None:
    """Return the Mifflin-St Jeor basal metabolic rate in kcal.

    Genders other than male and female have no formula and return None.
    """
    if gender == Gender.MALE:
        offset = MALE_OFFSET
    elif gender == Gender.FEMALE:
        offset = FEMALE_OFFSET
    else:
        return None
    return 10 * weight_kg + 6.25 * height_cm - 5 * age_years + offset


def tdee(bmr_kcal: float, activity_level: str | None) -> int:
    """Scale a BMR by the activity multiplier and round to whole kcal."""
    multiplier = ACTIVITY_MULTIPLIERS.get(
        activity_level or "", DEFAULT_ACTIVITY_MULTIPLIER
    )
    return int(round_half_up(bmr_kcal * multiplier))


def recommended_calories(user: UserRecord) -> int | None:
    """Return the recommended daily calories for a complete profile."""
    if (
        user.weight_kg is None
        or user.height_cm is None
        or user.age is None
        or user.gender is None
    ):
        return None
    basal = bmr(user.weight_kg, user.height_cm, user.age, user.gender)
    if basal is None:
        return None
    return tdee(basal, user.activity_level)
