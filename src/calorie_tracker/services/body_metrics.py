"""Body mass index and recommended intake calculations.

Uses the Mifflin-St Jeor equation for basal metabolic rate:

    Male:   BMR = 10 * weight(kg) + 6.25 * height(cm) - 5 * age(y) + 5
    Female: BMR = 10 * weight(kg) + 6.25 * height(cm) - 5 * age(y) - 161

Recommended intake assumes a sedentary lifestyle (BMR * 1.2).
"""

from calorie_tracker.domain.body import (
    BmiCategory,
    BodyMetrics,
    WeightDirection,
    WeightGoalDelta,
)
from calorie_tracker.domain.models import Gender, UserProfile
from calorie_tracker.services.aggregation import round_half_up

SEDENTARY_ACTIVITY_FACTOR = 1.2

_UNDERWEIGHT_BELOW = 18.5
_NORMAL_BELOW = 25.0
_OVERWEIGHT_BELOW = 30.0


def compute_bmi(height_cm: float | None, weight_kg: float | None) -> float | None:
    """Return BMI rounded to one decimal, or None without usable inputs."""
    if height_cm is None or weight_kg is None or height_cm <= 0 or weight_kg <= 0:
        return None
    height_m = height_cm / 100
    return round_half_up(weight_kg / (height_m * height_m), 1)


def bmi_category(bmi: float) -> BmiCategory:
    """Map a BMI value to its band."""
    if bmi < _UNDERWEIGHT_BELOW:
        return BmiCategory.UNDERWEIGHT
    if bmi < _NORMAL_BELOW:
        return BmiCategory.NORMAL
    if bmi < _OVERWEIGHT_BELOW:
        return BmiCategory.OVERWEIGHT
    return BmiCategory.OBESE


def compute_recommended_calories(
    weight_kg: float | None,
    height_cm: float | None,
    age: int | None,
    gender: Gender | str | None,
) -> int | None:
    """Return the sedentary daily energy expenditure in kcal."""
    if not weight_kg or not height_cm or not age or not gender:
        return None
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.MALE:
        bmr += 5
    else:
        bmr -= 161
    return int(round_half_up(bmr * SEDENTARY_ACTIVITY_FACTOR))


def compute_weight_goal(
    weight_kg: float | None, target_weight_kg: float | None
) -> WeightGoalDelta | None:
    """Return how much weight is left to lose or gain, if a target is set."""
    if not weight_kg or not target_weight_kg:
        return None
    if weight_kg > target_weight_kg:
        direction = WeightDirection.LOSE
        amount = weight_kg - target_weight_kg
    else:
        direction = WeightDirection.GAIN
        amount = target_weight_kg - weight_kg
    return WeightGoalDelta(
        current_kg=weight_kg,
        target_kg=target_weight_kg,
        direction=direction,
        amount_kg=round_half_up(amount, 1),
    )


def compute_body_metrics(profile: UserProfile) -> BodyMetrics:
    """Derive every body metric the profile has inputs for."""
    bmi = compute_bmi(profile.height_cm, profile.weight_kg)
    return BodyMetrics(
        bmi=bmi,
        bmi_category=bmi_category(bmi) if bmi is not None else None,
        recommended_calories=compute_recommended_calories(
            profile.weight_kg, profile.height_cm, profile.age, profile.gender
        ),
        weight_goal=compute_weight_goal(profile.weight_kg, profile.target_weight_kg),
    )
