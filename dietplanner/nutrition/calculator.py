# -*- coding: utf-8 -*-
"""
Energy calculator

Age, BMR (Mifflin-St Jeor), TDEE, goal-based calorie target and BMI bands.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Optional

from ..clients.models import ActivityLevel, ClientProfile, Gender
from ..config import Settings, settings

KCAL_PER_KG_FAT = 7700
MIN_DAILY_CALORIES = 800


@dataclass(frozen=True)
class MissingDataPolicy:
    """Values substituted when a profile lacks weight, height or birth date."""
    default_weight_kg: float = 70.0
    default_height_cm: float = 170.0
    default_age: int = 30


POPULATION_AVERAGE = MissingDataPolicy()


@dataclass(frozen=True)
class ActivityInfo:
    factor: float
    description: str


ACTIVITY_TABLE = {
    ActivityLevel.sedentary: ActivityInfo(1.2, "sedentary lifestyle"),
    ActivityLevel.light: ActivityInfo(1.375, "lightly active lifestyle (exercise 1-3 days a week)"),
    ActivityLevel.moderate: ActivityInfo(1.55, "moderately active lifestyle (exercise 3-5 days a week)"),
    ActivityLevel.active: ActivityInfo(1.725, "very active lifestyle (exercise 6-7 days a week)"),
    ActivityLevel.very_active: ActivityInfo(
        1.9, "extra active lifestyle (physical job or training twice a day)"
    ),
}


def _activity_info(activity_level: ActivityLevel | str) -> ActivityInfo:
    try:
        level = ActivityLevel(activity_level)
    except ValueError:
        level = ActivityLevel.moderate
    return ACTIVITY_TABLE[level]


def activity_factor(activity_level: ActivityLevel | str) -> float:
    return _activity_info(activity_level).factor


def activity_description(activity_level: ActivityLevel | str) -> str:
    return _activity_info(activity_level).description


def calculate_age(
    birth_date: Optional[date],
    today: date,
    policy: MissingDataPolicy = POPULATION_AVERAGE,
) -> int:
    """
    Whole years between ``birth_date`` and ``today``.

    Args:
        birth_date: date of birth, or None
        today: current date, supplied by the caller's clock
        policy: provides the age used when the birth date is unknown
    """
    if birth_date is None or birth_date > today:
        return policy.default_age
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def calculate_bmr(
    gender: Gender | str,
    weight_kg: Optional[float],
    height_cm: Optional[float],
    age: int,
    policy: MissingDataPolicy = POPULATION_AVERAGE,
) -> float:
    """Mifflin-St Jeor BMR in kcal/day, unrounded."""
    weight = weight_kg if weight_kg is not None else policy.default_weight_kg
    height = height_cm if height_cm is not None else policy.default_height_cm
    s = 5 if Gender(gender) == Gender.male else -161
    return 10 * weight + 6.25 * height - 5 * age + s


def calculate_tdee(bmr: float, activity_level: ActivityLevel | str) -> int:
    return round(bmr * activity_factor(activity_level))


class Goal(str, Enum):
    weight_loss = "weight-loss"
    weight_gain = "weight-gain"
    maintenance = "maintenance"


def infer_goal(current_kg: Optional[float], target_kg: Optional[float]) -> Goal:
    if current_kg is None or target_kg is None:
        return Goal.maintenance
    if target_kg < current_kg:
        return Goal.weight_loss
    if target_kg > current_kg:
        return Goal.weight_gain
    return Goal.maintenance


@dataclass(frozen=True)
class GoalAdjustment:
    goal: Goal
    adjust_rate: float
    target_calories: int
    weekly_change_kg: float

    @property
    def description(self) -> str:
        if self.goal == Goal.weight_loss:
            return f"weight loss (about {self.weekly_change_kg:.1f} kg per week)"
        if self.goal == Goal.weight_gain:
            return f"weight gain (about {self.weekly_change_kg:.1f} kg per week)"
        return "weight maintenance"


def adjust_for_goal(
    tdee: int,
    current_kg: Optional[float],
    target_kg: Optional[float],
) -> GoalAdjustment:
    """
    Shift TDEE toward the weight goal.

    Losing: rate = min(0.85, 1 - 0.01 * |diff|). Gaining: rate =
    min(1.15, 1 + 0.01 * |diff|). Otherwise the target is TDEE itself.
    """
    goal = infer_goal(current_kg, target_kg)
    if goal == Goal.maintenance:
        return GoalAdjustment(goal=goal, adjust_rate=1.0, target_calories=tdee, weekly_change_kg=0.0)

    diff = abs(target_kg - current_kg)
    if goal == Goal.weight_loss:
        rate = min(0.85, 1 - diff * 0.01)
    else:
        rate = min(1.15, 1 + diff * 0.01)
    target = round(tdee * rate)
    weekly = round(abs(tdee - target) * 7 / KCAL_PER_KG_FAT, 1)
    return GoalAdjustment(goal=goal, adjust_rate=rate, target_calories=target, weekly_change_kg=weekly)


@dataclass(frozen=True)
class EnergyBreakdown:
    """Every number the plan is derived from, after defaults were applied."""
    age: int
    weight_kg: float
    height_cm: float
    bmr: float
    tdee: int
    adjustment: GoalAdjustment

    @property
    def target_calories(self) -> int:
        return self.adjustment.target_calories


def compute_energy(
    profile: ClientProfile,
    today: date,
    policy: MissingDataPolicy = POPULATION_AVERAGE,
) -> EnergyBreakdown:
    age = calculate_age(profile.birth_date, today, policy)
    bmr = calculate_bmr(profile.gender, profile.weight_kg, profile.height_cm, age, policy)
    tdee = calculate_tdee(bmr, profile.activity_level)
    adjustment = adjust_for_goal(tdee, profile.weight_kg, profile.target_weight_kg)
    return EnergyBreakdown(
        age=age,
        weight_kg=profile.weight_kg if profile.weight_kg is not None else policy.default_weight_kg,
        height_cm=profile.height_cm if profile.height_cm is not None else policy.default_height_cm,
        bmr=bmr,
        tdee=tdee,
        adjustment=adjustment,
    )


def apply_calorie_floor(energy: EnergyBreakdown, floor: int = MIN_DAILY_CALORIES) -> EnergyBreakdown:
    """
    Replace the goal target with ``floor``.

    Used only when the goal formula yields a target that cannot carry a plan:
    non-positive, or too small for whole-gram macros to stay within 1%.
    """
    adjustment = replace(
        energy.adjustment,
        target_calories=floor,
        weekly_change_kg=round(abs(energy.tdee - floor) * 7 / KCAL_PER_KG_FAT, 1),
    )
    return replace(energy, adjustment=adjustment)


@dataclass(frozen=True)
class BMIResult:
    bmi: float
    category: str
    recommendation: str


# (upper bound, category, recommendation); the last band is open-ended.
_BMI_BANDS = (
    (18.5, "underweight",
     "Increasing your daily calorie intake is recommended to reach a healthy weight."),
    (25.0, "normal",
     "Keep eating a balanced diet to maintain your healthy body weight."),
    (30.0, "overweight",
     "Reducing calorie intake and increasing physical activity is recommended to reach a healthy weight."),
    (35.0, "obese-I",
     "Gradual weight loss through a calorie deficit and regular activity is recommended to lower health risks."),
    (40.0, "obese-II",
     "Weight loss under the guidance of a health professional is recommended to reduce health risks."),
    (float("inf"), "obese-III",
     "Medically supervised weight management is strongly recommended; please consult your physician."),
)


def classify_bmi(weight_kg: float, height_cm: float) -> BMIResult:
    height_m = height_cm / 100
    bmi = weight_kg / (height_m ** 2)
    for upper, category, recommendation in _BMI_BANDS:
        if bmi < upper:
            return BMIResult(bmi=bmi, category=category, recommendation=recommendation)
    # Unreachable: the last band is unbounded.
    raise ValueError(f"BMI out of range: {bmi}")


def policy_from_settings(cfg: Settings | None = None) -> MissingDataPolicy:
    cfg = cfg or settings
    return MissingDataPolicy(
        default_weight_kg=cfg.default_weight_kg,
        default_height_cm=cfg.default_height_cm,
        default_age=cfg.default_age,
    )
