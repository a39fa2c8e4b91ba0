# -*- coding: utf-8 -*-
"""Plan name and narrative description."""

from __future__ import annotations

from typing import List, Sequence

from ..clients.models import ClientProfile
from ..plans.models import Meal, MealPlan, NutritionTarget
from .calculator import EnergyBreakdown, activity_description, classify_bmi
from .macros import MacroAllocation
from .rules import RuleOutcome


def _num(value: float) -> str:
    return f"{value:g}"


def build_plan_name(profile: ClientProfile, energy: EnergyBreakdown, rules: RuleOutcome) -> str:
    name = f"{energy.adjustment.goal.value} plan"
    if rules.qualifiers:
        name += f" ({', '.join(rules.qualifiers)})"
    if profile.name:
        name += f" - {profile.name}"
    return name


def build_description(
    profile: ClientProfile,
    energy: EnergyBreakdown,
    rules: RuleOutcome,
    allocation: MacroAllocation,
) -> str:
    paragraphs: List[str] = []

    paragraphs.append(
        f"Plan calculated for age {energy.age}, height {_num(energy.height_cm)} cm and "
        f"weight {_num(energy.weight_kg)} kg: {energy.target_calories} kcal per day "
        f"for {energy.adjustment.description}."
    )

    bmi = classify_bmi(energy.weight_kg, energy.height_cm)
    paragraphs.append(
        f"Body mass index (BMI): {bmi.bmi:.1f}, which falls in the \"{bmi.category}\" band. "
        f"{bmi.recommendation}"
    )

    activity = activity_description(profile.activity_level)
    paragraphs.append(
        f"With a {activity}, daily energy expenditure is {energy.tdee} kcal. "
        f"Based on your goal, daily intake is set to {energy.target_calories} kcal."
    )

    if rules.dietary_notes:
        paragraphs.append("Dietary restrictions: " + " ".join(rules.dietary_notes))
    if rules.medical_notes:
        paragraphs.append(
            "Recommendations for your health conditions:\n"
            + "\n".join(f"- {line}" for line in rules.medical_notes)
        )

    m = allocation.macros
    s = allocation.split
    paragraphs.append(
        f"This plan provides {m.protein_grams}g protein ({s.protein}%), "
        f"{m.carb_grams}g carbohydrate ({s.carb}%) and {m.fat_grams}g fat ({s.fat}%)."
    )
    return "\n\n".join(paragraphs)


def compose_plan(
    profile: ClientProfile,
    energy: EnergyBreakdown,
    rules: RuleOutcome,
    allocation: MacroAllocation,
    meals: Sequence[Meal],
) -> MealPlan:
    return MealPlan(
        name=build_plan_name(profile, energy, rules),
        description=build_description(profile, energy, rules, allocation),
        nutrition_target=NutritionTarget(
            daily_calories=energy.target_calories,
            macros=allocation.macros,
        ),
        meals=list(meals),
    )
