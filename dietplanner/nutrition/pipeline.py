# -*- coding: utf-8 -*-
"""Rule-based plan generation: the path that always produces a plan."""

from __future__ import annotations

import logging
from datetime import date

from ..clients.models import ClientProfile
from ..plans.models import MealPlan
from .calculator import POPULATION_AVERAGE, MissingDataPolicy, apply_calorie_floor, compute_energy
from .composer import compose_plan
from .macros import MAX_MACRO_DEVIATION, allocate_macros, select_split
from .meals import assemble_meals
from .rules import CONDITION_RULES, evaluate_rules

logger = logging.getLogger(__name__)


def build_plan(
    profile: ClientProfile,
    today: date,
    policy: MissingDataPolicy = POPULATION_AVERAGE,
    rules=CONDITION_RULES,
) -> MealPlan:
    energy = compute_energy(profile, today, policy)
    outcome = evaluate_rules(profile, rules)
    split = select_split(profile.activity_level, outcome.macro_split)
    allocation = allocate_macros(energy.target_calories, split) if energy.target_calories > 0 else None
    if allocation is None or allocation.deviation > MAX_MACRO_DEVIATION:
        # Goal formula left a non-positive or tiny target (|target - current| near 100 kg).
        logger.warning(
            "target %s kcal for client %s cannot carry a plan, using floor",
            energy.target_calories,
            profile.client_id,
        )
        energy = apply_calorie_floor(energy)
        allocation = allocate_macros(energy.target_calories, split)
    meals = assemble_meals(outcome.meal_overrides)
    logger.debug(
        "client %s: tdee=%s target=%s rules=%s split=%s",
        profile.client_id,
        energy.tdee,
        energy.target_calories,
        outcome.keys,
        split,
    )
    return compose_plan(profile, energy, outcome, allocation, meals)
