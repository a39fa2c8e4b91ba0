# -*- coding: utf-8 -*-
"""
Nutrition planning engine

Energy targets, condition rules, macro allocation, meal templates and the
plan composer, chained by ``build_plan``.
"""

from .calculator import (
    POPULATION_AVERAGE,
    MissingDataPolicy,
    adjust_for_goal,
    calculate_age,
    calculate_bmr,
    calculate_tdee,
    classify_bmi,
    compute_energy,
)
from .macros import MacroSplit, allocate_macros, select_split
from .meals import CANONICAL_MEALS, assemble_meals
from .pipeline import build_plan
from .rules import CONDITION_RULES, ConditionRule, evaluate_rules

__all__ = [
    # Calculator
    "POPULATION_AVERAGE",
    "MissingDataPolicy",
    "adjust_for_goal",
    "calculate_age",
    "calculate_bmr",
    "calculate_tdee",
    "classify_bmi",
    "compute_energy",
    # Macros
    "MacroSplit",
    "allocate_macros",
    "select_split",
    # Meals
    "CANONICAL_MEALS",
    "assemble_meals",
    # Rules
    "CONDITION_RULES",
    "ConditionRule",
    "evaluate_rules",
    # Pipeline
    "build_plan",
]
