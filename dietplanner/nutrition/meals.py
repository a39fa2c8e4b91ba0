# -*- coding: utf-8 -*-
"""Five-meal reference template with rule overrides.

Calories on the template foods are fixed reference values; they are not
scaled to the client's daily calorie target.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence, Tuple

from ..plans.models import FoodEntry, Meal

CANONICAL_MEALS: Tuple[str, ...] = ("Breakfast", "Lunch", "Dinner", "Snack1", "Snack2")

_DEFAULT_FOODS: Dict[str, Tuple[Tuple[str, str, int], ...]] = {
    "Breakfast": (
        ("Oatmeal", "50g", 180),
        ("Milk (Semi-Skimmed)", "200ml", 90),
        ("Banana", "1 medium", 105),
        ("Almonds", "10g", 60),
    ),
    "Lunch": (
        ("Grilled Chicken Breast", "100g", 165),
        ("Bulgur Pilaf", "150g", 170),
        ("Green Salad (Olive Oil)", "1 serving", 80),
        ("Whole Grain Bread", "1 slice", 80),
    ),
    "Dinner": (
        ("Baked Salmon", "120g", 180),
        ("Steamed Mixed Vegetables", "200g", 70),
        ("Quinoa Salad", "100g", 120),
    ),
    "Snack1": (
        ("Yogurt (Low-Fat)", "200g", 90),
        ("Mixed Dried Fruit", "30g", 85),
    ),
    "Snack2": (
        ("Protein Bar", "1 piece", 200),
        ("Apple", "1 medium", 80),
    ),
}


def default_meal(name: str) -> Meal:
    return Meal(
        name=name,
        foods=[FoodEntry(name=n, amount=a, calories=c) for n, a, c in _DEFAULT_FOODS[name]],
    )


def assemble_meals(overrides: Mapping[str, Sequence[FoodEntry]] | None = None) -> List[Meal]:
    """
    Build the canonical meals, replacing whole food lists by exact meal name.

    Overrides whose name is not canonical are appended after the five
    canonical meals, in the order they were given.
    """
    overrides = overrides or {}
    meals: List[Meal] = []
    for name in CANONICAL_MEALS:
        if name in overrides:
            meals.append(Meal(name=name, foods=[f.model_copy() for f in overrides[name]]))
        else:
            meals.append(default_meal(name))
    for name, foods in overrides.items():
        if name not in CANONICAL_MEALS:
            meals.append(Meal(name=name, foods=[f.model_copy() for f in foods]))
    return meals
