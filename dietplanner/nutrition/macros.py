# -*- coding: utf-8 -*-
"""Macro allocation: percentage split to grams."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..clients.models import ActivityLevel
from ..plans.models import Macros

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARB = 4
KCAL_PER_GRAM_FAT = 9
MAX_MACRO_DEVIATION = 0.01


@dataclass(frozen=True)
class MacroSplit:
    """Whole percentage points of daily calories; always sums to 100."""
    protein: int
    fat: int
    carb: int

    def __post_init__(self) -> None:
        if min(self.protein, self.fat, self.carb) < 0:
            raise ValueError(f"negative macro share: {self}")
        if self.protein + self.fat + self.carb != 100:
            raise ValueError(f"macro split must sum to 100, got {self}")

    @property
    def protein_pct(self) -> float:
        return self.protein / 100

    @property
    def fat_pct(self) -> float:
        return self.fat / 100

    @property
    def carb_pct(self) -> float:
        return self.carb / 100


BASELINE_SPLIT = MacroSplit(protein=30, fat=25, carb=45)
HIGH_ACTIVITY_SPLIT = MacroSplit(protein=35, fat=20, carb=45)
_HIGH_ACTIVITY = {ActivityLevel.active, ActivityLevel.very_active}


@dataclass(frozen=True)
class MacroAllocation:
    target_calories: int
    split: MacroSplit
    macros: Macros

    @property
    def calories_from_grams(self) -> int:
        return (
            self.macros.protein_grams * KCAL_PER_GRAM_PROTEIN
            + self.macros.carb_grams * KCAL_PER_GRAM_CARB
            + self.macros.fat_grams * KCAL_PER_GRAM_FAT
        )

    @property
    def deviation(self) -> float:
        """Relative gap between calories from whole grams and the target."""
        if self.target_calories <= 0:
            return float("inf")
        return abs(self.calories_from_grams - self.target_calories) / self.target_calories


def select_split(activity_level: ActivityLevel, rule_split: Optional[MacroSplit] = None) -> MacroSplit:
    """Baseline, then activity, then medical rules; each later stage wins."""
    split = BASELINE_SPLIT
    if activity_level in _HIGH_ACTIVITY:
        split = HIGH_ACTIVITY_SPLIT
    if rule_split is not None:
        split = rule_split
    return split


def allocate_macros(target_calories: int, split: MacroSplit) -> MacroAllocation:
    macros = Macros(
        protein_grams=round(target_calories * split.protein / 100 / KCAL_PER_GRAM_PROTEIN),
        carb_grams=round(target_calories * split.carb / 100 / KCAL_PER_GRAM_CARB),
        fat_grams=round(target_calories * split.fat / 100 / KCAL_PER_GRAM_FAT),
    )
    return MacroAllocation(target_calories=target_calories, split=split, macros=macros)
