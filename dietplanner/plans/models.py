# -*- coding: utf-8 -*-
"""Meal plan models for engine output and API payloads."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


class FoodEntry(BaseModel):
    name: str = Field(..., min_length=1)
    amount: str = Field(..., description="Free-text quantity, e.g. '1 slice'")
    calories: int = Field(..., ge=0)


class Meal(BaseModel):
    name: str = Field(..., min_length=1)
    foods: List[FoodEntry] = Field(default_factory=list)


class Macros(BaseModel):
    protein_grams: int = Field(..., ge=0)
    carb_grams: int = Field(..., ge=0)
    fat_grams: int = Field(..., ge=0)


class NutritionTarget(BaseModel):
    daily_calories: int = Field(..., gt=0)
    macros: Macros


class MealPlan(BaseModel):
    name: str = Field(..., min_length=1)
    description: str
    nutrition_target: NutritionTarget
    meals: List[Meal] = Field(..., min_length=1)


PlanSourceName = Literal["external", "fallback"]


class PlanGenerateResponse(BaseModel):
    client_id: str
    source: PlanSourceName
    plan: MealPlan
