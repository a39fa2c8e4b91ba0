# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import date

from dietplanner.clients.models import ClientProfile
from dietplanner.nutrition.meals import CANONICAL_MEALS, assemble_meals, default_meal
from dietplanner.nutrition.pipeline import build_plan
from dietplanner.plans.models import FoodEntry


class TestMealAssembly(unittest.TestCase):
    def test_defaults_in_canonical_order(self) -> None:
        meals = assemble_meals()
        self.assertEqual([m.name for m in meals], list(CANONICAL_MEALS))
        self.assertEqual([f.name for f in meals[0].foods][0], "Oatmeal")
        self.assertEqual(sum(f.calories for f in meals[4].foods), 280)

    def test_override_replaces_whole_list(self) -> None:
        override = {"Dinner": [FoodEntry(name="Tofu Stir-Fry", amount="250g", calories=320)]}
        meals = {m.name: m for m in assemble_meals(override)}
        self.assertEqual([f.name for f in meals["Dinner"].foods], ["Tofu Stir-Fry"])
        self.assertEqual(meals["Lunch"], default_meal("Lunch"))

    def test_non_canonical_name_is_appended(self) -> None:
        override = {"Snack": [FoodEntry(name="Flaxseed", amount="1 tablespoon", calories=55)]}
        names = [m.name for m in assemble_meals(override)]
        self.assertEqual(names, ["Breakfast", "Lunch", "Dinner", "Snack1", "Snack2", "Snack"])

    def test_overrides_are_copied(self) -> None:
        entry = FoodEntry(name="Eggs", amount="2 pieces", calories=160)
        meals = assemble_meals({"Breakfast": [entry]})
        meals[0].foods[0].calories = 0
        self.assertEqual(entry.calories, 160)

    def test_template_calories_ignore_daily_target(self) -> None:
        small = ClientProfile(client_id="a", weight_kg=50, height_cm=155)
        large = ClientProfile(client_id="b", weight_kg=120, height_cm=195)
        today = date(2024, 1, 1)
        small_plan = build_plan(small, today)
        large_plan = build_plan(large, today)
        self.assertNotEqual(
            small_plan.nutrition_target.daily_calories,
            large_plan.nutrition_target.daily_calories,
        )
        self.assertEqual(small_plan.meals, large_plan.meals)


if __name__ == "__main__":
    unittest.main()
