# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest
from datetime import date

from dietplanner.clients.models import ActivityLevel, ClientProfile, Gender
from dietplanner.nutrition.calculator import MIN_DAILY_CALORIES, MissingDataPolicy
from dietplanner.nutrition.pipeline import build_plan
from dietplanner.nutrition.rules import ConditionRule, RuleCategory, mentions
from dietplanner.plans.models import FoodEntry

TODAY = date(2024, 6, 1)


def _plain_types(value) -> bool:
    if isinstance(value, dict):
        return all(isinstance(k, str) and _plain_types(v) for k, v in value.items())
    if isinstance(value, list):
        return all(_plain_types(v) for v in value)
    return isinstance(value, (str, int, float))


class TestBuildPlan(unittest.TestCase):
    def setUp(self) -> None:
        self.profile = ClientProfile(
            client_id="c1",
            name="Ayşe",
            gender=Gender.female,
            birth_date=date(1990, 5, 1),
            height_cm=165,
            weight_kg=80,
            target_weight_kg=70,
            activity_level=ActivityLevel.light,
            medical_conditions=["diabetes"],
            dietary_restrictions=["gluten intolerance"],
        )

    def test_numbers(self) -> None:
        plan = build_plan(self.profile, TODAY)
        # age 34: 800 + 1031.25 - 170 - 161 = 1500.25; * 1.375 -> 2063; * 0.85 -> 1754
        self.assertEqual(plan.nutrition_target.daily_calories, 1754)
        macros = plan.nutrition_target.macros
        self.assertEqual(macros.protein_grams, round(1754 * 0.35 / 4))
        self.assertEqual(macros.fat_grams, round(1754 * 0.30 / 9))
        self.assertEqual(macros.carb_grams, round(1754 * 0.35 / 4))

    def test_name(self) -> None:
        plan = build_plan(self.profile, TODAY)
        self.assertEqual(plan.name, "weight-loss plan (diabetes-friendly, gluten-free) - Ayşe")

    def test_name_without_rules_or_weights(self) -> None:
        plan = build_plan(ClientProfile(client_id="c2"), TODAY)
        self.assertEqual(plan.name, "maintenance plan")

    def test_weight_gain_name(self) -> None:
        plan = build_plan(ClientProfile(client_id="c3", weight_kg=55, target_weight_kg=60), TODAY)
        self.assertTrue(plan.name.startswith("weight-gain plan"))

    def test_description_parts(self) -> None:
        description = build_plan(self.profile, TODAY).description
        self.assertIn("age 34, height 165 cm and weight 80 kg: 1754 kcal per day for weight loss", description)
        self.assertIn("\"overweight\" band", description)
        self.assertIn("daily energy expenditure is 2063 kcal", description)
        self.assertIn("Dietary restrictions: All suggestions use gluten-free alternatives", description)
        self.assertIn("- Low glycemic index foods are preferred.", description)
        self.assertIn("(35%)", description)
        self.assertTrue(description.rstrip().endswith("fat (30%)."))

    def test_bmi_normal_recommendation(self) -> None:
        profile = ClientProfile(client_id="c4", weight_kg=50, height_cm=160)
        description = build_plan(profile, TODAY).description
        self.assertIn("BMI): 19.5", description)
        self.assertIn("\"normal\" band", description)
        self.assertIn("Keep eating a balanced diet to maintain your healthy body weight.", description)

    def test_missing_data_reports_defaults(self) -> None:
        description = build_plan(ClientProfile(client_id="c5"), TODAY).description
        self.assertIn("age 30, height 170 cm and weight 70 kg", description)

    def test_custom_missing_data_policy(self) -> None:
        policy = MissingDataPolicy(default_weight_kg=60, default_height_cm=160, default_age=50)
        plan = build_plan(ClientProfile(client_id="c6"), TODAY, policy)
        self.assertIn("age 50, height 160 cm and weight 60 kg", plan.description)
        # female: 600 + 1000 - 250 - 161 = 1189; * 1.55
        self.assertEqual(plan.nutrition_target.daily_calories, round(1189 * 1.55))

    def test_breakfast_override_applied(self) -> None:
        plan = build_plan(self.profile, TODAY)
        breakfast = next(m for m in plan.meals if m.name == "Breakfast")
        self.assertEqual(breakfast.foods[0].name, "Gluten-Free Bread")
        self.assertEqual(len(plan.meals), 5)

    def test_sub_800_target_kept(self) -> None:
        profile = ClientProfile(
            client_id="c7",
            gender=Gender.female,
            birth_date=date(1944, 1, 1),
            height_cm=150,
            weight_kg=90,
            target_weight_kg=40,
            activity_level=ActivityLevel.sedentary,
        )
        target = build_plan(profile, TODAY).nutrition_target
        self.assertEqual(target.daily_calories, 766)
        # 57g protein, 86g carbs, 21g fat -> 761 kcal, within 1% of 766
        self.assertEqual((target.macros.protein_grams, target.macros.carb_grams, target.macros.fat_grams), (57, 86, 21))

    def test_non_positive_target_uses_floor(self) -> None:
        profile = ClientProfile(client_id="c8", weight_kg=150, target_weight_kg=40)
        with self.assertLogs("dietplanner.nutrition.pipeline", level="WARNING"):
            plan = build_plan(profile, TODAY)
        self.assertEqual(plan.nutrition_target.daily_calories, MIN_DAILY_CALORIES)
        self.assertIn("800 kcal per day", plan.description)

    def test_target_too_small_for_whole_grams_uses_floor(self) -> None:
        # tdee 3335, rate 0.005 -> 17 kcal; whole grams give 12 kcal
        profile = ClientProfile(client_id="c9", weight_kg=140, target_weight_kg=40.5)
        plan = build_plan(profile, TODAY)
        self.assertEqual(plan.nutrition_target.daily_calories, MIN_DAILY_CALORIES)

    def test_conflicting_rules_last_breakfast_in_plan(self) -> None:
        porridge = (FoodEntry(name="Porridge", amount="1 bowl", calories=250),)
        rice_cakes = (FoodEntry(name="Rice Cakes", amount="3 pieces", calories=105),)
        rules = (
            ConditionRule(
                key="first",
                category=RuleCategory.dietary,
                predicate=mentions(RuleCategory.dietary, "alpha"),
                narrative=("First.",),
                qualifier="first",
                meal_overrides={"Breakfast": porridge},
            ),
            ConditionRule(
                key="second",
                category=RuleCategory.dietary,
                predicate=mentions(RuleCategory.dietary, "beta"),
                narrative=("Second.",),
                qualifier="second",
                meal_overrides={"Breakfast": rice_cakes},
            ),
        )
        profile = ClientProfile(client_id="c10", dietary_restrictions=["alpha", "beta"])
        plan = build_plan(profile, TODAY, rules=rules)
        breakfast = next(m for m in plan.meals if m.name == "Breakfast")
        self.assertEqual([f.name for f in breakfast.foods], ["Rice Cakes"])
        self.assertEqual(plan.name, "maintenance plan (first, second)")

    def test_deterministic(self) -> None:
        first = build_plan(self.profile, TODAY).model_dump_json()
        second = build_plan(self.profile, TODAY).model_dump_json()
        self.assertEqual(first, second)

    def test_output_is_plain_data(self) -> None:
        dumped = build_plan(self.profile, TODAY).model_dump()
        self.assertTrue(_plain_types(dumped))
        self.assertEqual(json.loads(json.dumps(dumped)), dumped)
        self.assertEqual(set(dumped), {"name", "description", "nutrition_target", "meals"})


if __name__ == "__main__":
    unittest.main()
