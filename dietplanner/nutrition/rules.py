# -*- coding: utf-8 -*-
"""
Condition rules

Medical history and dietary restrictions are free text, so each rule is a
keyword predicate over the profile's tags plus the effect it has on the plan.
Rules are evaluated in table order: narrative fragments accumulate, and for
macro splits and meal overrides the later matching rule wins.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..clients.models import ClientProfile
from ..plans.models import FoodEntry
from .macros import MacroSplit


class RuleCategory(str, Enum):
    medical = "medical"
    dietary = "dietary"


Predicate = Callable[[ClientProfile], bool]


@dataclass(frozen=True)
class ConditionRule:
    key: str
    category: RuleCategory
    predicate: Predicate
    narrative: Tuple[str, ...]
    qualifier: str
    macro_split: Optional[MacroSplit] = None
    meal_overrides: Mapping[str, Tuple[FoodEntry, ...]] = field(default_factory=dict)

    def matches(self, profile: ClientProfile) -> bool:
        return self.predicate(profile)


def _tags(profile: ClientProfile, category: RuleCategory) -> List[str]:
    if category == RuleCategory.medical:
        return [t.lower() for t in profile.medical_conditions]
    return [t.lower() for t in profile.dietary_restrictions]


def mentions(category: RuleCategory, *keywords: str, unless: Sequence[str] = ()) -> Predicate:
    """Case-insensitive substring match of any keyword against one tag set."""
    words = tuple(k.lower() for k in keywords)
    blockers = tuple(k.lower() for k in unless)

    def predicate(profile: ClientProfile) -> bool:
        tags = _tags(profile, category)
        if any(b in t for t in tags for b in blockers):
            return False
        return any(w in t for t in tags for w in words)

    return predicate


def _foods(*rows: Tuple[str, str, int]) -> Tuple[FoodEntry, ...]:
    return tuple(FoodEntry(name=n, amount=a, calories=c) for n, a, c in rows)


CONDITION_RULES: Tuple[ConditionRule, ...] = (
    ConditionRule(
        key="diabetes",
        category=RuleCategory.medical,
        predicate=mentions(RuleCategory.medical, "diabet", "sugar", "diyabet", "şeker"),
        narrative=(
            "Low glycemic index foods are preferred.",
            "Complex carbohydrates are recommended instead of simple sugars.",
            "Meals are spread evenly through the day to keep blood sugar stable.",
        ),
        qualifier="diabetes-friendly",
        macro_split=MacroSplit(protein=35, fat=30, carb=35),
    ),
    ConditionRule(
        key="hypertension",
        category=RuleCategory.medical,
        predicate=mentions(
            RuleCategory.medical, "hypertension", "blood pressure", "hipertansiyon", "tansiyon"
        ),
        narrative=(
            "Low-sodium foods are preferred.",
            "Potassium-rich foods are recommended.",
            "DASH diet principles are taken into account.",
        ),
        qualifier="low-sodium",
    ),
    ConditionRule(
        key="cholesterol",
        category=RuleCategory.medical,
        predicate=mentions(RuleCategory.medical, "cholesterol", "kolesterol"),
        narrative=(
            "Saturated fats are limited.",
            "Omega-3 sources that support heart health are included.",
            "Foods rich in soluble fiber are recommended.",
        ),
        qualifier="cholesterol-controlled",
        macro_split=MacroSplit(protein=35, fat=20, carb=45),
    ),
    ConditionRule(
        key="vegan",
        category=RuleCategory.dietary,
        predicate=mentions(RuleCategory.dietary, "vegan"),
        narrative=(
            "Foods without animal products are chosen to fit a vegan diet.",
            "Legumes and plant proteins are recommended to cover protein needs.",
        ),
        qualifier="vegan",
        meal_overrides={
            "Breakfast": _foods(
                ("Oatmeal", "50g", 180),
                ("Almond Milk", "200ml", 60),
                ("Banana", "1 medium", 105),
                ("Chia Seeds", "1 tablespoon", 60),
                ("Mixed Nuts", "20g", 110),
            ),
        },
    ),
    ConditionRule(
        key="vegetarian",
        category=RuleCategory.dietary,
        # A vegan tag already covers everything a vegetarian one would add.
        predicate=mentions(RuleCategory.dietary, "vegetarian", "vejetaryen", unless=("vegan",)),
        narrative=(
            "Meat-free alternatives are chosen to fit a vegetarian diet.",
            "Eggs, dairy and legumes are recommended for adequate protein intake.",
        ),
        qualifier="vegetarian",
        meal_overrides={
            "Lunch": _foods(
                ("Lentil Patties", "150g", 200),
                ("Bulgur Pilaf", "100g", 120),
                ("Yogurt", "150g", 85),
                ("Seasonal Salad", "1 serving", 70),
            ),
        },
    ),
    ConditionRule(
        key="gluten",
        category=RuleCategory.dietary,
        predicate=mentions(RuleCategory.dietary, "gluten", "celiac", "coeliac", "çölyak"),
        narrative=(
            "All suggestions use gluten-free alternatives for celiac disease or gluten sensitivity.",
            "Rice, corn and quinoa replace grains containing wheat, barley or rye.",
        ),
        qualifier="gluten-free",
        meal_overrides={
            "Breakfast": _foods(
                ("Gluten-Free Bread", "2 slices", 140),
                ("Eggs", "2 pieces", 160),
                ("White Cheese", "30g", 75),
                ("Olives", "5-6 pieces", 30),
            ),
        },
    ),
    ConditionRule(
        key="lactose",
        category=RuleCategory.dietary,
        predicate=mentions(RuleCategory.dietary, "lactose", "laktoz"),
        narrative=(
            "Dairy products are replaced with lactose-free alternatives.",
            "Lactose-free dairy and plant calcium sources are recommended to cover calcium needs.",
        ),
        qualifier="lactose-free",
        meal_overrides={
            "Snack": _foods(
                ("Lactose-Free Yogurt", "150g", 80),
                ("Fruit (Apple/Pear)", "1 piece", 80),
                ("Flaxseed", "1 tablespoon", 55),
            ),
        },
    ),
)


@dataclass
class RuleOutcome:
    matched: List[ConditionRule] = field(default_factory=list)
    macro_split: Optional[MacroSplit] = None
    meal_overrides: Dict[str, Tuple[FoodEntry, ...]] = field(default_factory=dict)

    def _by_category(self, category: RuleCategory) -> List[ConditionRule]:
        return [r for r in self.matched if r.category == category]

    @property
    def keys(self) -> List[str]:
        return [r.key for r in self.matched]

    @property
    def qualifiers(self) -> List[str]:
        return [r.qualifier for r in self.matched]

    @property
    def narrative(self) -> List[str]:
        return [line for r in self.matched for line in r.narrative]

    @property
    def medical_notes(self) -> List[str]:
        return [line for r in self._by_category(RuleCategory.medical) for line in r.narrative]

    @property
    def dietary_notes(self) -> List[str]:
        return [line for r in self._by_category(RuleCategory.dietary) for line in r.narrative]


def evaluate_rules(
    profile: ClientProfile,
    rules: Iterable[ConditionRule] = CONDITION_RULES,
) -> RuleOutcome:
    outcome = RuleOutcome()
    for rule in rules:
        if not rule.matches(profile):
            continue
        outcome.matched.append(rule)
        if rule.macro_split is not None:
            outcome.macro_split = rule.macro_split
        for meal_name, foods in rule.meal_overrides.items():
            outcome.meal_overrides[meal_name] = foods
    return outcome
