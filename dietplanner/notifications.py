# -*- coding: utf-8 -*-
"""Notifier capability.

Messaging is passed in where it is needed; nothing in the planner holds a
process-wide bot or client.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from .plans.models import MealPlan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendResult:
    ok: bool
    error: Optional[str] = None


class Notifier(Protocol):
    def send(self, recipient: str, text: str) -> SendResult:
        ...


class LoggingNotifier:
    """Notifier that only writes the message to the log."""

    def send(self, recipient: str, text: str) -> SendResult:
        logger.info("notify %s: %s", recipient, text)
        return SendResult(ok=True)


def plan_ready_message(plan: MealPlan) -> str:
    target = plan.nutrition_target
    return (
        f"Your new diet plan \"{plan.name}\" is ready: {target.daily_calories} kcal per day, "
        f"{target.macros.protein_grams}g protein, {target.macros.carb_grams}g carbohydrate, "
        f"{target.macros.fat_grams}g fat."
    )


def notify_plan_ready(notifier: Notifier, recipient: str, plan: MealPlan) -> SendResult:
    """Send the plan summary; delivery problems are logged, never raised."""
    try:
        result = notifier.send(recipient, plan_ready_message(plan))
    except Exception as exc:
        logger.warning("notifying %s failed: %s", recipient, exc)
        return SendResult(ok=False, error=str(exc))
    if not result.ok:
        logger.warning("notifying %s failed: %s", recipient, result.error)
    return result
