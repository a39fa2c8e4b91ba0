# -*- coding: utf-8 -*-
"""Meal plan generation: generative model first, rule-based pipeline as fallback.

The orchestrator is a small state machine:

    ATTEMPT_EXTERNAL -> DONE                 model returned a valid plan
    ATTEMPT_EXTERNAL -> FALLBACK -> DONE     timeout, error or invalid output
    FALLBACK -> DONE                         no model configured

The model gets exactly one attempt. The only error that reaches the caller is
ClientNotFoundError, raised before any state is entered.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional, Tuple, Union

from ..clients.models import ClientProfile
from ..clients.normalizer import normalize_profile
from ..config import settings
from ..errors import ClientNotFoundError
from ..nutrition.calculator import POPULATION_AVERAGE, MissingDataPolicy
from ..nutrition.pipeline import build_plan
from .models import MealPlan

logger = logging.getLogger(__name__)

FetchClient = Callable[[str], Union[Optional[Mapping[str, Any]], Awaitable[Optional[Mapping[str, Any]]]]]
GenerateText = Callable[[str], Awaitable[str]]
Clock = Callable[[], date]


class GenerationState(str, Enum):
    ATTEMPT_EXTERNAL = "attempt_external"
    FALLBACK = "fallback"
    DONE = "done"


@dataclass(frozen=True)
class FromExternal:
    plan: MealPlan

    @property
    def source(self) -> str:
        return "external"


@dataclass(frozen=True)
class FromFallback:
    plan: MealPlan
    reason: Optional[str] = None

    @property
    def source(self) -> str:
        return "fallback"


GenerationOutcome = Union[FromExternal, FromFallback]


def _plan_schema_text() -> str:
    return json.dumps(MealPlan.model_json_schema(), ensure_ascii=False, indent=2)


def _or_unknown(value: Any, unit: str = "") -> str:
    if value is None or value == []:
        return "not specified"
    if isinstance(value, list):
        return ", ".join(value)
    return f"{value}{unit}"


def build_prompt(profile: ClientProfile) -> str:
    """Prompt with the client's facts and the JSON schema the answer must follow."""
    return (
        "As a dietitian, create a one-day diet plan for the following client.\n"
        f"- Gender: {profile.gender.value}\n"
        f"- Birth date: {_or_unknown(profile.birth_date)}\n"
        f"- Height: {_or_unknown(profile.height_cm, ' cm')}\n"
        f"- Weight: {_or_unknown(profile.weight_kg, ' kg')}\n"
        f"- Target weight: {_or_unknown(profile.target_weight_kg, ' kg')}\n"
        f"- Activity level: {profile.activity_level.value}\n"
        f"- Medical history: {_or_unknown(profile.medical_conditions)}\n"
        f"- Dietary restrictions: {_or_unknown(profile.dietary_restrictions)}\n"
        "\n"
        "Use the meals Breakfast, Lunch, Dinner, Snack1 and Snack2. "
        "All calorie and gram values must be plain integers.\n"
        "Return ONLY a JSON object valid against this JSON schema:\n"
        f"{_plan_schema_text()}\n"
    )


def _extract_json(text: str) -> str:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise ValueError("No JSON object found")
    return text[start:end + 1]


def parse_plan_response(text: str) -> MealPlan:
    """Parse model output into a MealPlan; raises ValueError on any problem."""
    # pydantic.ValidationError subclasses ValueError.
    return MealPlan.model_validate_json(_extract_json(text or ""))


class PlanOrchestrator:
    def __init__(
        self,
        fetch_client: FetchClient,
        generate_text: Optional[GenerateText] = None,
        *,
        clock: Clock = date.today,
        policy: MissingDataPolicy = POPULATION_AVERAGE,
        timeout: Optional[float] = None,
    ) -> None:
        self.fetch_client = fetch_client
        self.generate_text = generate_text
        self.clock = clock
        self.policy = policy
        self.timeout = timeout if timeout is not None else settings.ai_timeout

    async def _load_profile(self, client_id: str) -> ClientProfile:
        raw = self.fetch_client(client_id)
        if inspect.isawaitable(raw):
            raw = await raw
        if raw is None:
            raise ClientNotFoundError(client_id)
        return normalize_profile(raw, client_id=client_id)

    async def _attempt_external(
        self, generate_text: GenerateText, profile: ClientProfile, timeout: float
    ) -> Tuple[Optional[MealPlan], Optional[str]]:
        try:
            text = await asyncio.wait_for(generate_text(build_prompt(profile)), timeout)
        except asyncio.TimeoutError:
            logger.warning("plan generation timed out after %ss for client %s", timeout, profile.client_id)
            return None, "timeout"
        except Exception as exc:
            logger.warning("plan generation failed for client %s: %s", profile.client_id, exc)
            return None, f"generation error: {exc}"

        try:
            return parse_plan_response(text), None
        except ValueError as exc:
            logger.warning("unusable plan from model for client %s: %s", profile.client_id, exc)
            return None, f"invalid model output: {exc}"

    async def generate(self, client_id: str, timeout: Optional[float] = None) -> GenerationOutcome:
        profile = await self._load_profile(client_id)
        timeout = timeout if timeout is not None else self.timeout

        state = GenerationState.ATTEMPT_EXTERNAL if self.generate_text else GenerationState.FALLBACK
        reason: Optional[str] = None if self.generate_text else "no generator configured"

        while True:
            if state == GenerationState.ATTEMPT_EXTERNAL:
                plan, reason = await self._attempt_external(self.generate_text, profile, timeout)
                if plan is not None:
                    logger.debug("client %s: %s -> %s", client_id, state.value, GenerationState.DONE.value)
                    return FromExternal(plan)
                logger.debug("client %s: %s -> %s", client_id, state.value, GenerationState.FALLBACK.value)
                state = GenerationState.FALLBACK
            else:
                plan = build_plan(profile, self.clock(), self.policy)
                logger.debug("client %s: %s -> %s", client_id, state.value, GenerationState.DONE.value)
                return FromFallback(plan, reason)


async def generate_meal_plan(
    client_id: str,
    fetch_client: FetchClient,
    generate_text: Optional[GenerateText] = None,
    *,
    clock: Clock = date.today,
    policy: MissingDataPolicy = POPULATION_AVERAGE,
    timeout: Optional[float] = None,
) -> MealPlan:
    orchestrator = PlanOrchestrator(
        fetch_client, generate_text, clock=clock, policy=policy, timeout=timeout
    )
    outcome = await orchestrator.generate(client_id)
    return outcome.plan
