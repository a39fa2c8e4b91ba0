# -*- coding: utf-8 -*-
"""Plan generation endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from ..errors import ClientNotFoundError
from ..notifications import notify_plan_ready
from .generator import PlanOrchestrator
from .models import PlanGenerateResponse

router = APIRouter(prefix="/api/plans", tags=["Plans"])


def get_orchestrator(request: Request) -> PlanOrchestrator:
    state = request.app.state
    return PlanOrchestrator(
        state.fetch_client,
        state.generate_text,
        clock=state.clock,
        policy=state.policy,
    )


@router.post(
    "/generate/{client_id}",
    response_model=PlanGenerateResponse,
    summary="Generate a meal plan for a client",
)
async def generate_plan_api(
    client_id: str,
    request: Request,
    timeout: Optional[float] = Query(default=None, gt=0, description="Seconds to wait for the model"),
    notify: bool = Query(default=False, description="Send the plan summary to the client"),
):
    orchestrator = get_orchestrator(request)
    try:
        outcome = await orchestrator.generate(client_id, timeout=timeout)
    except ClientNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Client not found") from exc

    notifier = getattr(request.app.state, "notifier", None)
    if notify and notifier is not None:
        notify_plan_ready(notifier, client_id, outcome.plan)

    return PlanGenerateResponse(client_id=client_id, source=outcome.source, plan=outcome.plan)
