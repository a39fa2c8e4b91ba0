from __future__ import annotations

import logging
import os
from datetime import date
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .agent_service import build_text_generator
from .clients.storage import JsonClientStore
from .config import settings
from .notifications import Notifier
from .nutrition.calculator import MissingDataPolicy, policy_from_settings
from .plans.api import router as plans_router
from .plans.generator import Clock, FetchClient, GenerateText

logger = logging.getLogger(__name__)

# create_app(generate_text=None) disables the model; the default reads settings.
_FROM_SETTINGS: Any = object()


def create_app(
    *,
    fetch_client: Optional[FetchClient] = None,
    generate_text: Optional[GenerateText] = _FROM_SETTINGS,
    notifier: Optional[Notifier] = None,
    clock: Clock = date.today,
    policy: Optional[MissingDataPolicy] = None,
) -> FastAPI:
    app = FastAPI(
        title="Diet Planner",
        description="Personalized calorie targets, macro splits and meal plans.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.fetch_client = fetch_client if fetch_client is not None else JsonClientStore()
    app.state.generate_text = (
        build_text_generator() if generate_text is _FROM_SETTINGS else generate_text
    )
    app.state.notifier = notifier
    app.state.clock = clock
    app.state.policy = policy or policy_from_settings()
    if app.state.generate_text is None:
        logger.info("no AI provider configured; plans use the rule-based pipeline")

    app.include_router(plans_router)

    @app.get("/api/health")
    def health():
        return {"status": "ok", "ai_enabled": app.state.generate_text is not None}

    return app


app = create_app()


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    host = os.environ.get("DIETPLANNER_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("DIETPLANNER_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        logger.warning("invalid port %r, using 8000", port_raw)
        port = 8000

    uvicorn.run("dietplanner.main:app", host=host, port=port, reload=False)
