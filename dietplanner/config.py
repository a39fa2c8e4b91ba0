from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the diet planner."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("DIETPLANNER_DATA_ROOT") or data_root_default
        ).expanduser()
        self.clients_dir: Path = Path(
            os.environ.get("DIETPLANNER_CLIENTS_DIR") or (self.data_root / "clients")
        ).expanduser()

        # ---- Generative model (OpenAI-compatible chat/completions) ----
        # Without an API key plans are always built by the rule-based pipeline.
        self.ai_api_key: str | None = os.environ.get("DIETPLANNER_AI_API_KEY") or None
        self.ai_base_url: str = os.environ.get(
            "DIETPLANNER_AI_BASE_URL", "https://api.openai.com/v1"
        )
        self.ai_model: str = os.environ.get("DIETPLANNER_AI_MODEL", "gpt-4o-mini")
        self.ai_timeout: float = float(os.environ.get("DIETPLANNER_AI_TIMEOUT", "30"))
        self.ai_max_tokens: int = int(os.environ.get("DIETPLANNER_AI_MAX_TOKENS", "1500"))
        self.ai_temperature: float = float(os.environ.get("DIETPLANNER_AI_TEMPERATURE", "0.7"))

        # ---- Missing profile data ----
        self.default_weight_kg: float = float(
            os.environ.get("DIETPLANNER_DEFAULT_WEIGHT_KG", "70")
        )
        self.default_height_cm: float = float(
            os.environ.get("DIETPLANNER_DEFAULT_HEIGHT_CM", "170")
        )
        self.default_age: int = int(os.environ.get("DIETPLANNER_DEFAULT_AGE", "30"))

        cors = os.environ.get("DIETPLANNER_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
