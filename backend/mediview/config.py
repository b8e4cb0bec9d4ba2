# backend configuration
# loads env vars for gemini, cors, mock data generation, and the realtime stream

import os
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load .env from project root
load_dotenv(Path(__file__).parent.parent.parent / ".env")


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


class Settings(BaseSettings):
    # gemini (for insight generation)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    INSIGHT_TEMPERATURE: float = 0.3
    INSIGHT_MAX_OUTPUT_TOKENS: int = 512

    # cors
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")

    # mock data; a fixed seed makes every generated patient reproducible
    MOCK_SEED: Optional[int] = _optional_int("MOCK_SEED")
    MOCK_ID_STRATEGY: str = os.getenv("MOCK_ID_STRATEGY", "sequence")
    WEARABLE_HISTORY_DAYS: int = 30
    WEARABLE_CHART_POINTS: int = 15
    FILLER_EVENT_COUNT: int = 15

    # simulated realtime biofeedback
    REALTIME_INTERVAL_SECONDS: float = 1.5

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
