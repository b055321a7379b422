# worker/app/config.py
from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve repo root: repo/ (since this file is repo/worker/app/config.py)
REPO_ENV = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """
    Central config for the sampler worker. Uses Pydantic v2 + pydantic-settings.

    - Loads env from the repo root .env if present
    - Ignores unknown env vars
    - Case-insensitive env keys
    - Defaults: list length 5, 4096 display lines
    """

    model_config = SettingsConfigDict(
        env_file=str(REPO_ENV),
        extra="ignore",
        case_sensitive=False,
    )

    # --- Sampling defaults ----------------------------------------------------
    DEFAULT_LIST_LENGTH: int = 5

    # --- Display --------------------------------------------------------------
    MAX_DISPLAY_LINES: int = 4096  # rendering cap only, never applied to results

    # --- HTTP surface ---------------------------------------------------------
    PORT_WORKER: int = 8090
    MAX_INPUT_BYTES: int = 1024 * 1024 * 32  # 32 MiB soft cap on POST /sample
    CORS_ORIGINS: str = (
        "http://localhost:5173,http://127.0.0.1:5173,"
        "http://localhost:3000,http://127.0.0.1:3000"
    )
    WORKER_AUTH_TOKEN: str = ""  # empty -> auth disabled

    # --- Logging --------------------------------------------------------------
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "data/logs"
    MAX_LOG_MB: int = 16

    # --- Versioning (reported by /status) -------------------------------------
    PIPELINE_VERSION: str = "2025-10-01"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Singleton-style instance used by the app/tests
settings = Settings()
