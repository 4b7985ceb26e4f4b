"""Runtime settings, read from ``LIVE_QUIZ_*`` environment variables or ``.env``."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from live_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from live_quiz.constants.quiz_constants import (
    DEFAULT_CONTENT_PATH,
    DEFAULT_SESSION_HISTORY_PATH,
)
from live_quiz.core.models import RoundPolicy


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LIVE_QUIZ_", env_file=".env", extra="ignore")

    content_path: Path = Path(DEFAULT_CONTENT_PATH)
    session_history_path: Path = Path(DEFAULT_SESSION_HISTORY_PATH)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    strict_answer_key: bool = False
    accept_waiting_submissions: bool = False
    results_require_token: bool = False

    def round_policy(self) -> RoundPolicy:
        return RoundPolicy(
            strict_answer_key=self.strict_answer_key,
            accept_waiting_submissions=self.accept_waiting_submissions,
            results_require_token=self.results_require_token,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
