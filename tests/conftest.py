from __future__ import annotations

import copy
from pathlib import Path

from fastapi.testclient import TestClient
import pytest
import yaml

from live_quiz.core.content_store import ContentStore
from live_quiz.core.models import RoundPolicy
from live_quiz.core.quiz_manager import QuizManager
from live_quiz.core.services.session_ledger import SessionLedger
from live_quiz.server.api_server import create_api_app

ADMIN_PASSWORD = "secret"

SAMPLE_CONTENT = {
    "settings": {"client_reset_enabled": True, "dashboard_password": ADMIN_PASSWORD},
    "questions": [
        {"q": "Capital of *France*?", "options": ["Berlin", "Madrid"], "correct_option_text": "Paris"},
        {"q": "2 + 2?", "options": ["3", "4", "5"], "correct_option_text": "4"},
    ],
    "anecdotes": ["Paris has a tower."],
    "ui_texts": {"joinError": "Too late, the round is running."},
}

# Correct indices after the correct text is merged into the options.
SAMPLE_ANSWER_KEY = [2, 1]


def write_content(path: Path, document: dict) -> Path:
    path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture()
def sample_content() -> dict:
    return copy.deepcopy(SAMPLE_CONTENT)


@pytest.fixture()
def content_path(tmp_path, sample_content) -> Path:
    return write_content(tmp_path / "content.yml", sample_content)


@pytest.fixture()
def ledger_path(tmp_path) -> Path:
    return tmp_path / "sessions.log"


@pytest.fixture()
def make_manager(content_path, ledger_path):
    def factory(policy: RoundPolicy | None = None, store: ContentStore | None = None) -> QuizManager:
        return QuizManager(
            content_store=store or ContentStore(content_path),
            ledger=SessionLedger(ledger_path),
            policy=policy,
        )

    return factory


@pytest.fixture()
def manager(make_manager) -> QuizManager:
    return make_manager()


@pytest.fixture()
def admin_token(manager) -> str:
    return manager.login(ADMIN_PASSWORD)


@pytest.fixture()
def client(manager) -> TestClient:
    return TestClient(create_api_app(manager))
