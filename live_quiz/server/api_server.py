"""FastAPI server exposing the participant and admin endpoints."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, StrictInt
import uvicorn

from live_quiz.constants.network_constants import (
    ADMIN_TOKEN_HEADER,
    DEFAULT_HOST,
    DEFAULT_PORT,
)
from live_quiz.core.errors import (
    AuthError,
    ConflictError,
    LedgerError,
    QuizError,
    StorageError,
    ValidationError,
)
from live_quiz.core.models import QuizStatus
from live_quiz.core.quiz_manager import QuizManager

logger = logging.getLogger(__name__)

# Most specific class first.
_STATUS_BY_ERROR: tuple[tuple[type[QuizError], int], ...] = (
    (AuthError, 401),
    (ValidationError, 422),
    (ConflictError, 409),
    (LedgerError, 500),
    (StorageError, 500),
)


class LoginPayload(BaseModel):
    password: str | None = None


class NamePayload(BaseModel):
    name: str | None = None


class SubmitPayload(BaseModel):
    name: str | None = None
    answers: list[StrictInt] | None = None


def _status_payload(status: QuizStatus) -> dict[str, object]:
    return {
        "active": status.active,
        "round_state": status.round_state.value,
        "waiting_count": len(status.lobby),
        "waiting_users": status.lobby,
        "session_id": status.session_id,
    }


def _admin_token(
    token: str | None = Header(default=None, alias=ADMIN_TOKEN_HEADER),
) -> str | None:
    return token


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title="Live Quiz API", version="0.1.0")
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.exception_handler(QuizError)
    async def handle_quiz_error(request: Request, exc: QuizError) -> JSONResponse:
        status_code = next(
            (code for error_type, code in _STATUS_BY_ERROR if isinstance(exc, error_type)),
            500,
        )
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "healthy"}

    # --- Public endpoints ---

    @app.post("/api/admin-login")
    def admin_login(
        payload: LoginPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        token = manager.login(payload.password)
        return {"success": True, "token": token}

    @app.get("/api/config")
    def get_content(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return manager.get_public_content()

    @app.get("/api/quiz-status")
    def get_status(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return _status_payload(manager.get_status())

    @app.post("/api/join")
    def join_lobby(
        payload: NamePayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        added = manager.join_lobby(payload.name)
        return {"success": True, "added": added}

    @app.post("/api/submit")
    def submit_answers(
        payload: SubmitPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        record = manager.submit_answers(payload.name, payload.answers)
        return {
            "success": True,
            "score": record.score,
            "total": record.total,
            "perfect": record.is_perfect,
        }

    @app.get("/api/results")
    def get_results(
        token: str | None = Depends(_admin_token),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> list[dict[str, object]]:
        return [record.to_dict() for record in manager.get_results(token)]

    @app.get("/api/results/summary")
    def get_result_summary(
        token: str | None = Depends(_admin_token),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, int]:
        summary = manager.get_result_summary(token)
        return {
            "total_submissions": summary.total_submissions,
            "perfect_submissions": summary.perfect_submissions,
        }

    @app.get("/api/podium")
    def get_podium(
        token: str | None = Depends(_admin_token),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> list[dict[str, object]]:
        return [
            {"rank": rank, **record.to_dict()}
            for rank, record in enumerate(manager.get_top_scorers(token), start=1)
        ]

    # --- Admin endpoints (x-admin-token) ---

    @app.get("/api/admin/config")
    def get_admin_content(
        token: str | None = Depends(_admin_token),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict:
        return manager.get_admin_content(token)

    @app.post("/api/start-quiz")
    def start_quiz(
        token: str | None = Depends(_admin_token),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        state = manager.start_round(token)
        return {"success": True, "active": True, "round_state": state.value}

    @app.post("/api/stop-quiz")
    def stop_quiz(
        token: str | None = Depends(_admin_token),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        state = manager.stop_round(token)
        return {"success": True, "active": False, "round_state": state.value}

    @app.post("/api/reset-quiz")
    def reset_quiz(
        token: str | None = Depends(_admin_token),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        status = manager.reset_round(token)
        return {"success": True, **_status_payload(status)}

    @app.post("/api/kick")
    def kick(
        payload: NamePayload,
        token: str | None = Depends(_admin_token),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        removed = manager.kick(token, payload.name)
        return {"success": True, "removed": removed}

    @app.post("/api/save-config")
    async def save_content(
        request: Request,
        token: str | None = Depends(_admin_token),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        # The body is read only after the token checks out; the document is
        # stored as sent, so keys unknown to the server survive a round trip.
        manager.authorize(token)
        try:
            document = await request.json()
        except ValueError as exc:
            raise ValidationError("Content document must be valid JSON.") from exc
        manager.replace_content(token, document)
        return {"success": True}

    return app


def run_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve the API in the foreground until interrupted."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    uvicorn.Server(config).run()
