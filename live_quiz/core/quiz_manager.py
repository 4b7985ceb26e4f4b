"""Business logic for the single live quiz round shared by all API callers."""

from __future__ import annotations

from collections.abc import Sequence
import copy
import logging
from threading import Lock

from live_quiz.config import Settings
from live_quiz.constants.quiz_constants import (
    DEFAULT_JOIN_ERROR,
    JOIN_ERROR_TEXT_KEY,
    PASSWORD_SETTING,
    PODIUM_SIZE,
)
from live_quiz.core.content_store import ContentStore
from live_quiz.core.errors import ConflictError, ValidationError
from live_quiz.core.models import (
    QuizStatus,
    ResultSummary,
    RoundPolicy,
    RoundState,
    SubmissionRecord,
)
from live_quiz.core.services.admin_auth import AdminAuthenticator
from live_quiz.core.services.lobby_manager import LobbyManager
from live_quiz.core.services.quiz_repository import QuizRepository, prepare_document
from live_quiz.core.services.round_session import RoundSession
from live_quiz.core.services.scoreboard import Scoreboard
from live_quiz.core.services.session_ledger import SessionLedger

logger = logging.getLogger(__name__)


class QuizManager:
    """Facade over Repository, Lobby, Scoreboard, RoundSession and admin auth.

    Every public method takes ``self._lock`` for its whole body, so a reader
    never sees a new session id next to the previous round's lobby or log.
    Admin operations take the caller's token and check it under the same lock.
    """

    def __init__(
        self,
        content_store: ContentStore,
        ledger: SessionLedger,
        policy: RoundPolicy | None = None,
    ) -> None:
        self._lock = Lock()
        self._policy = policy or RoundPolicy()
        self._content_store = content_store
        self._ledger = ledger

        # Services
        self._repository = QuizRepository()
        self._lobby = LobbyManager()
        self._scoreboard = Scoreboard()
        self._auth = AdminAuthenticator()

        self._repository.install(self._read_prepared_content())
        self._session = RoundSession(self._ledger.issue())
        logger.info("Quiz initialised with session id %s", self._session.get_session_id())

    @classmethod
    def from_settings(cls, settings: Settings) -> "QuizManager":
        return cls(
            content_store=ContentStore(settings.content_path),
            ledger=SessionLedger(settings.session_history_path),
            policy=settings.round_policy(),
        )

    @property
    def policy(self) -> RoundPolicy:
        return self._policy

    # --- Admin Authentication ---

    def login(self, password: str | None) -> str:
        with self._lock:
            return self._auth.login(password, self._repository.get_admin_password())

    def authorize(self, token: str | None) -> None:
        with self._lock:
            self._auth.authorize(token)

    # --- Status & Content ---

    def get_status(self) -> QuizStatus:
        with self._lock:
            return QuizStatus(
                round_state=self._session.get_state(),
                lobby=self._lobby.get_names(),
                session_id=self._session.get_session_id(),
            )

    def get_public_content(self) -> dict[str, object]:
        with self._lock:
            return self._repository.public_content()

    def get_admin_content(self, token: str | None) -> dict:
        with self._lock:
            self._auth.authorize(token)
            return self._repository.admin_content()

    def get_question_count(self) -> int:
        with self._lock:
            return self._repository.get_question_count()

    def replace_content(self, token: str | None, document: dict) -> None:
        """Validate, persist, then activate a new content document."""
        with self._lock:
            self._auth.authorize(token)
            incoming = self._keep_admin_password(document)
            prepared = prepare_document(incoming, strict=self._policy.strict_answer_key)
            self._content_store.replace(incoming)
            self._repository.install(prepared)
            logger.info("Content replaced by admin")

    # --- Round Lifecycle ---

    def start_round(self, token: str | None) -> RoundState:
        with self._lock:
            self._auth.authorize(token)
            state = self._session.start()
            logger.info("Quiz started by admin")
            return state

    def stop_round(self, token: str | None) -> RoundState:
        with self._lock:
            self._auth.authorize(token)
            state = self._session.stop()
            logger.info("Quiz stopped by admin")
            return state

    def reset_round(self, token: str | None) -> QuizStatus:
        """Clear lobby and results, reload content, and move to a new session id."""
        with self._lock:
            self._auth.authorize(token)
            prepared = self._read_prepared_content()
            session_id = self._ledger.issue()

            self._lobby.clear()
            self._scoreboard.clear()
            self._repository.install(prepared)
            self._session.begin_epoch(session_id)
            logger.info("Quiz fully reset. New session id: %s", session_id)
            return QuizStatus(
                round_state=self._session.get_state(),
                lobby=self._lobby.get_names(),
                session_id=session_id,
            )

    # --- Lobby ---

    def join_lobby(self, display_name: str | None) -> bool:
        name = _require_name(display_name)
        with self._lock:
            if self._session.is_active():
                logger.warning("Join rejected for %s: round already running", name)
                raise ConflictError(
                    self._repository.ui_text(JOIN_ERROR_TEXT_KEY, DEFAULT_JOIN_ERROR)
                )
            added = self._lobby.register(name)
            if added:
                logger.info("User joined lobby: %s", name)
            return added

    def kick(self, token: str | None, display_name: str | None) -> bool:
        name = _require_name(display_name)
        with self._lock:
            self._auth.authorize(token)
            removed = self._lobby.remove(name)
            logger.info("User kicked: %s (was waiting: %s)", name, removed)
            return removed

    # --- Submissions & Results ---

    def submit_answers(
        self, display_name: str | None, answers: Sequence[int] | None
    ) -> SubmissionRecord:
        name = _require_name(display_name)
        checked = _require_answers(answers)
        with self._lock:
            if not self._session.is_active() and not self._policy.accept_waiting_submissions:
                raise ConflictError("No round is running; submission rejected.")
            record = self._scoreboard.record_submission(
                name, checked, self._repository.get_answer_key()
            )
            logger.info("New submission: %s - score %d/%d", name, record.score, record.total)
            return record

    def get_results(self, token: str | None = None) -> list[SubmissionRecord]:
        with self._lock:
            self._authorize_results(token)
            return self._scoreboard.get_results()

    def get_top_scorers(
        self, token: str | None = None, limit: int = PODIUM_SIZE
    ) -> list[SubmissionRecord]:
        with self._lock:
            self._authorize_results(token)
            return self._scoreboard.get_top_scorers(limit)

    def get_result_summary(self, token: str | None = None) -> ResultSummary:
        with self._lock:
            self._authorize_results(token)
            return self._scoreboard.get_summary()

    # --- Helpers (lock must be held) ---

    def _authorize_results(self, token: str | None) -> None:
        if self._policy.results_require_token:
            self._auth.authorize(token)

    def _read_prepared_content(self) -> dict:
        document = self._content_store.read()
        return prepare_document(document, strict=self._policy.strict_answer_key)

    def _keep_admin_password(self, document: dict) -> dict:
        # The public content view never exposes the password, so editors
        # send documents without one.
        if not isinstance(document, dict):
            raise ValidationError("Content document must be a mapping.")
        incoming = copy.deepcopy(document)
        settings = incoming.get("settings")
        if settings is None:
            settings = incoming["settings"] = {}
        if not isinstance(settings, dict):
            raise ValidationError("'settings' must be a mapping.")
        if not settings.get(PASSWORD_SETTING):
            current = self._repository.get_admin_password()
            if current:
                settings[PASSWORD_SETTING] = current
            else:
                settings.pop(PASSWORD_SETTING, None)
        return incoming


def _require_name(display_name: str | None) -> str:
    if not isinstance(display_name, str) or not display_name.strip():
        raise ValidationError("A participant name is required.")
    return display_name


def _require_answers(answers: Sequence[int] | None) -> list[int]:
    if not isinstance(answers, (list, tuple)):
        raise ValidationError("Answers must be a list of option indices.")
    if not all(isinstance(a, int) and not isinstance(a, bool) for a in answers):
        raise ValidationError("Every answer must be an integer option index.")
    return list(answers)
