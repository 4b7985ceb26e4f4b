"""Append-only ledger of every session identifier ever issued.

One hex identifier per line. An identifier is written and fsynced before
``issue`` returns it, so a restart can never hand out the same value twice.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import os
from pathlib import Path
import secrets
from threading import Lock

from live_quiz.constants.quiz_constants import SESSION_ID_BYTES
from live_quiz.core.errors import LedgerError

logger = logging.getLogger(__name__)


def _random_session_id() -> str:
    return secrets.token_hex(SESSION_ID_BYTES)


class SessionLedger:
    """Issues collision-free session identifiers and records them durably."""

    def __init__(
        self,
        path: Path,
        *,
        token_factory: Callable[[], str] = _random_session_id,
        fsync: bool = True,
    ) -> None:
        self._path = Path(path)
        self._token_factory = token_factory
        self._fsync = fsync
        self._lock = Lock()
        self._issued: set[str] = self._load_history()

    def _load_history(self) -> set[str]:
        if not self._path.exists():
            return set()
        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            raise LedgerError(f"Unable to read session history {self._path}: {exc}") from exc
        history = {line.strip() for line in lines if line.strip()}
        logger.info("Loaded %d previously issued session ids", len(history))
        return history

    def issue(self) -> str:
        """Return a new identifier that has been persisted to the ledger file."""
        with self._lock:
            session_id = self._token_factory()
            while session_id in self._issued:
                logger.warning("Session id collision detected, drawing again")
                session_id = self._token_factory()
            self._append(session_id)
            self._issued.add(session_id)
            return session_id

    def _append(self, session_id: str) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(session_id + "\n")
                handle.flush()
                if self._fsync:
                    os.fsync(handle.fileno())
        except OSError as exc:
            logger.critical("Could not persist session id to %s: %s", self._path, exc)
            raise LedgerError(f"Unable to persist session id: {exc}") from exc

    def has_issued(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._issued

    def issued_count(self) -> int:
        with self._lock:
            return len(self._issued)
