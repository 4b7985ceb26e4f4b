"""Service tracking the round state and the session identifier of the current epoch."""

from __future__ import annotations

from live_quiz.core.models import RoundState


class RoundSession:
    """Waiting/Active flag plus the identifier clients use to detect resets."""

    def __init__(self, session_id: str) -> None:
        self._state = RoundState.WAITING
        self._session_id = session_id

    def start(self) -> RoundState:
        self._state = RoundState.ACTIVE
        return self._state

    def stop(self) -> RoundState:
        self._state = RoundState.WAITING
        return self._state

    def begin_epoch(self, session_id: str) -> None:
        """Enter a new epoch: fresh identifier, back to Waiting."""
        self._session_id = session_id
        self._state = RoundState.WAITING

    def is_active(self) -> bool:
        return self._state is RoundState.ACTIVE

    def get_state(self) -> RoundState:
        return self._state

    def get_session_id(self) -> str:
        return self._session_id
