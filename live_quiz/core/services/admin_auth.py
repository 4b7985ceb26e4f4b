"""Single-slot admin credential: one bearer token valid at a time."""

from __future__ import annotations

import logging
import secrets

from live_quiz.constants.quiz_constants import ADMIN_TOKEN_BYTES
from live_quiz.core.errors import AuthError

logger = logging.getLogger(__name__)


class AdminAuthenticator:
    """Checks the admin password and tracks the currently valid token."""

    def __init__(self) -> None:
        self._token: str | None = None

    def login(self, password: str | None, expected_password: str | None) -> str:
        """Mint a fresh token; any previously issued token stops working."""
        if not expected_password:
            logger.warning("Admin login refused: no dashboard password configured")
            raise AuthError("Invalid password")
        if password is None or not secrets.compare_digest(
            password.encode("utf-8"), expected_password.encode("utf-8")
        ):
            logger.warning("Admin login failed: invalid password")
            raise AuthError("Invalid password")
        self._token = secrets.token_hex(ADMIN_TOKEN_BYTES)
        logger.info("Admin logged in; previous admin session revoked")
        return self._token

    def authorize(self, token: str | None) -> None:
        if self._token is None:
            raise AuthError("Unauthorized: Admin session not started")
        if not token or not secrets.compare_digest(token.encode("utf-8"), self._token.encode("utf-8")):
            raise AuthError("Unauthorized: Invalid token")

    def has_session(self) -> bool:
        return self._token is not None
