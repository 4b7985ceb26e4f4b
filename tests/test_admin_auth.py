from __future__ import annotations

import pytest

from live_quiz.core.errors import AuthError
from live_quiz.core.services.admin_auth import AdminAuthenticator


def test_wrong_password_is_rejected():
    auth = AdminAuthenticator()
    with pytest.raises(AuthError, match="Invalid password"):
        auth.login("wrong", "secret")
    assert not auth.has_session()


def test_authorize_before_any_login_reports_session_not_started():
    auth = AdminAuthenticator()
    with pytest.raises(AuthError, match="Admin session not started"):
        auth.authorize("anything")


def test_second_login_revokes_first_token():
    auth = AdminAuthenticator()
    first = auth.login("secret", "secret")
    second = auth.login("secret", "secret")
    assert first != second
    auth.authorize(second)
    with pytest.raises(AuthError, match="Invalid token"):
        auth.authorize(first)


def test_missing_token_is_rejected_once_session_exists():
    auth = AdminAuthenticator()
    auth.login("secret", "secret")
    with pytest.raises(AuthError):
        auth.authorize(None)


@pytest.mark.parametrize("supplied", [None, ""])
def test_login_fails_when_no_password_is_configured(supplied):
    auth = AdminAuthenticator()
    with pytest.raises(AuthError):
        auth.login(supplied, None)
