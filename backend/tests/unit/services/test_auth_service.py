# tests/unit/services/test_auth_service.py
from __future__ import annotations

import logging
from datetime import timedelta

import pytest

from tokenauth.core import errors as api_errors
from tokenauth.infra.credentials.static_validator import StaticCredentialValidator
from tokenauth.infra.memory.session_store import InMemorySessionStore
from tokenauth.services._shared.errors import CredentialError, InvalidInputError, TokenError
from tokenauth.services._shared.ports.token_provider import StubTokenProvider
from tokenauth.services.auth.dto import (
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    RefreshIn,
    TokenPairOut,
)
from tokenauth.services.auth.service import AuthService


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture()
def service(store) -> AuthService:
    """Build an AuthService wired to in-memory doubles."""
    return AuthService(
        token_provider=StubTokenProvider(),
        session_store=store,
        credentials=StaticCredentialValidator(username="admin", password="Admin@123"),
    )


def _login(service: AuthService) -> TokenPairOut:
    return service.login(LoginIn(username="admin", password="Admin@123"))


# -------------------------------- Login ----------------------------------- #
def test_login_issues_token_pair_and_tracks_refresh(service, store):
    pair = _login(service)

    assert isinstance(pair, TokenPairOut)
    assert pair.token_type == "Bearer"
    assert pair.access_token.startswith("access.")
    assert pair.refresh_token.startswith("refresh.")
    assert store.verify(pair.refresh_token) == "admin"
    # access tokens are never tracked
    assert store.verify(pair.access_token) is None


def test_login_session_lifetime_follows_config(store):
    service = AuthService(
        token_provider=StubTokenProvider(),
        session_store=store,
        credentials=StaticCredentialValidator(username="admin", password="Admin@123"),
        token_cfg=AuthTokenConfig(refresh_expires=timedelta(hours=2)),
    )
    _login(service)

    (summary,) = store.stats().sessions
    assert summary.expires_at - summary.issued_at == timedelta(hours=2)


@pytest.mark.parametrize(
    ("username", "password"),
    [("admin", "wrong"), ("nobody", "Admin@123"), ("", ""), ("admin", "")],
)
def test_login_rejects_bad_credentials_without_creating_session(service, store, username, password):
    with pytest.raises(CredentialError) as excinfo:
        service.login(LoginIn(username=username, password=password))

    assert str(excinfo.value) == "Invalid credentials"
    assert len(store) == 0


def test_login_error_is_identical_for_wrong_user_or_password(service):
    with pytest.raises(CredentialError) as wrong_user:
        service.login(LoginIn(username="root", password="Admin@123"))
    with pytest.raises(CredentialError) as wrong_pass:
        service.login(LoginIn(username="admin", password="nope"))

    assert str(wrong_user.value) == str(wrong_pass.value)
    translated_user = service.translate_exceptions(wrong_user.value)
    translated_pass = service.translate_exceptions(wrong_pass.value)
    assert (translated_user.status_code, translated_user.code, translated_user.message) == (
        translated_pass.status_code,
        translated_pass.code,
        translated_pass.message,
    )


def test_login_logs_without_secrets(service, caplog):
    caplog.set_level(logging.DEBUG, logger="tokenauth.services.auth.service")
    pair = _login(service)

    assert "auth.login.succeeded" in caplog.messages
    record = next(r for r in caplog.records if r.getMessage() == "auth.login.succeeded")
    assert record.subject == "admin"
    assert all(pair.refresh_token not in r.getMessage() for r in caplog.records)
    assert all("Admin@123" not in r.getMessage() for r in caplog.records)


# ------------------------------- Refresh ---------------------------------- #
def test_refresh_round_trip_keeps_refresh_token(service):
    pair = _login(service)
    renewed = service.refresh(RefreshIn(refresh_token=pair.refresh_token))

    assert renewed.access_token != pair.access_token
    assert renewed.refresh_token == pair.refresh_token
    # No rotation: the same refresh token keeps working
    again = service.refresh(RefreshIn(refresh_token=pair.refresh_token))
    assert again.access_token not in {pair.access_token, renewed.access_token}


def test_full_session_scenario(service):
    """Login, refresh, logout, then the refresh token is dead."""
    a1_r1 = _login(service)
    a2 = service.refresh(RefreshIn(refresh_token=a1_r1.refresh_token))
    assert a2.access_token != a1_r1.access_token
    assert a2.refresh_token == a1_r1.refresh_token

    service.logout(LogoutIn(refresh_token=a1_r1.refresh_token))

    with pytest.raises(TokenError):
        service.refresh(RefreshIn(refresh_token=a1_r1.refresh_token))


def test_refresh_unknown_token(service):
    with pytest.raises(TokenError) as excinfo:
        service.refresh(RefreshIn(refresh_token="nonexistent-token"))
    assert excinfo.value.reason == "not found in session store"


@pytest.mark.parametrize("missing", [None, ""])
def test_refresh_requires_token(service, store, missing):
    with pytest.raises(InvalidInputError) as excinfo:
        service.refresh(RefreshIn(refresh_token=missing))
    assert str(excinfo.value) == "Refresh token is required"


def test_refresh_rejects_tracked_access_token(service, store):
    """A token present in the store but of the wrong type still fails."""
    pair = _login(service)
    store.save(pair.access_token, "admin", timedelta(minutes=5))

    with pytest.raises(TokenError) as excinfo:
        service.refresh(RefreshIn(refresh_token=pair.access_token))
    assert "refresh" in excinfo.value.reason


def test_refresh_rejects_owner_mismatch(service, store):
    pair = _login(service)
    store.save(pair.refresh_token, "mallory", timedelta(minutes=5))

    with pytest.raises(TokenError) as excinfo:
        service.refresh(RefreshIn(refresh_token=pair.refresh_token))
    assert excinfo.value.reason == "subject does not match session owner"


def test_refresh_rejects_expired_session(service, freeze_time):
    with freeze_time("2026-01-01 12:00:00") as frozen:
        pair = _login(service)
        frozen.tick(timedelta(days=7, seconds=1))
        with pytest.raises(TokenError):
            service.refresh(RefreshIn(refresh_token=pair.refresh_token))

    assert len(service.sessions) == 0


def test_refresh_rejection_is_logged_with_reason(service, caplog):
    caplog.set_level(logging.WARNING, logger="tokenauth.services.auth.service")
    with pytest.raises(TokenError):
        service.refresh(RefreshIn(refresh_token="nonexistent-token"))

    record = next(r for r in caplog.records if r.getMessage() == "auth.refresh.rejected")
    assert record.reason == "not found in session store"


# -------------------------------- Logout ---------------------------------- #
def test_logout_revokes_only_the_given_session(service, store):
    first = _login(service)
    second = _login(service)

    service.logout(LogoutIn(refresh_token=first.refresh_token))

    assert store.verify(first.refresh_token) is None
    assert store.verify(second.refresh_token) == "admin"


def test_logout_unknown_token_is_noop(service):
    assert service.logout(LogoutIn(refresh_token="nonexistent-token")) is None


def test_logout_twice_is_idempotent(service):
    pair = _login(service)
    service.logout(LogoutIn(refresh_token=pair.refresh_token))
    service.logout(LogoutIn(refresh_token=pair.refresh_token))


def test_logout_requires_token(service):
    with pytest.raises(InvalidInputError):
        service.logout(LogoutIn(refresh_token=None))


# ---------------------------- Current user -------------------------------- #
def test_current_user_passes_claims_through(service):
    pair = _login(service)
    claims = service.tokens.verify_access_token(pair.access_token)

    user = service.current_user(claims)
    assert user.subject == "admin"
    assert user.issued_at == claims["iat"]
    assert user.expires_at == claims["exp"]
    assert user.expires_at - user.issued_at == 15 * 60


# ----------------------------- Maintenance -------------------------------- #
def test_revoke_all_sessions(service, store):
    _login(service)
    _login(service)
    store.save("other", "bob", timedelta(minutes=5))

    assert service.revoke_all_sessions("admin") == 2
    assert service.session_stats().total == 1
    assert store.verify("other") == "bob"


def test_sweep_expired_sessions(service, freeze_time):
    with freeze_time("2026-01-01 12:00:00") as frozen:
        _login(service)
        frozen.tick(timedelta(days=8))
        assert service.sweep_expired_sessions() == 1
        assert service.sweep_expired_sessions() == 0


# --------------------------- Error translation ---------------------------- #
@pytest.mark.parametrize(
    ("exc", "status", "detail"),
    [
        (CredentialError(), 401, "Invalid credentials"),
        (TokenError("whatever internal reason"), 401, "Invalid refresh token"),
        (InvalidInputError("Refresh token is required"), 400, "Refresh token is required"),
    ],
)
def test_translate_exceptions(service, exc, status, detail):
    translated = service.translate_exceptions(exc)

    assert isinstance(translated, api_errors.APIError)
    assert translated.status_code == status
    assert translated.message == detail


def test_translate_leaves_foreign_exceptions_untouched(service):
    exc = RuntimeError("boom")
    assert service.translate_exceptions(exc) is exc
