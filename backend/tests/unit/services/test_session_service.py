from datetime import timedelta

import jwt as pyjwt
import pytest
from insights.services._shared.errors import (
    ExpiredSessionError,
    InvalidCredentialError,
    InvalidSessionError,
)
from tests.factories.account import DEFAULT_PASSWORD, AccountFactory
from tests.helpers.utils import FROZEN_AT


@pytest.mark.usefixtures("app_ctx")
class TestSessionService:
    """Signed sessions: issue, verify, expire and log in."""

    @pytest.fixture()
    def service(self, services):
        return services.sessions

    def test_issue_then_verify_round_trip(self, service):
        issued = service.issue_session(7, "seven@example.com")

        claims = service.verify_session(issued.token)
        assert claims.account_id == 7
        assert claims.email == "seven@example.com"
        assert claims.expires_at == issued.expires_at

    def test_expiry_uses_configured_ttl(self, service, app):
        issued = service.issue_session(1, "ttl@example.com")
        assert issued.expires_at == FROZEN_AT + app.config["SESSION_TTL"]

    def test_sub_second_issue_rounds_expiry_up(self, service, clock, app):
        clock.set(FROZEN_AT + timedelta(milliseconds=500))
        ttl = app.config["SESSION_TTL"]

        issued = service.issue_session(1, "ceil@example.com")
        assert issued.expires_at == FROZEN_AT + ttl + timedelta(seconds=1)

        clock.set(FROZEN_AT + timedelta(milliseconds=500) + ttl)
        assert service.verify_session(issued.token).expires_at == issued.expires_at

    def test_valid_until_expiry_instant(self, service, clock):
        issued = service.issue_session(1, "edge@example.com")

        clock.set(issued.expires_at)
        assert service.verify_session(issued.token).account_id == 1

    def test_rejected_after_expiry(self, service, clock):
        issued = service.issue_session(1, "late@example.com")

        clock.set(issued.expires_at + timedelta(seconds=1))
        with pytest.raises(ExpiredSessionError):
            service.verify_session(issued.token)

    def test_token_signed_with_other_key_rejected(self, service):
        issued = service.issue_session(1, "tamper@example.com")
        claims = {"sub": "1", "accountId": 1, "email": "tamper@example.com",
                  "exp": int(issued.expires_at.timestamp()), "type": "access"}
        forged = pyjwt.encode(claims, "some-other-secret-key-that-is-long-enough", algorithm="HS256")

        with pytest.raises(InvalidSessionError):
            service.verify_session(forged)

    def test_altered_claims_rejected(self, service):
        header, _, signature = service.issue_session(1, "a@example.com").token.split(".")
        other_payload = service.issue_session(2, "b@example.com").token.split(".")[1]

        with pytest.raises(InvalidSessionError):
            service.verify_session(".".join([header, other_payload, signature]))

    def test_garbage_token_rejected(self, service):
        with pytest.raises(InvalidSessionError):
            service.verify_session("not-a-jwt")

    def test_login_issues_session_for_account(self, service):
        acc = AccountFactory(email="login@example.com")

        issued = service.login("login@example.com", DEFAULT_PASSWORD)
        assert service.verify_session(issued.token).account_id == acc.id

    def test_login_unknown_email_looks_like_bad_password(self, service):
        with pytest.raises(InvalidCredentialError):
            service.login("ghost@example.com", DEFAULT_PASSWORD)

    def test_login_wrong_password(self, service):
        AccountFactory(email="badpw@example.com")

        with pytest.raises(InvalidCredentialError):
            service.login("badpw@example.com", "not-the-password")
