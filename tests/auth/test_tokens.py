from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.payroll_system.payroll_system.auth.tokens import TokenService, extract_bearer
from src.payroll_system.payroll_system.core.enums import Role
from src.payroll_system.payroll_system.core.exceptions import AuthenticationError


def test_issued_token_round_trips_to_principal(employee):
    tokens = TokenService("s3cret")
    principal = tokens.authenticate(tokens.issue(employee))

    assert principal.user_id == employee.user_id
    assert principal.role == Role.EMPLOYEE


@pytest.mark.parametrize("credential", [None, "", "   "])
def test_missing_credential_is_no_token(credential):
    with pytest.raises(AuthenticationError, match="No token provided"):
        TokenService("s3cret").authenticate(credential)


def test_wrong_signature_is_invalid(admin):
    token = TokenService("other-secret").issue(admin)

    with pytest.raises(AuthenticationError, match="Invalid token"):
        TokenService("s3cret").authenticate(token)


def test_expired_token_is_invalid(admin):
    tokens = TokenService("s3cret", expires_minutes=5)
    token = tokens.issue(admin, now=datetime.now(timezone.utc) - timedelta(hours=1))

    with pytest.raises(AuthenticationError, match="Invalid token"):
        tokens.authenticate(token)


def test_garbage_token_is_invalid():
    with pytest.raises(AuthenticationError, match="Invalid token"):
        TokenService("s3cret").authenticate("not-a-jwt")


def test_unknown_role_claim_is_invalid():
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({"id": 1, "role": "superuser", "exp": exp}, "s3cret", algorithm="HS256")

    with pytest.raises(AuthenticationError, match="Invalid token"):
        TokenService("s3cret").authenticate(token)


def test_missing_id_claim_is_invalid():
    exp = datetime.now(timezone.utc) + timedelta(minutes=5)
    token = jwt.encode({"role": "admin", "exp": exp}, "s3cret", algorithm="HS256")

    with pytest.raises(AuthenticationError, match="Invalid token"):
        TokenService("s3cret").authenticate(token)


def test_extract_bearer():
    assert extract_bearer(None) is None
    assert extract_bearer("") is None
    assert extract_bearer("Bearer abc.def") == "abc.def"
    assert extract_bearer("bearer abc") == "abc"

    with pytest.raises(AuthenticationError, match="Invalid token"):
        extract_bearer("Token abc")
    with pytest.raises(AuthenticationError, match="Invalid token"):
        extract_bearer("Bearer")
