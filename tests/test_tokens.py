"""Tests for token issuance and verification."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from flask_jwt_extended import create_access_token

from conftest import build_app
from errors import TokenExpired, TokenInvalid
from services.tokens import TokenService


@pytest.fixture()
def tokens(app) -> TokenService:
    with app.app_context():
        yield TokenService(expires=timedelta(hours=24))


def test_verify_returns_issued_identity(tokens):
    token = tokens.issue(7, "a@b.com")

    payload = tokens.verify(token)

    assert payload.user_id == 7
    assert payload.email == "a@b.com"
    assert payload.to_dict() == {"userId": 7, "email": "a@b.com"}


def test_expiry_follows_configured_lifetime(tokens):
    before = datetime.now(UTC)
    payload = tokens.verify(tokens.issue(1, "a@b.com"))

    lifetime = payload.expires_at - payload.issued_at
    assert lifetime == timedelta(hours=24)
    assert payload.issued_at >= before.replace(microsecond=0) - timedelta(seconds=1)


def test_verify_accepts_bearer_prefix(tokens):
    token = tokens.issue(3, "c@d.com")

    assert tokens.verify(f"Bearer {token}").user_id == 3


def test_expired_token_is_rejected(app):
    with app.app_context():
        expired = TokenService(expires=timedelta(seconds=-1))
        token = expired.issue(1, "a@b.com")

        with pytest.raises(TokenExpired):
            expired.verify(token)


@pytest.mark.parametrize("token", ["", "Bearer ", "garbage", "a.b.c"])
def test_malformed_tokens_are_invalid(tokens, token):
    with pytest.raises(TokenInvalid):
        tokens.verify(token)


def test_tampered_token_is_invalid(tokens):
    header, payload, signature = tokens.issue(1, "a@b.com").split(".")
    forged = ".".join([header, payload, signature[::-1]])

    with pytest.raises(TokenInvalid):
        tokens.verify(forged)


def test_token_signed_with_another_key_is_invalid(tokens):
    other = build_app(JWT_SECRET_KEY="a-completely-different-signing-key-for-tests")
    with other.app_context():
        foreign = TokenService(expires=timedelta(hours=1)).issue(1, "a@b.com")

    with pytest.raises(TokenInvalid):
        tokens.verify(foreign)


def test_token_without_email_claim_is_invalid(tokens):
    token = create_access_token(identity="1")

    with pytest.raises(TokenInvalid):
        tokens.verify(token)


def test_token_with_non_numeric_subject_is_invalid(tokens):
    token = create_access_token(identity="abc", additional_claims={"email": "a@b.com"})

    with pytest.raises(TokenInvalid):
        tokens.verify(token)
