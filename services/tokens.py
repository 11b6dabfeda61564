"""Signed, expiring identity tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import ExpiredSignatureError, InvalidTokenError

from errors import TokenExpired, TokenInvalid

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class TokenPayload:
    """Identity decoded from a verified token."""

    user_id: int
    email: str
    issued_at: datetime
    expires_at: datetime

    def to_dict(self) -> dict:
        return {"userId": self.user_id, "email": self.email}


def strip_bearer(token: str) -> str:
    if token.startswith(BEARER_PREFIX):
        return token[len(BEARER_PREFIX):]
    return token


class TokenService:
    """Issue and verify JWTs through Flask-JWT-Extended.

    The signing key and algorithm come from the application's JWT
    configuration, so both operations need an application context.
    """

    def __init__(self, expires: timedelta) -> None:
        self.expires = expires

    def issue(self, user_id: int, email: str) -> str:
        return create_access_token(
            identity=str(user_id),
            additional_claims={"email": email},
            expires_delta=self.expires,
        )

    def verify(self, token: str) -> TokenPayload:
        """Return the payload of ``token``, with or without a ``Bearer`` prefix."""

        raw = strip_bearer((token or "").strip())
        if not raw:
            raise TokenInvalid("Invalid token")

        try:
            claims = decode_token(raw)
        except ExpiredSignatureError as exc:
            raise TokenExpired("Token has expired") from exc
        except (InvalidTokenError, JWTExtendedException) as exc:
            raise TokenInvalid("Invalid token") from exc

        try:
            return TokenPayload(
                user_id=int(claims["sub"]),
                email=str(claims["email"]),
                issued_at=datetime.fromtimestamp(claims["iat"], UTC),
                expires_at=datetime.fromtimestamp(claims["exp"], UTC),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise TokenInvalid("Invalid token payload") from exc
