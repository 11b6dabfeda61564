"""Per-request authentication guards.

Views decorated with :func:`auth_required` or :func:`auth_optional` receive
the verified token payload as an ``identity`` keyword argument; the request
object itself is left untouched.
"""

from __future__ import annotations

import functools

from flask import current_app, request

from errors import AuthenticationError, TokenError
from services import get_services
from services.tokens import BEARER_PREFIX, TokenPayload, TokenService


def extract_bearer_token(header: str | None) -> str | None:
    """Return the token carried by a ``Bearer`` authorization header."""

    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None


def resolve_identity(header: str | None, tokens: TokenService) -> TokenPayload:
    if not header:
        raise AuthenticationError("Authorization header is missing", "MISSING_TOKEN")

    token = extract_bearer_token(header)
    if token is None:
        raise AuthenticationError(
            "Invalid authorization header format", "INVALID_AUTH_HEADER"
        )

    try:
        return tokens.verify(token)
    except TokenError as exc:
        raise AuthenticationError(str(exc) or "Authentication failed", "AUTH_FAILED") from exc


def auth_required(view):
    """Reject the request with 401 unless it carries a valid token."""

    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        identity = resolve_identity(
            request.headers.get("Authorization"), get_services().tokens
        )
        return view(*args, identity=identity, **kwargs)

    return wrapper


def auth_optional(view):
    """Resolve the identity when possible; never block the request."""

    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        try:
            identity = resolve_identity(
                request.headers.get("Authorization"), get_services().tokens
            )
        except AuthenticationError as exc:
            current_app.logger.debug("Optional auth failed: %s (%s)", exc.message, exc.code)
            identity = None
        return view(*args, identity=identity, **kwargs)

    return wrapper
