"""Salted one-way password hashing."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from errors import HashingError


class PasswordHasher:
    """Hash and verify passwords with werkzeug's salted hash helpers.

    ``method`` is a werkzeug method string such as ``"scrypt"`` or
    ``"pbkdf2:sha256:600000"``; its parameters are the work factor. Each call
    to :meth:`hash` draws a fresh random salt of ``salt_length`` characters.
    """

    def __init__(self, method: str = "scrypt", salt_length: int = 16) -> None:
        self.method = method
        self.salt_length = salt_length

    def hash(self, plaintext: str) -> str:
        try:
            return generate_password_hash(
                plaintext, method=self.method, salt_length=self.salt_length
            )
        except (ValueError, TypeError) as exc:
            raise HashingError(f"Password hashing failed: {exc}") from exc

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Return whether ``plaintext`` matches ``password_hash``.

        A mismatch returns ``False``; only a malformed hash raises.
        """

        if not isinstance(password_hash, str) or password_hash.count("$") < 2:
            raise HashingError("Malformed password hash.")

        method, salt, digest = password_hash.split("$", 2)
        if not method or not salt or not digest:
            raise HashingError("Malformed password hash.")

        try:
            return check_password_hash(password_hash, plaintext)
        except (ValueError, TypeError) as exc:
            raise HashingError(f"Password comparison failed: {exc}") from exc
