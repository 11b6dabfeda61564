"""Registration, login and password management flows."""

from __future__ import annotations

import logging

from errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    NotImplementedApiError,
    wrap_errors,
)
from models.user import User
from repositories.users import UserRepository
from services.passwords import PasswordHasher
from services.tokens import TokenService


class AuthService:
    """Orchestrates the hasher, token service and user store."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        logger: logging.Logger,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.logger = logger

    def _issue_for(self, user: User) -> str:
        return self.tokens.issue(user.id, user.email)

    @wrap_errors("REGISTRATION_FAILED", "Registration failed")
    def register(self, email: str, password: str) -> tuple[User, str]:
        """Create an account and return it with a fresh token."""

        if self.users.email_exists(email):
            raise ConflictError("Email already registered", "EMAIL_EXISTS")

        user = self.users.create(email, self.hasher.hash(password))
        self.logger.info("Registered user %s", user.id)
        return user, self._issue_for(user)

    @wrap_errors("LOGIN_FAILED", "Login failed")
    def login(self, email: str, password: str) -> tuple[User, str]:
        # Unknown email and wrong password share one error.
        user = self.users.find_by_email(email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            raise AuthenticationError("Invalid email or password", "INVALID_CREDENTIALS")

        return user, self._issue_for(user)

    @wrap_errors("GET_PROFILE_FAILED", "Failed to get user profile")
    def get_current_user(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        return user

    @wrap_errors("PASSWORD_CHANGE_FAILED", "Password change failed")
    def change_password(
        self, user_id: int, current_password: str, new_password: str
    ) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found", "USER_NOT_FOUND")

        if not self.hasher.verify(current_password, user.password_hash):
            raise AuthenticationError(
                "Current password is incorrect", "INVALID_CURRENT_PASSWORD"
            )

        return self.users.update_password(user, self.hasher.hash(new_password))

    def forgot_password(self, email: str) -> None:
        """Start a password reset if the account exists.

        Never raises: callers answer identically whether or not the email is
        registered, and lookup failures must not reach the client.
        """

        try:
            user = self.users.find_by_email(email)
        except Exception:
            self.logger.exception("Forgot password lookup failed")
            return

        if user is None:
            return

        # Mail delivery is handled outside this service; only the request is recorded.
        self.logger.info("Password reset requested for user %s", user.id)

    @wrap_errors("PASSWORD_RESET_FAILED", "Password reset failed")
    def reset_password(self, token: str, new_password: str) -> None:
        raise NotImplementedApiError("Reset password not implemented", "NOT_IMPLEMENTED")
