"""User administration."""

from __future__ import annotations

from errors import NotFoundError, ValidationError, wrap_errors
from models.user import User
from repositories.users import UserRepository
from services.passwords import PasswordHasher
from utils.pagination import MAX_LIMIT, Page, PageRequest


class UserService:
    def __init__(self, users: UserRepository, hasher: PasswordHasher) -> None:
        self.users = users
        self.hasher = hasher

    def _require(self, user_id: int) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found", "USER_NOT_FOUND")
        return user

    @wrap_errors("USER_CREATION_FAILED", "Failed to create user")
    def create_user(self, email: str, password: str) -> User:
        return self.users.create(email, self.hasher.hash(password))

    @wrap_errors("GET_USER_FAILED", "Failed to get user")
    def get_user(self, user_id: int) -> User:
        return self._require(user_id)

    @wrap_errors("GET_USERS_FAILED", "Failed to get users")
    def list_users(
        self, page: int = 1, limit: int = 10, email: str | None = None
    ) -> Page[User]:
        """Return a page of users, newest first, optionally filtered by email."""

        if page < 1:
            raise ValidationError(
                message="Page must be greater than 0", code="INVALID_PAGE"
            )
        if limit < 1 or limit > MAX_LIMIT:
            raise ValidationError(
                message=f"Limit must be between 1 and {MAX_LIMIT}",
                code="INVALID_LIMIT",
            )

        request = PageRequest(page=page, limit=limit)
        items, total = self.users.paginate(request.skip, request.limit, email or None)
        return Page(items=items, request=request, total=total)

    @wrap_errors("USER_UPDATE_FAILED", "Failed to update user")
    def update_user(
        self, user_id: int, email: str | None = None, password: str | None = None
    ) -> User:
        user = self._require(user_id)

        fields = {}
        if email is not None:
            fields["email"] = email
        if password is not None:
            fields["password_hash"] = self.hasher.hash(password)

        return self.users.update(user, **fields)

    @wrap_errors("USER_DELETION_FAILED", "Failed to delete user")
    def delete_user(self, user_id: int) -> User:
        return self.users.delete(self._require(user_id))
