"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

import re
from typing import Annotated, Mapping, Optional, TypeVar

from flask import Request
from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import BadRequest

from errors import ValidationError

M = TypeVar("M", bound=BaseModel)

STRONG_PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d@$!%*?&]{8,}$")
# Nine digits keep (page - 1) * limit inside a 64-bit OFFSET.
MAX_QUERY_DIGITS = 9


def parse_json_request(req: Request, *, allow_empty: bool = False) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise BadRequest("Request content type must be application/json.")

    data = req.get_json(silent=False)
    if data is None:
        raise BadRequest("Request JSON body is required.")

    if not isinstance(data, dict):
        raise BadRequest("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise BadRequest("Request JSON body must not be empty.")

    return data


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return (raw_email or "").strip().lower()


def _check_strength(value: str) -> str:
    if not STRONG_PASSWORD_PATTERN.match(value):
        raise ValueError("Password must contain at least one letter and one number")
    return value


StrongPassword = Annotated[
    str, Field(min_length=8, max_length=50), AfterValidator(_check_strength)
]
QueryNumber = Annotated[
    str, StringConstraints(pattern=r"^\d+$", max_length=MAX_QUERY_DIGITS)
]


class _RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class _EmailModel(_RequestModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def _normalize(cls, value):
        return normalize_email(value) if isinstance(value, str) else value


def _confirm(expected_field: str, message: str):
    """Build a validator requiring the field to equal ``expected_field``."""

    def check(cls, value: str, info: ValidationInfo) -> str:
        expected = info.data.get(expected_field)
        if expected is not None and value != expected:
            raise ValueError(message)
        return value

    return classmethod(check)


class RegisterRequest(_EmailModel):
    password: StrongPassword
    confirm_password: str = Field(alias="confirmPassword")

    _passwords_match = field_validator("confirm_password")(
        _confirm("password", "Passwords don't match")
    )

    @field_validator("email")
    @classmethod
    def _email_length(cls, value: str) -> str:
        if len(value) > 100:
            raise ValueError("Email must not exceed 100 characters")
        return value


class LoginRequest(_EmailModel):
    password: str = Field(min_length=1)


class ChangePasswordRequest(_RequestModel):
    current_password: str = Field(alias="currentPassword", min_length=1)
    new_password: StrongPassword = Field(alias="newPassword")
    confirm_new_password: str = Field(alias="confirmNewPassword")

    _passwords_match = field_validator("confirm_new_password")(
        _confirm("new_password", "New passwords don't match")
    )


class ForgotPasswordRequest(_EmailModel):
    pass


class ResetPasswordRequest(_RequestModel):
    password: StrongPassword
    confirm_password: str = Field(alias="confirmPassword")

    _passwords_match = field_validator("confirm_password")(
        _confirm("password", "Passwords don't match")
    )


class CreateUserRequest(_EmailModel):
    password: str = Field(min_length=8)


class UpdateUserRequest(_RequestModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize(cls, value):
        return normalize_email(value) if isinstance(value, str) else value

    def changes(self) -> dict:
        changes = self.model_dump(exclude_none=True)
        if not changes:
            raise ValidationError(message="No data provided for update", code="NO_UPDATE_DATA")
        return changes


class ListUsersQuery(_RequestModel):
    page: QueryNumber = "1"
    limit: QueryNumber = "10"
    email: Optional[str] = None

    def as_kwargs(self) -> dict:
        return {"page": int(self.page), "limit": int(self.limit), "email": self.email or None}


def _field_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        cause = error.get("ctx", {}).get("error")
        message = str(cause) if isinstance(cause, Exception) else error["msg"]
        errors.setdefault(field, []).append(message)
    return errors


def validate_request(model: type[M], data: Mapping) -> M:
    """Validate ``data`` against ``model``; failures become field-level 400s."""

    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(_field_errors(exc)) from exc


def parse_user_id(raw: str) -> int:
    if not re.fullmatch(r"\d{1,%d}" % MAX_QUERY_DIGITS, raw or ""):
        raise ValidationError(message="Invalid user ID", code="INVALID_ID")
    return int(raw)
