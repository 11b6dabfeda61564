"""Authentication blueprint: registration, login, profile and password flows."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, request

from errors import AuthenticationError
from services import get_services
from services.tokens import TokenPayload
from utils.auth_guard import auth_optional, auth_required
from utils.request_validation import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    parse_json_request,
    validate_request,
)
from utils.responses import success

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    """Register a new user and return it with an access token."""
    data = validate_request(RegisterRequest, parse_json_request(request, allow_empty=True))

    user, token = get_services().auth.register(data.email, data.password)
    return success(
        {"user": user.to_safe_dict(), "token": token},
        "User registered successfully",
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login():
    """Authenticate a user and return an access token."""
    data = validate_request(LoginRequest, parse_json_request(request, allow_empty=True))

    user, token = get_services().auth.login(data.email, data.password)
    return success({"user": user.to_safe_dict(), "token": token}, "Login successful")


@auth_bp.route("/profile", methods=["GET"])
@auth_required
def profile(identity: TokenPayload):
    user = get_services().auth.get_current_user(identity.user_id)
    return success({"user": user.to_safe_dict()}, "Profile retrieved successfully")


@auth_bp.route("/change-password", methods=["PUT"])
@auth_required
def change_password(identity: TokenPayload):
    data = validate_request(
        ChangePasswordRequest, parse_json_request(request, allow_empty=True)
    )

    user = get_services().auth.change_password(
        identity.user_id, data.current_password, data.new_password
    )
    return success({"user": user.to_safe_dict()}, "Password changed successfully")


@auth_bp.route("/forgot-password", methods=["POST"])
def forgot_password():
    """Always answer the same way, whether or not the email is registered."""
    data = validate_request(
        ForgotPasswordRequest, parse_json_request(request, allow_empty=True)
    )

    get_services().auth.forgot_password(data.email)
    return success(message="If the email exists, a reset link has been sent")


@auth_bp.route("/reset-password/<token>", methods=["POST"])
def reset_password(token: str):
    data = validate_request(
        ResetPasswordRequest, parse_json_request(request, allow_empty=True)
    )

    get_services().auth.reset_password(token, data.password)
    return success(message="Password reset successful")


@auth_bp.route("/logout", methods=["POST"])
@auth_required
def logout(identity: TokenPayload):
    # Tokens are stateless; the client discards its copy.
    return success(message="Logout successful")


@auth_bp.route("/verify", methods=["GET"])
@auth_optional
def verify(identity: TokenPayload | None):
    """Report whether the presented token resolves to an existing user."""
    if identity is None:
        raise AuthenticationError("Invalid token", "INVALID_TOKEN")

    user = get_services().auth.get_current_user(identity.user_id)
    return success(
        {
            "valid": True,
            "user": user.to_safe_dict(),
            "expiresAt": identity.expires_at.isoformat(),
        },
        "Token is valid",
    )
