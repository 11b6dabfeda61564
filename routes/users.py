"""User administration blueprint with paginated listing."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, request

from services import get_services
from services.tokens import TokenPayload
from utils.auth_guard import auth_required
from utils.request_validation import (
    CreateUserRequest,
    ListUsersQuery,
    UpdateUserRequest,
    parse_json_request,
    parse_user_id,
    validate_request,
)
from utils.responses import paginated_success, success

users_bp = Blueprint("users", __name__)


@users_bp.route("", methods=["GET"])
@auth_required
def list_users(identity: TokenPayload):
    """Return users newest first, filtered by an optional email substring."""

    query = validate_request(ListUsersQuery, request.args.to_dict())
    page = get_services().users.list_users(**query.as_kwargs())
    return paginated_success(
        [user.to_safe_dict() for user in page.items],
        page.meta(),
        "Users retrieved successfully",
    )


@users_bp.route("", methods=["POST"])
@auth_required
def create_user(identity: TokenPayload):
    data = validate_request(CreateUserRequest, parse_json_request(request, allow_empty=True))

    user = get_services().users.create_user(data.email, data.password)
    return success({"user": user.to_safe_dict()}, "User created successfully", HTTPStatus.CREATED)


@users_bp.route("/<user_id>", methods=["GET"])
@auth_required
def get_user(user_id: str, identity: TokenPayload):
    user = get_services().users.get_user(parse_user_id(user_id))
    return success({"user": user.to_safe_dict()}, "User retrieved successfully")


@users_bp.route("/<user_id>", methods=["PUT"])
@auth_required
def update_user(user_id: str, identity: TokenPayload):
    target_id = parse_user_id(user_id)
    data = validate_request(UpdateUserRequest, parse_json_request(request, allow_empty=True))

    user = get_services().users.update_user(target_id, **data.changes())
    return success({"user": user.to_safe_dict()}, "User updated successfully")


@users_bp.route("/<user_id>", methods=["DELETE"])
@auth_required
def delete_user(user_id: str, identity: TokenPayload):
    user = get_services().users.delete_user(parse_user_id(user_id))
    return success({"user": user.to_safe_dict()}, "User deleted successfully")
