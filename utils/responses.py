"""JSON response envelope helpers."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Response, jsonify


def success(
    data: Any = None, message: str | None = None, status: int = HTTPStatus.OK
) -> tuple[Response, int]:
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def paginated_success(
    items: list, meta: dict, message: str | None = None
) -> tuple[Response, int]:
    body: dict[str, Any] = {"success": True, "data": items, "meta": meta}
    if message:
        body["message"] = message
    return jsonify(body), HTTPStatus.OK


def error_body(message: str, code: str | None = None, data: Any = None) -> dict:
    body: dict[str, Any] = {"success": False, "message": message}
    if code:
        body["code"] = code
    if data is not None:
        body["data"] = data
    return body
