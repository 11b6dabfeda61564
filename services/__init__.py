"""Service wiring.

Services are built once per application by :func:`init_services` and kept in
``app.extensions`` so that every app (including each test app) has its own
instances.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app

from models import db
from repositories.users import UserRepository
from services.auth import AuthService
from services.passwords import PasswordHasher
from services.tokens import TokenService
from services.users import UserService

EXTENSION_KEY = "services"


@dataclass
class Services:
    hasher: PasswordHasher
    tokens: TokenService
    users: UserService
    auth: AuthService


def init_services(app: Flask) -> Services:
    hasher = PasswordHasher(
        method=app.config["PASSWORD_HASH_METHOD"],
        salt_length=app.config["PASSWORD_SALT_LENGTH"],
    )
    tokens = TokenService(expires=app.config["JWT_ACCESS_TOKEN_EXPIRES"])
    repository = UserRepository(db.session)

    services = Services(
        hasher=hasher,
        tokens=tokens,
        users=UserService(repository, hasher),
        auth=AuthService(repository, hasher, tokens, app.logger),
    )
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
