"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402

DEFAULT_PASSWORD = "abc12345"


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-signing-key-that-is-long-enough-for-hs256"
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    RATE_LIMIT = "1000 per minute"
    LOG_LEVEL = "DEBUG"


def build_app(**overrides) -> Flask:
    """Create an application with ``overrides`` applied to the test config."""

    class TestConfig(_BaseTestConfig):
        pass

    for key, value in overrides.items():
        setattr(TestConfig, key, value)

    return create_app(TestConfig)


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = build_app()

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def register(client: FlaskClient) -> Callable[..., dict]:
    """Register a user over HTTP and return the response ``data`` payload."""

    def _register(email: str, password: str = DEFAULT_PASSWORD) -> dict:
        response = client.post(
            "/auth/register",
            json={"email": email, "password": password, "confirmPassword": password},
        )
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]

    return _register


@pytest.fixture()
def auth_headers(register) -> dict[str, str]:
    """Authorization headers for a freshly registered user."""

    data = register("owner@example.com")
    return {"Authorization": f"Bearer {data['token']}"}
