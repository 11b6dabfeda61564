"""Application configuration module."""

import os
import re
from datetime import timedelta


_DURATION_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}
_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)


def parse_duration(value: str | int) -> timedelta:
    """Convert ``"24h"``, ``"30m"``, ``"7d"`` or a number of seconds to a timedelta."""

    if isinstance(value, int):
        return timedelta(seconds=value)

    match = _DURATION_PATTERN.match(value or "")
    if match is None:
        raise ValueError(f"Invalid duration: {value!r}")

    amount = int(match.group(1))
    unit = _DURATION_UNITS.get(match.group(2).lower() or "s")
    return timedelta(**{unit: amount})


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///app.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Tokens
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_EXPIRES_IN = os.getenv("JWT_EXPIRES_IN", "24h")
    JWT_ACCESS_TOKEN_EXPIRES = parse_duration(JWT_EXPIRES_IN)

    # Password hashing; the method string carries the work factor.
    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")
    PASSWORD_SALT_LENGTH = int(os.getenv("PASSWORD_SALT_LENGTH", "16"))

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Rate limiting
    RATE_LIMIT = os.getenv("RATE_LIMIT", "60 per minute")
    RATELIMIT_HEADERS_ENABLED = True
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_KEY_PREFIX = os.getenv("RATELIMIT_KEY_PREFIX", "")
