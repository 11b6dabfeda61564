"""Data access layer."""

from .users import UserRepository

__all__ = ["UserRepository"]
