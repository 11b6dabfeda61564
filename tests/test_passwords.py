"""Tests for the password hasher."""

from __future__ import annotations

import pytest

from errors import HashingError
from services.passwords import PasswordHasher


@pytest.fixture()
def hasher() -> PasswordHasher:
    return PasswordHasher(method="pbkdf2:sha256:1000")


@pytest.mark.parametrize("password", ["abc12345", "p@ss w0rd with spaces", "ünïcödé1"])
def test_verify_accepts_the_hashed_password(hasher, password):
    assert hasher.verify(password, hasher.hash(password)) is True


def test_verify_rejects_other_passwords(hasher):
    stored = hasher.hash("abc12345")

    assert hasher.verify("abc12346", stored) is False
    assert hasher.verify("", stored) is False


def test_hash_is_salted_per_call(hasher):
    first = hasher.hash("abc12345")
    second = hasher.hash("abc12345")

    assert first != second
    assert "abc12345" not in first


def test_hash_carries_the_configured_method(hasher):
    assert hasher.hash("abc12345").startswith("pbkdf2:sha256:1000$")


@pytest.mark.parametrize("stored", ["", "not-a-hash", "pbkdf2:sha256$onlysalt", "$$"])
def test_verify_raises_on_malformed_hash(hasher, stored):
    with pytest.raises(HashingError):
        hasher.verify("abc12345", stored)


def test_verify_raises_on_unknown_method(hasher):
    with pytest.raises(HashingError):
        hasher.verify("abc12345", "rot13$salt$digest")


def test_hash_raises_on_unknown_method():
    with pytest.raises(HashingError):
        PasswordHasher(method="rot13").hash("abc12345")
