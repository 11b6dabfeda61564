"""Tests for configuration helpers."""

from datetime import timedelta

import pytest

from config import parse_duration


@pytest.mark.parametrize(
    "value, expected",
    [
        ("24h", timedelta(hours=24)),
        ("30m", timedelta(minutes=30)),
        ("7d", timedelta(days=7)),
        ("45s", timedelta(seconds=45)),
        ("3600", timedelta(seconds=3600)),
        (" 2H ", timedelta(hours=2)),
        (90, timedelta(seconds=90)),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "h", "24x", "-5m", "1.5h"])
def test_parse_duration_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_duration(value)
