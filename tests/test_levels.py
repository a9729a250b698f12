"""Tests for levels.py - severity ordering and conversion."""

import logging

import pytest

from colorline import InvalidLevel, Level


def test_levels_are_ordered():
    assert (
        Level.DEBUG
        < Level.INFO
        < Level.NOTICE
        < Level.WARNING
        < Level.ERROR
        < Level.CRITICAL
        < Level.ALERT
        < Level.EMERGENCY
    )


@pytest.mark.parametrize(
    "value, expected",
    [
        (Level.NOTICE, Level.NOTICE),
        (400, Level.ERROR),
        ("warning", Level.WARNING),
        (" Emergency ", Level.EMERGENCY),
    ],
)
def test_coerce(value, expected):
    assert Level.coerce(value) is expected


@pytest.mark.parametrize("value", [123, "verbose", True, None, 3.5])
def test_coerce_unknown(value):
    with pytest.raises(InvalidLevel) as excinfo:
        Level.coerce(value)
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.level == value


@pytest.mark.parametrize(
    "levelno, expected",
    [
        (logging.DEBUG, Level.DEBUG),
        (5, Level.DEBUG),
        (logging.INFO, Level.INFO),
        (25, Level.INFO),
        (logging.WARNING, Level.WARNING),
        (logging.ERROR, Level.ERROR),
        (logging.CRITICAL, Level.CRITICAL),
        (60, Level.CRITICAL),
    ],
)
def test_from_stdlib(levelno, expected):
    assert Level.from_stdlib(levelno) is expected
