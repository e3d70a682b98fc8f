"""
conftest.py - pytest fixtures for ksuid tests.
"""

from datetime import datetime, timezone

import pytest

from ksuid.configuration import Configuration, reset_config


@pytest.fixture(autouse=True)
def default_config():
    """Restore the process-wide generator after every test."""
    yield
    reset_config()


@pytest.fixture
def zero_payload():
    return bytes(16)


@pytest.fixture
def counting_config():
    """A configuration whose payloads are 1, 2, 3, ... in the last byte."""
    state = {"n": 0}

    def generator() -> bytes:
        state["n"] += 1
        return state["n"].to_bytes(16, byteorder="big")

    return Configuration(generator)


@pytest.fixture
def fixed_time():
    return datetime(2022, 8, 16, 11, 0, 0, tzinfo=timezone.utc)
