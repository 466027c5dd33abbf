"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os

import pytest

from flexbin import INTEGER, STRING, Schema


@pytest.fixture
def person_schema() -> Schema:
    """Two-field schema used throughout the envelope tests."""
    return Schema.new([("name", STRING), ("age", INTEGER)])


@pytest.fixture
def person_value() -> dict:
    """Value matching person_schema."""
    return {"name": "Ada", "age": 30}


@pytest.fixture
def encryption_key() -> bytes:
    """Random 256-bit encryption key."""
    return os.urandom(32)


@pytest.fixture
def signing_key() -> bytes:
    """Random 256-bit signing key."""
    return os.urandom(32)


@pytest.fixture
def sample_payload() -> bytes:
    """Sample binary payload for testing."""
    return b"Hello, envelope world!"
