"""
Shared fixtures for Clack tests.
"""

from datetime import datetime, timezone

import pytest


@pytest.fixture
def timestamp() -> datetime:
    """A fixed point in time, so messages built separately can compare equal."""
    return datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any Clack settings inherited from the surrounding environment."""
    for name in (
        "CLACK_SERVER_HOST",
        "CLACK_SERVER_PORT",
        "CLACK_USERNAME",
        "CLACK_CIPHER_KEY",
        "CLACK_CIPHER_ALPHABET",
        "CLACK_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
