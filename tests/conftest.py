"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest

from fakes import RecordingNotifier, make_limiter


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "network: tests that talk to a local HTTP test server"
    )


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def limiter():
    return make_limiter()
