"""Root-level pytest fixtures for all tests.

This module provides fixtures that are available to all tests in the project.
"""

import pytest
from loguru import logger

import test_helpers  # noqa: F401  (puts the repository root on sys.path)


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def no_sleep():
    """Replacement for time.sleep that records requested delays instead of waiting."""
    delays: list[float] = []

    def fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    fake_sleep.delays = delays  # type: ignore[attr-defined]
    return fake_sleep
