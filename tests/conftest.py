"""Shared fixtures."""

import tempfile
from pathlib import Path

import pytest
from loguru import logger


@pytest.fixture
def temp_store_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def _reset_logger():
    """Drop sinks added during a test (the CLI binds one to a captured stderr)."""
    yield
    logger.remove()
