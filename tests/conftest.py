"""Pytest configuration and shared fixtures."""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bob_cli.processor import CommandProcessor  # noqa: E402
from bob_cli.storage import Storage  # noqa: E402


FIXED_NOW = datetime(2025, 1, 1, 0, 0)


@pytest.fixture
def data_file(tmp_path):
    """Task file path inside a not-yet-existing directory."""
    return tmp_path / "data" / "bob.txt"


@pytest.fixture
def storage(data_file):
    return Storage(data_file)


@pytest.fixture
def processor(storage):
    """Processor with an empty task file and a fixed clock."""
    return CommandProcessor(storage, clock=lambda: FIXED_NOW)
