"""
Shared fixtures for the hj test suite.
"""

from pathlib import Path

import pytest


DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def capture():
    """Load a capture file from tests/data as bytes."""
    def load(name: str) -> bytes:
        return (DATA_DIR / name).read_bytes()
    return load


@pytest.fixture(autouse=True)
def no_config_file(monkeypatch):
    """Keep a developer's HJ_CONFIG out of the tests."""
    monkeypatch.delenv("HJ_CONFIG", raising=False)
