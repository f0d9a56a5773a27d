"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from prover import StubProvingService  # noqa: E402


@pytest.fixture
def stub_service() -> StubProvingService:
    """Fresh network-free proving backend per test."""
    return StubProvingService()
