"""Pytest configuration and fixtures for testing."""

import sys
from pathlib import Path

import pytest

# Add project root to path so the package imports without installation
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


@pytest.fixture(autouse=True)
def reset_config_registry():
    """Clear the registered ProxyConfig between tests."""
    from promptbridge.core import registry

    yield
    registry.set_config(None)
