"""Shared pytest fixtures for bmap tests."""

import pytest
from unittest.mock import MagicMock

from bmap import BMap
from bmap.config import BMapConfig, ReentrancyPolicy, SerializationConfig


@pytest.fixture
def listener():
    """Create a mock listener."""
    return MagicMock()


@pytest.fixture
def seeded_map():
    """Create a map seeded with three integer entries."""
    return BMap([(1, 2), (3, 4), (5, 6)])


@pytest.fixture
def records_map():
    """Create a map of small records."""
    return BMap([(1, {"test": "hello"}), (2, {"test": "hi"})])


@pytest.fixture
def default_config():
    """Create a default BMapConfig."""
    return BMapConfig()


@pytest.fixture
def forbid_config():
    """Create a BMapConfig that rejects mutation from listeners."""
    return BMapConfig(reentrancy=ReentrancyPolicy.FORBID)


@pytest.fixture
def pretty_config():
    """Create a BMapConfig with indented, non-compact JSON output."""
    return BMapConfig(serialization=SerializationConfig(compact=False, indent=2))
