"""Shared fixtures for all tests."""

import pytest

from charstats.character import CharacterStats, Stat
from charstats.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def base_stats() -> CharacterStats:
    """Character with 10 in every stat."""
    return CharacterStats(
        {
            Stat.STRENGTH: 10.0,
            Stat.INTELLIGENCE: 10.0,
            Stat.SWIFTNESS: 10.0,
        }
    )
