"""Shared fixtures and markers for phonver tests."""

import pytest

from phonver.core.config import DEFAULT_CONFIG_PATH, VersionConfig
from phonver.core.context import VersionContext
from phonver.core.syllables import DEFAULT_SYLLABLES_PATH, SyllableInventory
from phonver.engine.pipeline import PhoneticVersioner


def pytest_configure(config):
    config.addinivalue_line("markers", "db: requires PostgreSQL connection")


@pytest.fixture(scope="session")
def context():
    """Bundled inventory and configuration, independent of PHONVER_* variables."""
    return VersionContext.load(DEFAULT_SYLLABLES_PATH, DEFAULT_CONFIG_PATH)


@pytest.fixture
def versioner(context):
    return PhoneticVersioner(context)


@pytest.fixture
def small_inventory():
    """Prefix-free base-8 inventory."""
    return SyllableInventory(["ba", "ko", "lu", "mi", "brak", "stel", "ai", "ou"], "test-8")


@pytest.fixture
def small_context(small_inventory):
    return VersionContext(small_inventory, VersionConfig())
