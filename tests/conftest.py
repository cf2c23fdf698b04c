import os
from unittest.mock import MagicMock

import pytest
from eventer import EventRegistry
from eventer.settings import Settings

ENV_VARS = ["LOG_LEVEL", "EVENTER_STRICT_CONTRACTS"]


@pytest.fixture(autouse=True)
def isolate_environment():
    """AUTOUSE: Removes eventer-related variables from the environment for the duration of a test,
    then restores the original environment.
    """
    original_environ = os.environ.copy()
    for name in ENV_VARS:
        os.environ.pop(name, None)

    yield  # Allow test to run

    os.environ.clear()
    os.environ.update(original_environ)


@pytest.fixture
def registry() -> EventRegistry[str]:
    """Provides an empty EventRegistry."""
    return EventRegistry()


@pytest.fixture
def listener() -> MagicMock:
    """Provides a mock listener that records its calls."""
    return MagicMock(name="listener")


@pytest.fixture
def mock_settings() -> MagicMock:
    """Provides a mock Settings instance."""
    settings = MagicMock(spec=Settings)
    settings.get_log_level.return_value = "INFO"
    settings.get_strict_contracts.return_value = True
    return settings
