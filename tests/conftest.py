import logging

import pytest

from seedforge import FactoryRegistry, default_registry
from seedforge.config.settings import reset_settings
from tests.mocks import MockModel


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Isolate tests from the environment, the default registry and saved models."""
    for name in (
        "SEEDFORGE_LOG_LEVEL",
        "SEEDFORGE_PATH_SEPARATOR",
        "SEEDFORGE_DEPRECATION_WARNINGS",
        "SEEDFORGE_TRACK_OPERATIONS",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    default_registry.clear()
    MockModel.saved.clear()

    yield

    reset_settings()
    default_registry.clear()


@pytest.fixture
def registry() -> FactoryRegistry:
    return FactoryRegistry()


@pytest.fixture
def events(caplog):
    """Structured events logged under the seedforge logger, as dicts."""
    caplog.set_level(logging.DEBUG, logger="seedforge")

    def collect(name=None):
        found = [
            record.structured_data
            for record in caplog.records
            if hasattr(record, "structured_data")
        ]
        if name is None:
            return found
        return [data for data in found if data["event"] == name]

    return collect
