"""
Root pytest configuration.

Registers plugins for the whole suite and keeps test runs away from the
developer's environment: console logs at WARNING, no artificial loader
delays, and dashboard blobs written under a temporary directory.
"""

import pytest

from shared.config.settings import settings
from shared.logging.config import configure_logging

# Register pytest plugins at the root level
pytest_plugins = ["pytest_asyncio"]


def pytest_configure(config):
    configure_logging(log_level="WARNING", force=True)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Settings overrides applied to every test."""
    monkeypatch.setattr(settings, "mock_loader_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "simulated_query_delay_seconds", 0.0)
    monkeypatch.setattr(settings, "flange_api_url", "")
    monkeypatch.setattr(settings, "storage_dir", tmp_path / "dashboard_data")
    yield settings
