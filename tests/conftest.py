"""Shared fixtures: isolated environment and fresh logging/tracing state."""

import pytest

from jarvis.core.config import Settings
from jarvis.core.logging import reset_logging
from jarvis.core.tracing import reset_tracing

SETTINGS_ENV_VARS = [name.upper() for name in Settings.model_fields]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Unset every recognized variable and run from an empty directory (no .env)."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_logging()
    reset_tracing()
    yield
    reset_logging()
    reset_tracing()
