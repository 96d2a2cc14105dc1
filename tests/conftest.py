from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'pipelines.steps.collect_people'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


PROVIDER_ENV = (
    "RAPIDAPI_KEY",
    "CRUNCHBASE_API_KEY",
    "HUNTER_API_KEY",
    "LINKEDIN_SEARCH_LOCATION",
    "WEBSITE_TEAM_PAGES",
    "PROVIDER_TRACE",
)


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    # No real credentials leak into tests; retries do not sleep
    for key in PROVIDER_ENV:
        monkeypatch.setenv(key, "")
    monkeypatch.setenv("PROVIDER_BACKOFF_SECONDS", "0")
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
