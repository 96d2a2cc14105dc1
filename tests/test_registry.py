from __future__ import annotations

import pytest


def test_builtin_sources_registered():
    # Import package to trigger registration
    import sources  # noqa: F401
    from sources.registry import get_source, available_sources

    names = available_sources().keys()
    assert "linkedin_people" in names
    assert "crunchbase_people" in names
    assert "company_website" in names
    assert "hunter_directory" in names

    src = get_source("company_website")
    assert src.source_name == "company_website"
    assert src.is_configured() is True


def test_unknown_source_raises():
    from sources.registry import get_source
    with pytest.raises(KeyError):
        get_source("does_not_exist")


def test_every_source_has_a_route_and_flag():
    import sources  # noqa: F401
    from config.provider_routes import ROUTES, flag_for_source
    from sources.registry import available_sources

    for name in available_sources():
        assert name in ROUTES
    assert flag_for_source("linkedin_people") == "professional_network"
    assert flag_for_source("crunchbase_people") == "startup_database"
    assert flag_for_source("company_website") == "website_scrape"
    assert flag_for_source("hunter_directory") == "email_directory"


def test_keyed_sources_require_credentials(monkeypatch):
    from config.settings import get_settings
    from sources.registry import get_source

    assert get_source("linkedin_people").is_configured() is False
    assert get_source("hunter_directory").is_configured() is False

    monkeypatch.setenv("HUNTER_API_KEY", "dummy")
    get_settings.cache_clear()
    assert get_source("hunter_directory").is_configured() is True


def test_disabled_route_is_not_built(monkeypatch):
    from config import provider_routes
    from pipelines.discover_people import build_sources

    routes = {name: dict(route) for name, route in provider_routes.ROUTES.items()}
    routes["company_website"]["enabled"] = False
    monkeypatch.setattr("pipelines.discover_people.ROUTES", routes)

    names = [s.source_name for s in build_sources()]
    assert "company_website" not in names
    assert "linkedin_people" in names
