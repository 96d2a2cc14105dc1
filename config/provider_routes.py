from __future__ import annotations

import os


# Central routing for people providers. Edit here to change per-provider defaults.
#
# Keys are source names registered in sources/registry.py. "flag" names the
# SourceFlags field the provider sets when it contributes a surviving record;
# "timeout_setting" names the Settings attribute bounding each network call.
ROUTES: dict[str, dict] = {
    "linkedin_people": {
        "flag": "professional_network",
        "timeout_setting": "linkedin_timeout_seconds",
        "operation": "search_people",
        "enabled": os.getenv("SOURCE_LINKEDIN_ENABLED", "true").lower() != "false",
    },
    "crunchbase_people": {
        "flag": "startup_database",
        "timeout_setting": "crunchbase_timeout_seconds",
        "operation": "search_people",
        "enabled": os.getenv("SOURCE_CRUNCHBASE_ENABLED", "true").lower() != "false",
    },
    "company_website": {
        "flag": "website_scrape",
        "timeout_setting": "website_timeout_seconds",
        "operation": "fetch_page",
        "enabled": os.getenv("SOURCE_WEBSITE_ENABLED", "true").lower() != "false",
    },
    "hunter_directory": {
        "flag": "email_directory",
        "timeout_setting": "hunter_timeout_seconds",
        "operation": "domain_search",
        "enabled": os.getenv("SOURCE_HUNTER_ENABLED", "true").lower() != "false",
    },
}


def flag_for_source(source_name: str) -> str | None:
    route = ROUTES.get(source_name)
    return route.get("flag") if route else None
