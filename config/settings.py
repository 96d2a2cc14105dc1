from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


DEFAULT_TEAM_PAGES = [
    "/team",
    "/about",
    "/about-us",
    "/leadership",
    "/management",
    "/executives",
    "/staff",
    "/people",
    "/our-team",
    "/founders",
    "/board",
]


@dataclass(frozen=True)
class Settings:
    # Provider credentials (absence disables the adapter)
    rapidapi_key: str | None
    crunchbase_api_key: str | None
    hunter_api_key: str | None

    # Endpoints
    linkedin_search_url: str
    linkedin_rapidapi_host: str
    crunchbase_base_url: str
    hunter_base_url: str

    # Timeouts (seconds)
    linkedin_timeout_seconds: float
    crunchbase_timeout_seconds: float
    website_timeout_seconds: float
    hunter_timeout_seconds: float
    verifier_timeout_seconds: float

    # Retries
    provider_max_retries: int
    provider_backoff_seconds: float

    # Limits
    max_key_people: int
    relevance_min_results: int
    max_results_per_source: int
    website_max_pages: int
    website_target_candidates: int

    scraper_user_agent: str
    log_level: str
    run_env: str

    linkedin_search_location: str | None = None
    team_pages: list[str] = field(default_factory=lambda: list(DEFAULT_TEAM_PAGES))

    # Logging/tracing
    provider_trace: bool = False
    provider_log_path: str = "logs/provider_calls.jsonl"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    pages_raw = os.getenv("WEBSITE_TEAM_PAGES")
    team_pages = [p.strip() for p in pages_raw.split(",") if p.strip()] if pages_raw else list(DEFAULT_TEAM_PAGES)
    return Settings(
        rapidapi_key=os.getenv("RAPIDAPI_KEY") or None,
        crunchbase_api_key=os.getenv("CRUNCHBASE_API_KEY") or None,
        hunter_api_key=os.getenv("HUNTER_API_KEY") or None,
        linkedin_search_url=os.getenv("LINKEDIN_SEARCH_URL", "https://linkedin-api8.p.rapidapi.com/search/people"),
        linkedin_rapidapi_host=os.getenv("LINKEDIN_RAPIDAPI_HOST", "linkedin-api8.p.rapidapi.com"),
        crunchbase_base_url=os.getenv("CRUNCHBASE_BASE_URL", "https://api.crunchbase.com/api/v4"),
        hunter_base_url=os.getenv("HUNTER_BASE_URL", "https://api.hunter.io/v2"),
        linkedin_timeout_seconds=float(os.getenv("LINKEDIN_TIMEOUT", "10")),
        crunchbase_timeout_seconds=float(os.getenv("CRUNCHBASE_TIMEOUT", "15")),
        website_timeout_seconds=float(os.getenv("WEBSITE_TIMEOUT", "15")),
        hunter_timeout_seconds=float(os.getenv("HUNTER_TIMEOUT", "12")),
        verifier_timeout_seconds=float(os.getenv("VERIFIER_TIMEOUT", "10")),
        provider_max_retries=int(os.getenv("PROVIDER_MAX_RETRIES", "1")),
        provider_backoff_seconds=float(os.getenv("PROVIDER_BACKOFF_SECONDS", "1")),
        max_key_people=int(os.getenv("MAX_KEY_PEOPLE", "5")),
        relevance_min_results=int(os.getenv("RELEVANCE_MIN_RESULTS", "3")),
        max_results_per_source=int(os.getenv("MAX_RESULTS_PER_SOURCE", "10")),
        website_max_pages=int(os.getenv("WEBSITE_MAX_PAGES", "8")),
        website_target_candidates=int(os.getenv("WEBSITE_TARGET_CANDIDATES", "10")),
        scraper_user_agent=os.getenv(
            "SCRAPER_USER_AGENT", "Mozilla/5.0 (compatible; KeyPeopleFinder/1.0; lead qualification)"
        ),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        run_env=os.getenv("RUN_ENV", "local"),
        linkedin_search_location=os.getenv("LINKEDIN_SEARCH_LOCATION") or None,
        team_pages=team_pages,
        provider_trace=_as_bool(os.getenv("PROVIDER_TRACE")),
        provider_log_path=os.getenv("PROVIDER_LOG_PATH", "logs/provider_calls.jsonl"),
    )
