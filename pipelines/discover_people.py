from __future__ import annotations

import asyncio
import logging
import os
import uuid
from typing import List, Optional, Sequence

from config.provider_routes import ROUTES
from config.settings import Settings, get_settings
from models.discovery_result import KeyPeopleResult
from models.person_record import PersonRecord
from models.source_flags import SourceFlags
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import CollectPeople, DeduplicatePeople, EnrichEmails, PrioritizePeople, ValidatePeople
from ports.fallback import FallbackPort
from ports.source import PeopleSourcePort
from ports.verifier import EmailVerifierPort
from services.domain_utils import resolve_email_domain
from services.email_verifier import EmailVerifier
from services.fallback_roster import FallbackRoster
from services.prioritizer import DEFAULT_LIMIT
from sources.registry import available_sources


logger = logging.getLogger(__name__)

# Sentinel: use the built-in roster unless the caller passes one (or None to disable)
DEFAULT_FALLBACK = object()


def build_sources(settings: Optional[Settings] = None) -> List[PeopleSourcePort]:
    """Fresh instances of every registered, enabled source for one invocation."""
    import sources  # noqa: F401  (registers built-in sources)

    built: List[PeopleSourcePort] = []
    for name, factory in available_sources().items():
        if not ROUTES.get(name, {}).get("enabled", True):
            continue
        built.append(factory(settings=settings))
    return built


def build_pipeline(
    sources: Sequence[PeopleSourcePort],
    verifier: EmailVerifierPort,
    limit: int,
) -> Pipeline:
    # Callers always get 1..5 people, whatever MAX_KEY_PEOPLE says
    limit = max(1, min(limit, DEFAULT_LIMIT))
    return Pipeline([
        CollectPeople(sources),
        ValidatePeople(),
        DeduplicatePeople(),
        EnrichEmails(verifier),
        PrioritizePeople(limit),
    ])


async def discover_key_people(
    company_name: str,
    website: Optional[str] = None,
    *,
    sources: Optional[Sequence[PeopleSourcePort]] = None,
    verifier: Optional[EmailVerifierPort] = None,
    fallback=DEFAULT_FALLBACK,
    settings: Optional[Settings] = None,
) -> KeyPeopleResult:
    """Find up to five key people for a company.

    Never raises: provider failures shrink the input, and an empty or failed
    run is answered by the fallback roster (tagged with all source flags off).
    Pass ``fallback=None`` to disable the roster, e.g. in tests.
    """
    roster: Optional[FallbackPort] = FallbackRoster() if fallback is DEFAULT_FALLBACK else fallback
    domain = resolve_email_domain(company_name, website)
    run_id = os.getenv("RUN_ID") or uuid.uuid4().hex
    ctx = RunContext(company_name=company_name, website=website, domain=domain, meta={"run_id": run_id})

    people: List[PersonRecord] = []
    try:
        settings = settings or get_settings()
        active_sources = list(sources) if sources is not None else build_sources(settings)
        pipeline = build_pipeline(active_sources, verifier or EmailVerifier(settings=settings), settings.max_key_people)
        ctx = await pipeline.run(ctx)
        people = list(ctx.people)
    except Exception:
        logger.exception(
            "discovery pipeline failed",
            extra={"step": "discover", "status": "error", "run_id": run_id},
        )
        people = []

    if people:
        return KeyPeopleResult(people=people, sources_used=SourceFlags.from_people(people))

    if roster is None:
        return KeyPeopleResult()
    logger.warning(
        "no usable people found; returning fallback roster",
        extra={"step": "fallback", "status": "fallback", "run_id": run_id},
    )
    return KeyPeopleResult(
        people=roster.generate(company_name, domain),
        sources_used=SourceFlags(),
        used_fallback=True,
    )


def discover_key_people_sync(company_name: str, website: Optional[str] = None, **kwargs) -> KeyPeopleResult:
    return asyncio.run(discover_key_people(company_name, website, **kwargs))
