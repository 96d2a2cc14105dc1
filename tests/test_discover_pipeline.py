from __future__ import annotations

from typing import List, Optional

import httpx
import pytest
import respx

from config.settings import get_settings
from models.email_verification import EmailVerification
from models.person_record import PersonRecord
from pipelines.discover_people import discover_key_people, discover_key_people_sync
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import CollectPeople, DeduplicatePeople, EnrichEmails, PrioritizePeople, ValidatePeople


class StubSource:
    def __init__(self, source_name: str, people: Optional[List[PersonRecord]] = None, error: Optional[Exception] = None):
        self.source_name = source_name
        self.people = people or []
        self.error = error
        self.calls = 0

    def is_configured(self) -> bool:
        return True

    async def fetch(self, company_name: str, website: Optional[str] = None) -> List[PersonRecord]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return [p.model_copy() for p in self.people]


class HeuristicOnlyVerifier:
    async def verify(self, email: str) -> EmailVerification:
        return EmailVerification(email=email, is_valid=False, confidence=0.5, result="unknown", source="fallback")


class BrokenVerifier:
    async def verify(self, email: str) -> EmailVerification:
        raise RuntimeError("verifier exploded")


def _p(name, position, source, **kw):
    return PersonRecord(name=name, position=position, sources=[source], **kw)


@pytest.mark.asyncio
async def test_merges_sources_and_sets_flags():
    linkedin = StubSource("linkedin_people", [
        _p("John Doe", "CEO", "linkedin_people", profile_link="https://linkedin.com/in/johndoe", department="Executive"),
    ])
    website = StubSource("company_website", [
        _p("John Doe", "Chief Executive Officer", "company_website", email="john@techcorp.com", department="Executive"),
        _p("Jane Roe", "CTO", "company_website", department="Technology"),
    ])
    result = await discover_key_people(
        "TechCorp", "https://techcorp.com", sources=[linkedin, website], verifier=HeuristicOnlyVerifier()
    )
    assert result.used_fallback is False
    assert [p.name for p in result.people] == ["John Doe", "Jane Roe"]
    john, jane = result.people
    assert john.email == "john@techcorp.com"
    assert john.profile_link == "https://linkedin.com/in/johndoe"
    assert john.email_confidence is None
    assert jane.email == "jane.roe@techcorp.com"
    assert jane.email_confidence == pytest.approx(0.5)
    assert jane.email_verified is False

    flags = result.sources_used
    assert flags.professional_network is True
    assert flags.website_scrape is True
    assert flags.startup_database is False
    assert flags.email_directory is False


@pytest.mark.asyncio
async def test_raising_source_does_not_cancel_siblings():
    good = StubSource("crunchbase_people", [_p("Ann Lee", "COO", "crunchbase_people")])
    bad = StubSource("linkedin_people", error=RuntimeError("boom"))
    result = await discover_key_people("Acme", None, sources=[bad, good], verifier=HeuristicOnlyVerifier())
    assert bad.calls == 1 and good.calls == 1
    assert [p.name for p in result.people] == ["Ann Lee"]
    assert result.sources_used.startup_database is True
    assert result.sources_used.professional_network is False


@pytest.mark.asyncio
async def test_invalid_records_are_dropped_before_fallback():
    noisy = StubSource("company_website", [
        _p("http://spam.example", "CEO", "company_website"),
        _p("Jo", "", "company_website"),
    ])
    result = await discover_key_people("Acme Corp", None, sources=[noisy], verifier=HeuristicOnlyVerifier())
    assert result.used_fallback is True
    assert all("@acme.com" in p.email for p in result.people)


@pytest.mark.asyncio
async def test_result_is_capped_at_five():
    many = StubSource("linkedin_people", [
        _p(name, "Engineer", "linkedin_people")
        for name in ("Ada Ames", "Ben Bell", "Cy Cole", "Di Dean", "Ed Eng", "Flo Fox", "Gus Gray")
    ])
    result = await discover_key_people("Acme", "acme.com", sources=[many], verifier=HeuristicOnlyVerifier())
    assert len(result.people) == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("configured,expected", [("8", 5), ("0", 1), ("2", 2)])
async def test_max_key_people_stays_within_one_to_five(monkeypatch, configured, expected):
    monkeypatch.setenv("MAX_KEY_PEOPLE", configured)
    get_settings.cache_clear()
    many = StubSource("linkedin_people", [
        _p(name, "Engineer", "linkedin_people")
        for name in ("Ada Ames", "Ben Bell", "Cy Cole", "Di Dean", "Ed Eng", "Flo Fox", "Gus Gray")
    ])
    result = await discover_key_people("Acme", "acme.com", sources=[many], verifier=HeuristicOnlyVerifier())
    assert result.used_fallback is False
    assert len(result.people) == expected


@pytest.mark.asyncio
async def test_all_providers_failing_returns_fallback(monkeypatch):
    for key in ("RAPIDAPI_KEY", "CRUNCHBASE_API_KEY", "HUNTER_API_KEY"):
        monkeypatch.setenv(key, "dummy")
    get_settings.cache_clear()

    with respx.mock() as router:
        router.route().mock(side_effect=httpx.ConnectError)
        result = await discover_key_people("TechCorp", "https://techcorp.com")

    assert result.used_fallback is True
    assert 3 <= len(result.people) <= 5
    assert not result.sources_used.any()
    for person in result.people:
        assert "techcorp.com" in person.email


@pytest.mark.asyncio
async def test_company_name_domain_when_no_website():
    result = await discover_key_people("Acme Corp", None, sources=[])
    assert result.used_fallback is True
    assert all("@acme.com" in p.email for p in result.people)


@pytest.mark.asyncio
async def test_verifier_errors_keep_real_people():
    source = StubSource("linkedin_people", [_p("John Doe", "CEO", "linkedin_people")])
    result = await discover_key_people("Acme", None, sources=[source], verifier=BrokenVerifier())
    assert result.used_fallback is False
    assert [p.name for p in result.people] == ["John Doe"]
    assert result.people[0].email == "john.doe@acme.com"
    assert result.people[0].email_confidence is None
    assert result.people[0].email_verified is False
    assert result.sources_used.professional_network is True


@pytest.mark.asyncio
async def test_unexpected_pipeline_error_still_answers(monkeypatch):
    source = StubSource("linkedin_people", [_p("John Doe", "CEO", "linkedin_people")])

    def _explode(*args, **kwargs):
        raise RuntimeError("dedup exploded")

    monkeypatch.setattr("pipelines.steps.deduplicate_people.deduplicate_people", _explode)
    result = await discover_key_people("Acme", None, sources=[source], verifier=HeuristicOnlyVerifier())
    assert result.used_fallback is True
    assert 3 <= len(result.people) <= 5


@pytest.mark.asyncio
async def test_fallback_can_be_disabled_or_replaced():
    empty = await discover_key_people("Acme", None, sources=[], fallback=None)
    assert empty.people == []
    assert empty.used_fallback is False

    class OnePerson:
        def generate(self, company_name, domain):
            return [PersonRecord(name="Only One", position="Owner", email=f"only@{domain}")]

    custom = await discover_key_people("Acme", "acme.io", sources=[], fallback=OnePerson())
    assert [p.email for p in custom.people] == ["only@acme.io"]
    assert custom.used_fallback is True


def test_sync_wrapper():
    result = discover_key_people_sync("Acme", None, sources=[], fallback=None)
    assert result.people == []


@pytest.mark.asyncio
async def test_steps_record_meta():
    source = StubSource("hunter_directory", [
        _p("Jane Roe", "VP Marketing", "hunter_directory", email="jane@acme.com"),
        _p("Jane Roe", "VP of Marketing", "hunter_directory"),
    ])
    pipeline = Pipeline([
        CollectPeople([source]),
        ValidatePeople(),
        DeduplicatePeople(),
        EnrichEmails(HeuristicOnlyVerifier()),
        PrioritizePeople(5),
    ])
    ctx = await pipeline.run(RunContext(company_name="Acme", domain="acme.com"))
    assert ctx.meta["source_counts"] == {"hunter_directory": 2}
    assert ctx.meta["duplicates_merged"] == 1
    assert ctx.meta["emails_predicted"] == 0
    assert ctx.meta["validation_stats"]["valid_people"] == 2
    assert [p.email for p in ctx.people] == ["jane@acme.com"]


def test_result_serializes_with_camel_case_aliases():
    from models.discovery_result import KeyPeopleResult
    from models.source_flags import SourceFlags

    result = KeyPeopleResult(
        people=[PersonRecord(name="Ann Lee", position="CTO", profile_link="https://linkedin.com/in/annlee")],
        sources_used=SourceFlags(website_scrape=True),
    )
    data = result.model_dump(by_alias=True)
    assert data["sourcesUsed"]["websiteScrape"] is True
    assert data["usedFallback"] is False
    assert data["people"][0]["profileLink"] == "https://linkedin.com/in/annlee"
