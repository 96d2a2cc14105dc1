from __future__ import annotations

import json
import sys
from typing import List

from models.discovery_result import KeyPeopleResult
from models.person_record import PersonRecord
from models.source_flags import SourceFlags


def _run_cli_with_args(args_list: List[str]) -> None:
    """Run cli.py main() with provided argv in-process (no subprocess)."""
    argv_backup = sys.argv[:]
    try:
        sys.argv = ["cli.py"] + args_list
        # Import fresh so patched pipeline functions are picked up
        if "cli" in sys.modules:
            del sys.modules["cli"]
        import cli  # type: ignore
        try:
            cli.main()  # type: ignore[attr-defined]
        except SystemExit as e:
            code = int(getattr(e, "code", 0) or 0)
            if code not in (0, None):
                raise
    finally:
        sys.argv = argv_backup


def _stub_result() -> KeyPeopleResult:
    return KeyPeopleResult(
        people=[
            PersonRecord(
                name="John Doe",
                position="CEO",
                email="john.doe@techcorp.com",
                department="Executive",
                email_confidence=0.7,
            )
        ],
        sources_used=SourceFlags(website_scrape=True),
    )


def test_cli_discover_json(monkeypatch, capsys):
    calls = []

    def _fake(company, website=None, **kwargs):
        calls.append((company, website))
        return _stub_result()

    monkeypatch.setattr("pipelines.discover_people.discover_key_people_sync", _fake)
    _run_cli_with_args(["discover", "--company", "TechCorp", "--website", "https://techcorp.com", "--json"])

    assert calls == [("TechCorp", "https://techcorp.com")]
    data = json.loads(capsys.readouterr().out)
    assert data["people"][0]["email"] == "john.doe@techcorp.com"
    assert data["sourcesUsed"]["websiteScrape"] is True
    assert data["usedFallback"] is False


def test_cli_discover_summary(monkeypatch, capsys):
    monkeypatch.setattr("pipelines.discover_people.discover_key_people_sync", lambda *a, **k: _stub_result())
    _run_cli_with_args(["discover", "-c", "TechCorp"])

    out = capsys.readouterr().out
    assert "KEY PEOPLE DISCOVERY - SUMMARY" in out
    assert "John Doe - CEO [Executive]" in out
    assert "Website: N/A" in out
    assert "(confidence 0.70)" in out


def test_cli_predict_email_without_credentials(capsys):
    _run_cli_with_args(["predict-email", "--name", "Dr. Jane Roe", "--company", "Acme Corp"])
    data = json.loads(capsys.readouterr().out)
    assert data["domain"] == "acme.com"
    assert data["email"] == "jane.roe@acme.com"
    assert data["source"] == "fallback"
    assert data["verified"] is False


def test_cli_verify_email_rejects_malformed(capsys):
    _run_cli_with_args(["verify-email", "not-an-email"])
    data = json.loads(capsys.readouterr().out)
    assert data["isValid"] is False
    assert data["confidence"] == 0


def test_cli_sources_lists_configuration(monkeypatch, capsys):
    monkeypatch.setenv("HUNTER_API_KEY", "dummy")
    from config.settings import get_settings
    get_settings.cache_clear()

    _run_cli_with_args(["sources"])
    rows = {row["source"]: row["configured"] for row in json.loads(capsys.readouterr().out)}
    assert rows["hunter_directory"] is True
    assert rows["linkedin_people"] is False
    assert rows["company_website"] is True
