from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional

from config.settings import get_settings
from models.discovery_result import KeyPeopleResult


def _provider_usage_for_run(run_id: str) -> Dict[str, Dict[str, int]]:
    """Aggregate provider calls from the trace file for the given run_id.

    Returns dict like { 'linkedin_people': {'calls': N, 'errors': E}, ... }
    """
    result: Dict[str, Dict[str, int]] = {}
    log_path = Path(get_settings().provider_log_path)
    if not log_path.exists():
        return result
    with log_path.open("r", encoding="utf-8") as f:
        for line in f:
            try:
                rec = json.loads(line)
            except ValueError:
                continue
            if not isinstance(rec, dict) or rec.get("run_id") != run_id:
                continue
            provider = rec.get("provider") or "unknown"
            bucket = result.setdefault(provider, {"calls": 0, "errors": 0})
            bucket["calls"] += 1
            if rec.get("status") != "ok":
                bucket["errors"] += 1
    return result


def print_summary(result: KeyPeopleResult, company_name: str, website: Optional[str] = None) -> None:
    """Print a human-readable summary of one discovery run."""
    flags = result.sources_used

    print("\n" + "="*60)
    print("KEY PEOPLE DISCOVERY - SUMMARY")
    print("="*60)
    print(f"Company: {company_name}")
    print(f"Website: {website or 'N/A'}")
    print(f"People Found: {len(result.people)}")
    print(f"Fallback Roster Used: {'yes' if result.used_fallback else 'no'}")
    print()
    print("Sources Used:")
    print(f"  Professional Network: {flags.professional_network}")
    print(f"  Startup Database: {flags.startup_database}")
    print(f"  Website Scrape: {flags.website_scrape}")
    print(f"  Email Directory: {flags.email_directory}")
    print()
    for i, person in enumerate(result.people, 1):
        print(f"{i}. {person.name} - {person.position} [{person.department}]")
        confidence = f" (confidence {person.email_confidence:.2f})" if person.email_confidence is not None else ""
        print(f"   Email: {person.email or 'N/A'}{confidence}")
        if person.profile_link:
            print(f"   Profile: {person.profile_link}")
    # Provider usage for current RUN_ID if tracing enabled
    run_id = os.getenv("RUN_ID")
    if run_id and get_settings().provider_trace:
        usage = _provider_usage_for_run(run_id)
        if usage:
            print()
            print("Provider Calls:")
            for provider, stats in usage.items():
                print(f"  {provider}: calls={stats.get('calls', 0)}, errors={stats.get('errors', 0)}")
    print("="*60)
