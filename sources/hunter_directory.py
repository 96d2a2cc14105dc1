from __future__ import annotations

from typing import Any, Dict, List, Optional

from models.person_record import PersonRecord
from services.domain_utils import domain_from_website, extract_apex_domain
from sources.base import PeopleSource, parse_json
from sources.registry import register


def _emails(payload: Any) -> List[Dict[str, Any]]:
    data = payload.get("data") if isinstance(payload, dict) else None
    emails = data.get("emails") if isinstance(data, dict) else None
    if not isinstance(emails, list):
        return []
    return [e for e in emails if isinstance(e, dict)]


class HunterDirectorySource(PeopleSource):
    """Domain email directory (Hunter domain-search): people with provider-supplied addresses."""

    source_name = "hunter_directory"

    def is_configured(self) -> bool:
        return bool(self.settings.hunter_api_key)

    async def _fetch(self, company_name: str, website: Optional[str]) -> List[PersonRecord]:
        params: Dict[str, str] = {
            "api_key": self.settings.hunter_api_key or "",
            "limit": str(self.settings.max_results_per_source),
            "type": "personal",
        }
        domain = extract_apex_domain(domain_from_website(website)) if website else None
        if domain:
            params["domain"] = domain
        else:
            params["company"] = company_name

        url = f"{self.settings.hunter_base_url.rstrip('/')}/domain-search"
        async with self.client() as client:
            response = await self.request(client, "GET", url, params=params)
            payload = parse_json(response, self.source_name)

        people: List[PersonRecord] = []
        for entry in _emails(payload):
            name = " ".join(p for p in (entry.get("first_name"), entry.get("last_name")) if p)
            record = self.make_record(
                name,
                entry.get("position"),
                email=entry.get("value"),
                profile_link=entry.get("linkedin"),
            )
            if record:
                people.append(record)
        return people[: self.settings.max_results_per_source]


def _register():
    register(HunterDirectorySource.source_name, HunterDirectorySource)


_register()
