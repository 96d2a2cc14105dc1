from __future__ import annotations

from typing import Any, Dict, List, Optional

from models.person_record import PersonRecord
from sources.base import PeopleSource, filter_relevant, first_present, is_relevant_to_company, parse_json
from sources.registry import register


NAME_KEYS = ("name", "fullName", "full_name")
POSITION_KEYS = ("headline", "currentPosition", "title", "position", "occupation")
PROFILE_KEYS = ("profileUrl", "publicProfileUrl", "profileURL", "url", "linkedinUrl")
COMPANY_KEYS = ("company", "currentCompany", "companyName")


def _items(payload: Any) -> List[Dict[str, Any]]:
    """Profile objects from either response shape: ``data`` (list or ``data.items``) or ``elements``."""
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        data = payload.get("elements")
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, dict)]


def _text(value: Any) -> Optional[str]:
    # Some shapes nest company/position as {"name": ...} objects
    if isinstance(value, dict):
        value = first_present(value, ("name", "title", "text"))
    return str(value).strip() if value else None


def _full_name(item: Dict[str, Any]) -> Optional[str]:
    name = _text(first_present(item, NAME_KEYS))
    if name:
        return name
    first = _text(item.get("firstName"))
    last = _text(item.get("lastName"))
    return " ".join(p for p in (first, last) if p) or None


class LinkedInPeopleSource(PeopleSource):
    """Professional-network people search via the RapidAPI LinkedIn endpoint."""

    source_name = "linkedin_people"

    def is_configured(self) -> bool:
        return bool(self.settings.rapidapi_key)

    async def _fetch(self, company_name: str, website: Optional[str]) -> List[PersonRecord]:
        headers = {
            "X-RapidAPI-Key": self.settings.rapidapi_key or "",
            "X-RapidAPI-Host": self.settings.linkedin_rapidapi_host,
        }
        params = {"keywords": company_name, "start": "0"}
        if self.settings.linkedin_search_location:
            params["geo"] = self.settings.linkedin_search_location

        async with self.client(headers=headers) as client:
            response = await self.request(client, "GET", self.settings.linkedin_search_url, params=params)
            payload = parse_json(response, self.source_name)

        items = _items(payload)

        def _relevant(item: Dict[str, Any]) -> bool:
            return is_relevant_to_company(
                company_name,
                _text(first_present(item, COMPANY_KEYS)),
                _text(first_present(item, POSITION_KEYS)),
            )

        selected = filter_relevant(items, _relevant, self.settings.relevance_min_results)
        people: List[PersonRecord] = []
        for item in selected[: self.settings.max_results_per_source]:
            record = self.make_record(
                _full_name(item),
                _text(first_present(item, POSITION_KEYS)),
                email=None,
                profile_link=_text(first_present(item, PROFILE_KEYS)),
            )
            if record:
                people.append(record)
        return people


def _register():
    register(LinkedInPeopleSource.source_name, LinkedInPeopleSource)


_register()
