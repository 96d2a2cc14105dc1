from __future__ import annotations

from typing import Any, Dict, List, Optional

from models.person_record import PersonRecord
from sources.base import PeopleSource, filter_relevant, first_present, is_relevant_to_company, parse_json
from sources.registry import register


PEOPLE_FIELDS = [
    "identifier",
    "first_name",
    "last_name",
    "primary_job_title",
    "primary_organization",
    "linkedin",
]


def _entities(payload: Any) -> List[Dict[str, Any]]:
    """Entity list from either ``entities`` or ``data`` shaped responses."""
    if not isinstance(payload, dict):
        return []
    items = payload.get("entities")
    if not isinstance(items, list):
        items = payload.get("data")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]


def _properties(entity: Dict[str, Any]) -> Dict[str, Any]:
    props = entity.get("properties")
    return props if isinstance(props, dict) else entity


def _value(field: Any) -> Optional[str]:
    if isinstance(field, dict):
        field = first_present(field, ("value", "name", "permalink"))
    return str(field).strip() if field else None


def _person_name(props: Dict[str, Any]) -> Optional[str]:
    name = _value(props.get("identifier")) or _value(props.get("name"))
    if name:
        return name
    parts = [_value(props.get("first_name")), _value(props.get("last_name"))]
    return " ".join(p for p in parts if p) or None


class CrunchbasePeopleSource(PeopleSource):
    """Startup-database lookup: resolve the organization, then search its people by rank."""

    source_name = "crunchbase_people"

    def is_configured(self) -> bool:
        return bool(self.settings.crunchbase_api_key)

    async def _fetch(self, company_name: str, website: Optional[str]) -> List[PersonRecord]:
        base = self.settings.crunchbase_base_url.rstrip("/")
        headers = {"X-cb-user-key": self.settings.crunchbase_api_key or ""}
        async with self.client(headers=headers) as client:
            response = await self.request(
                client,
                "GET",
                f"{base}/autocompletes",
                params={"query": company_name, "collection_ids": "organizations", "limit": "5"},
            )
            organization_id = self._pick_organization(parse_json(response, self.source_name), company_name)
            if not organization_id:
                return []

            body = {
                "field_ids": PEOPLE_FIELDS,
                "query": [
                    {
                        "type": "predicate",
                        "field_id": "primary_organization",
                        "operator_id": "includes",
                        "values": [organization_id],
                    }
                ],
                "order": [{"field_id": "rank_person", "sort": "asc"}],
                "limit": 25,
            }
            response = await self.request(client, "POST", f"{base}/searches/people", json=body)
            payload = parse_json(response, self.source_name)

        people_props = [_properties(e) for e in _entities(payload)]

        def _relevant(props: Dict[str, Any]) -> bool:
            return is_relevant_to_company(
                company_name,
                _value(props.get("primary_organization")),
                _value(props.get("primary_job_title")),
            )

        selected = filter_relevant(people_props, _relevant, self.settings.relevance_min_results)
        people: List[PersonRecord] = []
        for props in selected[: self.settings.max_results_per_source]:
            record = self.make_record(
                _person_name(props),
                _value(props.get("primary_job_title")),
                profile_link=_value(props.get("linkedin")),
            )
            if record:
                people.append(record)
        return people

    @staticmethod
    def _pick_organization(payload: Any, company_name: str) -> Optional[str]:
        entities = _entities(payload)
        if not entities:
            return None
        for entity in entities:
            identifier = entity.get("identifier") or {}
            if isinstance(identifier, dict) and is_relevant_to_company(company_name, _value(identifier)):
                return identifier.get("uuid") or identifier.get("permalink")
        identifier = entities[0].get("identifier") or {}
        if isinstance(identifier, dict):
            return identifier.get("uuid") or identifier.get("permalink")
        return None


def _register():
    register(CrunchbasePeopleSource.source_name, CrunchbasePeopleSource)


_register()
