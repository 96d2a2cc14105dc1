from __future__ import annotations

from typing import List, Optional, Protocol

from models.person_record import PersonRecord


class PeopleSourcePort(Protocol):
    source_name: str

    def is_configured(self) -> bool:
        ...

    async def fetch(self, company_name: str, website: Optional[str] = None) -> List[PersonRecord]:
        ...
