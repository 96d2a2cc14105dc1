from __future__ import annotations

from typing import List, Protocol

from models.person_record import PersonRecord


class FallbackPort(Protocol):
    def generate(self, company_name: str, domain: str) -> List[PersonRecord]:
        ...
