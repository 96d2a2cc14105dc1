from __future__ import annotations

from typing import Iterable, List

from models.person_record import PersonRecord
from services.departments import seniority_score


DEPARTMENT_PRIORITY = ["Executive", "Technology", "Finance", "Operations", "Marketing", "Sales"]
DEFAULT_LIMIT = 5


def department_rank(department: str) -> int:
    try:
        return DEPARTMENT_PRIORITY.index(department)
    except ValueError:
        return len(DEPARTMENT_PRIORITY)


def prioritize_people(people: Iterable[PersonRecord], limit: int = DEFAULT_LIMIT) -> List[PersonRecord]:
    """Department priority first, then title seniority (descending); keep the top ``limit``."""
    ranked = sorted(people, key=lambda p: (department_rank(p.department), -seniority_score(p.position)))
    return ranked[: max(limit, 0)]
