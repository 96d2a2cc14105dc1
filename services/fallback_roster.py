from __future__ import annotations

import hashlib
import random
from typing import List, Optional, Tuple

from models.person_record import PersonRecord
from services.departments import extract_department
from services.domain_utils import FALLBACK_DOMAIN
from services.email_predictor import predict_email
from services.prioritizer import prioritize_people


MIN_PEOPLE = 3
MAX_PEOPLE = 5

# (name, position, linkedin slug or None); the first two are always included
_LEADERSHIP: List[Tuple[str, str, Optional[str]]] = [
    ("Michael Chen", "Chief Executive Officer", "michael-chen"),
    ("Sarah Johnson", "Chief Technology Officer", "sarah-johnson"),
]
_EXTENDED: List[Tuple[str, str, Optional[str]]] = [
    ("David Martinez", "Chief Financial Officer", None),
    ("Emily Roberts", "VP of Sales", "emily-roberts"),
    ("James Wilson", "Head of Marketing", None),
    ("Olivia Brown", "Chief Operating Officer", "olivia-brown"),
    ("Daniel Kim", "Director of Engineering", None),
]


class FallbackRoster:
    """Deterministic synthetic leadership slate used when no provider data survives.

    Size (3-5) and membership are seeded from the company name and domain, so
    repeated runs for the same company return the same roster.
    """

    def generate(self, company_name: str, domain: str) -> List[PersonRecord]:
        domain = domain or FALLBACK_DOMAIN
        seed = hashlib.sha256(f"{(company_name or '').strip().lower()}|{domain}".encode("utf-8")).hexdigest()
        rng = random.Random(int(seed[:16], 16))

        size = rng.randint(MIN_PEOPLE, MAX_PEOPLE)
        extended = list(_EXTENDED)
        rng.shuffle(extended)
        roster = _LEADERSHIP + extended[: size - len(_LEADERSHIP)]

        people = [
            PersonRecord(
                name=name,
                position=position,
                email=predict_email(name, domain),
                profile_link=f"https://linkedin.com/in/{slug}" if slug else None,
                department=extract_department(position),
            )
            for name, position, slug in roster
        ]
        return prioritize_people(people, limit=MAX_PEOPLE)
