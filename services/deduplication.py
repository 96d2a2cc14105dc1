from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from models.person_record import DEFAULT_DEPARTMENT, PersonRecord


logger = logging.getLogger(__name__)

NAME_MATCH_THRESHOLD = 0.8
POSITION_MATCH_THRESHOLD = 0.3
INITIAL_BONUS = 0.3

POSITION_GROUPS = {
    "ceo": ("ceo", "chief executive", "managing director"),
    "cto": ("cto", "chief technology", "chief technical"),
    "cfo": ("cfo", "chief financial", "finance director"),
    "coo": ("coo", "chief operating", "operations director"),
}

# Local parts that mark an address as a guess or a placeholder
SYNTHETIC_LOCAL_PARTS = {"predicted", "user", "test", "example", "placeholder", "noreply", "no-reply", "unknown"}
SYNTHETIC_DOMAINS = {"example.com", "example.org", "test.com"}


def _normalize(text: Optional[str]) -> str:
    return " ".join((text or "").lower().split())


def _name_tokens(name: str) -> List[str]:
    return [t for t in (tok.strip(".,") for tok in _normalize(name).split()) if t]


def name_similarity(a: Optional[str], b: Optional[str]) -> float:
    """Token-prefix similarity; "J. Smith" vs "John Smith" scores as a match."""
    left, right = _normalize(a), _normalize(b)
    if not left or not right:
        return 0.0
    if left == right:
        return 1.0
    tokens_a, tokens_b = _name_tokens(left), _name_tokens(right)
    if not tokens_a or not tokens_b:
        return 0.0

    unmatched = list(tokens_b)
    matches = 0
    initial_match = False
    for token in tokens_a:
        for other in unmatched:
            if token == other or token.startswith(other) or other.startswith(token):
                matches += 1
                if min(len(token), len(other)) == 1 and token != other:
                    initial_match = True
                unmatched.remove(other)
                break

    score = matches / max(len(tokens_a), len(tokens_b))
    if initial_match:
        score += INITIAL_BONUS
    return min(score, 1.0)


def _position_group(position: str) -> Optional[str]:
    for group, needles in POSITION_GROUPS.items():
        for needle in needles:
            if re.search(rf"\b{needle}\b", position):
                return group
    return None


def position_similarity(a: Optional[str], b: Optional[str]) -> float:
    left, right = _normalize(a), _normalize(b)
    if not left or not right:
        return 0.0
    if left == right:
        return 1.0
    group = _position_group(left)
    if group and group == _position_group(right):
        return 0.8
    words_a = {w for w in re.findall(r"[a-z]+", left) if len(w) > 2}
    words_b = {w for w in re.findall(r"[a-z]+", right) if len(w) > 2}
    if not words_a or not words_b:
        return 0.0
    shared = len(words_a & words_b)
    if not shared:
        return 0.0
    return min(shared / max(len(words_a), len(words_b)), 0.6)


def is_same_person(a: PersonRecord, b: PersonRecord) -> bool:
    if _normalize(a.name) == _normalize(b.name):
        return True
    return (
        name_similarity(a.name, b.name) > NAME_MATCH_THRESHOLD
        and position_similarity(a.position, b.position) > POSITION_MATCH_THRESHOLD
    )


def looks_synthetic_email(email: Optional[str]) -> bool:
    if not email or "@" not in email:
        return True
    local, domain = email.lower().rsplit("@", 1)
    return local in SYNTHETIC_LOCAL_PARTS or local.endswith(".user") or domain in SYNTHETIC_DOMAINS


def _longer(current: str, incoming: str) -> str:
    return incoming if len(incoming.strip()) > len(current.strip()) else current


def merge_people(existing: PersonRecord, incoming: PersonRecord) -> PersonRecord:
    """Combine two observations of one person, keeping the richer value per field."""
    email = existing.email
    if not email or (looks_synthetic_email(email) and incoming.email and not looks_synthetic_email(incoming.email)):
        email = incoming.email or email
    department = existing.department
    if department == DEFAULT_DEPARTMENT and incoming.department != DEFAULT_DEPARTMENT:
        department = incoming.department
    sources = list(existing.sources)
    for source in incoming.sources:
        if source not in sources:
            sources.append(source)
    return existing.model_copy(
        update={
            "name": _longer(existing.name, incoming.name),
            "position": _longer(existing.position, incoming.position),
            "email": email,
            "profile_link": existing.profile_link or incoming.profile_link,
            "department": department,
            "sources": sources,
        }
    )


def deduplicate_people(people: Iterable[PersonRecord]) -> List[PersonRecord]:
    accepted: List[PersonRecord] = []
    total = 0
    for person in people:
        total += 1
        for index, existing in enumerate(accepted):
            if is_same_person(existing, person):
                accepted[index] = merge_people(existing, person)
                break
        else:
            accepted.append(person)
    if total != len(accepted):
        logger.info("merged duplicate people", extra={"step": "deduplicate", "records": len(accepted)})
    return accepted
