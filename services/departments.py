from __future__ import annotations

import re
from typing import List, Optional, Pattern, Tuple

from models.person_record import DEFAULT_DEPARTMENT, Department


def _rx(*patterns: str) -> Pattern[str]:
    return re.compile("|".join(rf"\b{p}\b" for p in patterns), re.IGNORECASE)


# Checked in order; first hit wins. Technology chiefs come before the generic
# executive vocabulary so "Chief Technology Officer" lands in Technology.
_DEPARTMENT_RULES: List[Tuple[Department, Pattern[str]]] = [
    ("Technology", _rx(r"cto", r"chief technology", r"chief technical", r"cio", r"chief information")),
    ("Executive", _rx(
        r"ceo", r"chief executive", r"(?<!vice )president", r"co-?founder", r"founder", r"(?<!product )(?<!process )owner",
        r"managing director", r"chairman", r"chairwoman", r"chief", r"cfo", r"coo",
    )),
    ("Technology", _rx(
        r"engineer\w*", r"developers?", r"software", r"tech", r"technology", r"technical",
        r"architect\w*", r"programmer", r"product", r"ux", r"ui", r"designer", r"data", r"devops", r"it",
    )),
    ("Sales", _rx(
        r"sales", r"business development", r"account (?:manager|executive|director|lead)", r"key accounts?",
        r"revenue", r"partnerships?", r"customer success",
    )),
    ("Marketing", _rx(r"marketing", r"growth", r"brand\w*", r"communications?", r"content", r"pr", r"seo", r"social media")),
]


def extract_department(position: Optional[str]) -> Department:
    """Coarse department for a free-text title; Operations when nothing matches."""
    text = " ".join((position or "").split())
    if not text:
        return DEFAULT_DEPARTMENT
    for department, pattern in _DEPARTMENT_RULES:
        if pattern.search(text):
            return department
    return DEFAULT_DEPARTMENT


_VICE_PRESIDENT = _rx(r"vice president", r"vp", r"svp", r"evp")

# Descending; VP (6) is handled separately so 'Vice President' never scores as 'President'
_SENIORITY_RULES: List[Tuple[int, Pattern[str]]] = [
    (10, _rx(r"ceo", r"president", r"chief executive")),
    (9, _rx(r"co-?founder", r"founder")),
    (8, _rx(r"cto", r"cfo", r"coo")),
    (7, _rx(r"chief")),
    (5, _rx(r"director")),
    (4, _rx(r"head of", r"lead")),
    (3, _rx(r"manager")),
    (2, _rx(r"senior", r"sr")),
]


def seniority_score(position: Optional[str]) -> int:
    """Integer rank of a title used only to order people inside one department."""
    text = " ".join((position or "").split())
    if not text:
        return 1
    is_vp = bool(_VICE_PRESIDENT.search(text))
    remainder = _VICE_PRESIDENT.sub(" ", text)
    for score, pattern in _SENIORITY_RULES:
        if is_vp and score < 6:
            return 6
        if pattern.search(remainder):
            return score
    return 6 if is_vp else 1
