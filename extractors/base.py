from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Protocol

from bs4 import BeautifulSoup


@dataclass
class Candidate:
    name: str
    title: str
    email: Optional[str] = None
    profile_link: Optional[str] = None
    strategy: str = ""


class ExtractionStrategy(Protocol):
    name: str

    def extract(self, html: str) -> List[Candidate]:
        ...


# Words that mark a segment as a job title rather than a personal name
TITLE_WORDS = {
    "chief", "officer", "executive", "ceo", "cto", "cfo", "coo", "cmo", "cio", "cpo",
    "president", "vice", "vp", "svp", "evp", "director", "manager", "head", "lead",
    "founder", "co-founder", "cofounder", "chairman", "chairwoman", "chair", "partner",
    "engineer", "engineering", "developer", "designer", "architect", "programmer",
    "sales", "marketing", "operations", "technology", "technical", "finance", "financial",
    "product", "senior", "principal", "board", "member", "advisor", "consultant",
    "specialist", "analyst", "coordinator", "assistant", "intern", "owner", "hr",
    "human", "resources", "administrator", "secretary", "treasurer", "recruiter",
    "scientist", "researcher", "strategist", "counsel", "associate", "representative",
}

# Capitalized words that show up next to names on team pages but are not names
NAME_STOPWORDS = {
    "our", "the", "team", "teams", "about", "us", "meet", "contact", "leadership",
    "management", "company", "home", "services", "careers", "news", "blog", "privacy",
    "policy", "terms", "read", "more", "learn", "view", "profile", "follow", "linkedin",
    "twitter", "email", "phone", "copyright", "all", "rights", "reserved", "welcome",
    "join", "inc", "llc", "ltd", "corp", "group", "solutions", "lorem", "ipsum", "staff",
    "people", "employees", "founders", "executives", "bio", "biography", "menu", "search",
    "login", "sign", "back", "next", "previous", "close", "open", "and", "or", "of", "for",
}

PLACEHOLDER_TITLES = {
    "lorem ipsum", "title", "job title", "your title", "position", "role", "tbd", "tba",
    "n/a", "na", "none", "null", "unknown", "placeholder", "coming soon", "name",
}

# Role keywords a title must carry when it was read out of free text
ROLE_KEYWORDS = TITLE_WORDS | {
    "editor", "producer", "accountant", "controller", "superintendent", "supervisor",
    "architect", "evangelist", "generalist", "creative", "artist", "writer",
}


def _is_name_word(word: str) -> bool:
    if not word or not word[0].isupper():
        return False
    body = word.rstrip(".")
    if not body or not all(ch.isalpha() or ch in "'-" for ch in body):
        return False
    # Initials are fine; all-caps acronyms (CEO, USA) are not names
    return len(body) == 1 or any(ch.islower() for ch in body)


def is_valid_name(text: Optional[str], min_words: int = 2) -> bool:
    """Two or more capitalized words, 4-50 characters, no title vocabulary.

    ``min_words=1`` is used inside team cards where a single stage name is plausible.
    """
    value = " ".join((text or "").split())
    min_len = 4 if min_words >= 2 else 2
    if not min_len <= len(value) <= 50:
        return False
    words = value.split()
    if not min_words <= len(words) <= 5:
        return False
    if not all(_is_name_word(w) for w in words):
        return False
    lowered = {w.lower().rstrip(".") for w in words}
    if lowered & TITLE_WORDS or lowered & NAME_STOPWORDS:
        return False
    return True


def is_valid_title(text: Optional[str]) -> bool:
    value = " ".join((text or "").split())
    if not 3 <= len(value) <= 100:
        return False
    lowered = value.lower()
    if lowered in PLACEHOLDER_TITLES or "lorem ipsum" in lowered:
        return False
    if "@" in value or lowered.startswith(("http://", "https://", "www.")):
        return False
    return any(ch.isalpha() for ch in value)


def has_role_keyword(text: Optional[str]) -> bool:
    words = re.findall(r"[a-z][a-z\-]*", (text or "").lower())
    return any(w in ROLE_KEYWORDS for w in words)


def clean_segment(text: Optional[str]) -> str:
    return " ".join((text or "").split()).strip(" -\u2013\u2014|,:;")


def make_soup(html: str) -> BeautifulSoup:
    """Parse leniently and drop non-content tags; <br> becomes a line break."""
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(["script", "style", "noscript", "template", "svg"]):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    return soup


def text_lines(soup: BeautifulSoup) -> List[str]:
    lines = []
    for line in soup.get_text("\n").split("\n"):
        line = " ".join(line.split())
        if line:
            lines.append(line)
    return lines
