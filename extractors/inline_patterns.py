from __future__ import annotations

import re
from typing import List, Optional, Tuple

from extractors.base import (
    Candidate,
    clean_segment,
    has_role_keyword,
    is_valid_name,
    is_valid_title,
    make_soup,
)


SEGMENT_TAGS = [
    "p", "li", "h1", "h2", "h3", "h4", "h5", "h6", "span", "strong", "b", "em",
    "td", "dd", "dt", "figcaption", "a", "small", "div",
]
MAX_SEGMENT_LENGTH = 150

# Tried in priority order; the first form yielding a valid name AND title wins
_SEPARATOR_FORMS: List[Tuple[str, re.Pattern]] = [
    ("dash", re.compile(r"^(?P<name>.+?)\s+[-\u2013\u2014]\s+(?P<title>.+)$")),
    ("comma", re.compile(r"^(?P<name>[^,]+),\s*(?P<title>.+)$")),
    ("pipe", re.compile(r"^(?P<name>[^|]+?)\s*\|\s*(?P<title>.+)$")),
    ("paren", re.compile(r"^(?P<name>[^()]+?)\s*\((?P<title>[^()]+)\)$")),
    ("title_colon", re.compile(r"^(?P<title>[^:]+):\s*(?P<name>.+)$")),
]


def _title_then_name(text: str) -> Optional[Tuple[str, str]]:
    words = text.split()
    for k in range(1, len(words) - 1):
        title = " ".join(words[:k])
        name = " ".join(words[k:])
        if has_role_keyword(title) and is_valid_name(name):
            return name, title
    return None


def parse_person_text(text: Optional[str], require_role: bool = True) -> Optional[Tuple[str, str]]:
    """Split a free-text segment into (name, title).

    Handles "Name - Title", "Name, Title", "Name | Title", "Name (Title)",
    "Title: Name" and "Title Name". With ``require_role`` the title must carry
    a recognizable role keyword, which keeps place names and taglines out.
    """
    segment = " ".join((text or "").split())
    if not segment or len(segment) > MAX_SEGMENT_LENGTH:
        return None
    for _, pattern in _SEPARATOR_FORMS:
        m = pattern.match(segment)
        if not m:
            continue
        name = clean_segment(m.group("name"))
        title = clean_segment(m.group("title"))
        if not is_valid_name(name) or not is_valid_title(title):
            continue
        if require_role and not has_role_keyword(title):
            continue
        return name, title
    return _title_then_name(segment)


class InlinePatternStrategy:
    name = "inline"

    def extract(self, html: str) -> List[Candidate]:
        soup = make_soup(html)
        seen: set = set()
        results: List[Candidate] = []
        for element in soup.find_all(SEGMENT_TAGS):
            # Only leaf divs; outer layout divs would swallow whole sections
            if element.name == "div" and element.find(True) is not None:
                continue
            for line in element.get_text(" ").split("\n"):
                segment = " ".join(line.split())
                if not segment or segment in seen:
                    continue
                seen.add(segment)
                parsed = parse_person_text(segment)
                if parsed:
                    results.append(Candidate(name=parsed[0], title=parsed[1], strategy=self.name))
        return results
