from __future__ import annotations

import re
from typing import List, Optional

from bs4 import Tag

from extractors.base import Candidate, clean_segment, is_valid_name, is_valid_title, make_soup
from extractors.inline_patterns import parse_person_text


CONTAINER_CLASS_RE = re.compile(r"team|member|person|staff|employee", re.IGNORECASE)


def _is_title_segment(text: str) -> bool:
    # A second full name right after a name is another person, not a title
    return is_valid_title(text) and not is_valid_name(text)


def _single_href(container: Tag, needle: str) -> Optional[str]:
    hrefs = {
        a.get("href", "").strip()
        for a in container.find_all("a", href=True)
        if needle in a.get("href", "").lower()
    }
    if len(hrefs) != 1:
        return None
    return hrefs.pop()


class ContainerStrategy:
    """Team cards: elements whose class mentions team/member/person/staff/employee."""

    name = "container"

    def extract(self, html: str) -> List[Candidate]:
        soup = make_soup(html)
        containers = [
            c for c in soup.find_all(class_=CONTAINER_CLASS_RE)
            if c.find(class_=CONTAINER_CLASS_RE) is None
        ]
        results: List[Candidate] = []
        for container in containers:
            people = self._people_in(container)
            if len(people) == 1:
                mailto = _single_href(container, "mailto:")
                if mailto:
                    people[0].email = mailto.split(":", 1)[1].split("?", 1)[0].strip().lower() or None
                people[0].profile_link = _single_href(container, "linkedin.com/in/")
            results.extend(people)
        return results

    def _people_in(self, container: Tag) -> List[Candidate]:
        segments = [clean_segment(s) for s in container.stripped_strings]
        segments = [s for s in segments if s]
        people: List[Candidate] = []
        i = 0
        while i < len(segments):
            segment = segments[i]
            parsed = parse_person_text(segment, require_role=False)
            if parsed:
                people.append(Candidate(name=parsed[0], title=parsed[1], strategy=self.name))
                i += 1
                continue
            if i + 1 < len(segments) and is_valid_name(segment, min_words=1) and _is_title_segment(segments[i + 1]):
                people.append(Candidate(name=segment, title=segments[i + 1], strategy=self.name))
                i += 2
                continue
            i += 1
        return people
