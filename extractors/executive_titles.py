from __future__ import annotations

import re
from typing import List, Optional

from extractors.base import Candidate, is_valid_name, make_soup, text_lines


# Capitalized forms only; lowercase "lead" or "director" in prose is not a title
EXECUTIVE_TITLE_RE = re.compile(
    r"\b(?:"
    r"Chief [A-Z][a-z]+ Officer|CEO|CTO|CFO|COO|CMO|CIO|CPO"
    r"|Co-Founder|Co-founder|Cofounder|Founder"
    r"|Vice President(?: of [A-Z][a-z]+)?|President"
    r"|Managing Director|Director(?: of [A-Z][a-z]+)?"
    r"|Head of [A-Z][a-z]+|VP(?: of)? [A-Z][a-z]+"
    r"|Lead [A-Z][a-z]+|[A-Z][a-z]+ Lead"
    r")\b"
)
NAME_SEQUENCE_RE = re.compile(r"[A-Z][\w'\-]*\.?(?:\s+[A-Z][\w'\-]*\.?){1,4}")
WINDOW = 60
_SEPARATORS = " ,-\u2013\u2014|:()&"


def _name_before(text: str) -> Optional[str]:
    window = text[-WINDOW:].rstrip(_SEPARATORS)
    matches = list(NAME_SEQUENCE_RE.finditer(window))
    if not matches or matches[-1].end() != len(window):
        return None
    words = matches[-1].group(0).split()
    # Drop leading non-name words ("Meet John Doe")
    for i in range(len(words) - 1):
        candidate = " ".join(words[i:])
        if is_valid_name(candidate):
            return candidate
    return None


def _name_after(text: str) -> Optional[str]:
    window = text[:WINDOW]
    stripped = window.lstrip(_SEPARATORS)
    m = NAME_SEQUENCE_RE.match(stripped)
    if not m:
        return None
    words = m.group(0).split()
    for i in range(len(words), 1, -1):
        candidate = " ".join(words[:i])
        if is_valid_name(candidate):
            return candidate
    return None


class ExecutiveTitleStrategy:
    """Find title vocabulary in page text and read the adjacent name on the same line."""

    name = "executive_title"

    def extract(self, html: str) -> List[Candidate]:
        results: List[Candidate] = []
        for line in text_lines(make_soup(html)):
            for m in EXECUTIVE_TITLE_RE.finditer(line):
                name = _name_before(line[: m.start()]) or _name_after(line[m.end():])
                if name:
                    results.append(Candidate(name=name, title=m.group(0), strategy=self.name))
        return results
