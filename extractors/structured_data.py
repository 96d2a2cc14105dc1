from __future__ import annotations

import html as html_lib
import json
import re
from typing import List, Optional

from extractors.base import Candidate, clean_segment, is_valid_name, is_valid_title


PERSON_TYPE_RE = re.compile(r'"@type"\s*:\s*"Person"', re.IGNORECASE)
MAX_LOOKBEHIND = 500
MAX_WINDOW = 1500


def _top_level(window: str) -> str:
    """Text of the outermost object only; nested objects such as worksFor or address are dropped."""
    out: List[str] = []
    depth = 0 if window.startswith("{") else 1
    in_string = False
    escaped = False
    for ch in window:
        if in_string:
            if depth == 1:
                out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
            continue
        elif ch == "}":
            depth -= 1
            if depth <= 0:
                break
            continue
        if depth == 1:
            out.append(ch)
    return "".join(out)


def _field(window: str, key: str) -> Optional[str]:
    m = re.search(rf'"{key}"\s*:\s*"((?:[^"\\]|\\.)*)"', window)
    if not m:
        return None
    raw = m.group(1)
    try:
        value = json.loads(f'"{raw}"')
    except ValueError:
        value = raw
    return html_lib.unescape(value).strip() or None


class StructuredDataStrategy:
    """Inline ``"@type": "Person"`` objects, read with a tolerant regex rather than a JSON parser."""

    name = "structured_data"

    def extract(self, html: str) -> List[Candidate]:
        text = html or ""
        results: List[Candidate] = []
        for m in PERSON_TYPE_RE.finditer(text):
            # Start at the enclosing brace so fields listed before @type are seen
            brace = text.rfind("{", max(0, m.start() - MAX_LOOKBEHIND), m.start())
            start = brace if brace != -1 and "}" not in text[brace:m.start()] else m.start()
            next_person = PERSON_TYPE_RE.search(text, m.end())
            end = min(next_person.start() if next_person else len(text), m.end() + MAX_WINDOW)
            window = _top_level(text[start:end])

            name = clean_segment(_field(window, "name"))
            title = clean_segment(_field(window, "jobTitle"))
            if not is_valid_name(name, min_words=1) or not is_valid_title(title):
                continue
            email = _field(window, "email")
            if email:
                email = email.lower().replace("mailto:", "").strip() or None
            results.append(
                Candidate(
                    name=name,
                    title=title,
                    email=email if email and "@" in email else None,
                    profile_link=_field(window, "sameAs") if '"sameAs"' in window else None,
                    strategy=self.name,
                )
            )
        return results
