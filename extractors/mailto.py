from __future__ import annotations

import html as html_lib
import re
from typing import Iterable, List
from urllib.parse import unquote

from extractors.base import Candidate
from services.email_predictor import SINGLE_NAME_LAST_TOKEN, name_parts


MAILTO_RE = re.compile(r"""mailto:([^"'?>\s]+)""", re.IGNORECASE)


def collect_mailto_addresses(html: str) -> List[str]:
    """Every distinct mailto: address on the page, in document order."""
    addresses: List[str] = []
    for m in MAILTO_RE.finditer(html or ""):
        address = unquote(html_lib.unescape(m.group(1))).strip().lower()
        if "@" in address and address not in addresses:
            addresses.append(address)
    return addresses


def _squash(text: str) -> str:
    return re.sub(r"[^a-z0-9]", "", text.lower())


def associate_emails(candidates: Iterable[Candidate], addresses: Iterable[str]) -> None:
    """Attach page addresses to candidates by first/last name fragments in the local part.

    Addresses matching both fragments are assigned first; each address goes to
    at most one candidate and candidates that already have an email keep it.
    """
    people = list(candidates)
    taken = {c.email for c in people if c.email}
    unassigned = [a for a in addresses if a not in taken]
    for require_both in (True, False):
        for person in people:
            if person.email or not unassigned:
                continue
            parts = name_parts(person.name)
            if parts is None:
                continue
            first = _squash(parts[0])
            last = _squash(parts[1]) if parts[1] != SINGLE_NAME_LAST_TOKEN else ""
            for address in unassigned:
                local = _squash(address.split("@", 1)[0])
                hit_first = len(first) >= 3 and first in local
                hit_last = len(last) >= 3 and last in local
                if require_both:
                    matched = hit_first and (hit_last or not last)
                else:
                    matched = hit_first or hit_last
                if matched:
                    person.email = address
                    unassigned.remove(address)
                    break
