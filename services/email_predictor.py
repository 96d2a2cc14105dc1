from __future__ import annotations

import re
import unicodedata
from typing import List, Optional, Tuple


SINGLE_NAME_LAST_TOKEN = "user"

_HONORIFIC_RE = re.compile(r"^(?:mr|mrs|ms|miss|mx|dr|prof|sir|madam|dame)\b\.?\s*", re.IGNORECASE)
_CREDENTIAL_RE = re.compile(r"[\s,]+(?:jr|sr|ii|iii|iv|phd|ph\.d|md|mba|esq|cpa)\.?$", re.IGNORECASE)


def clean_name(raw_name: Optional[str]) -> str:
    """'Dr. Sarah O'Connor-Smith, PhD' -> "Sarah O'Connor-Smith"."""
    text = (raw_name or "").replace("\u2019", "'").strip()
    previous = None
    while previous != text:
        previous = text
        text = _HONORIFIC_RE.sub("", text).strip()
        text = _CREDENTIAL_RE.sub("", text).strip()
    text = "".join(ch for ch in text if ch.isalpha() or ch in " -'")
    return " ".join(text.split())


def _ascii_fold(token: str) -> str:
    folded = unicodedata.normalize("NFKD", token).encode("ascii", "ignore").decode("ascii")
    return folded or token


def name_parts(raw_name: Optional[str]) -> Optional[Tuple[str, str]]:
    """(first, last) in lowercase, or None when nothing usable remains after cleaning."""
    tokens = [_ascii_fold(t.lower()).strip("-'") for t in clean_name(raw_name).split()]
    tokens = [t for t in tokens if t]
    if not tokens:
        return None
    if len(tokens) == 1:
        return tokens[0], SINGLE_NAME_LAST_TOKEN
    return tokens[0], tokens[-1]


def generate_email_candidates(raw_name: Optional[str], domain: str) -> List[str]:
    """Ordered, de-duplicated address patterns; the first is the primary guess."""
    parts = name_parts(raw_name)
    if parts is None or not domain:
        return []
    first, last = parts
    locals_ = [
        f"{first}.{last}",
        f"{first}{last}",
        f"{first[0]}.{last}",
        first,
        last,
        f"{first[0]}{last}",
    ]
    candidates: List[str] = []
    for local in locals_:
        address = f"{local}@{domain}"
        if address not in candidates:
            candidates.append(address)
    return candidates


def fallback_address(raw_name: Optional[str], domain: str) -> str:
    local = re.sub(r"[^a-z0-9]+", ".", (raw_name or "").lower()).strip(".")
    return f"{local or 'contact'}@{domain}"


def predict_email(raw_name: Optional[str], domain: str) -> str:
    candidates = generate_email_candidates(raw_name, domain)
    if candidates:
        return candidates[0]
    return fallback_address(raw_name, domain)
