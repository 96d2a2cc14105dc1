from __future__ import annotations

import re
import unicodedata
from typing import Optional
from urllib.parse import unquote, urlparse

import tldextract


# Offline extractor: use the bundled public suffix snapshot, never fetch it at runtime
_EXTRACT = tldextract.TLDExtract(suffix_list_urls=())

_LEGAL_SUFFIX_RE = re.compile(
    r"[\s,]+(?:inc|llc|corp|corporation|ltd|limited|co)\.?$",
    re.IGNORECASE,
)
_DOMAIN_CUT_RE = re.compile(r"[/?#]")

FALLBACK_DOMAIN = "company.com"


def extract_apex_domain(url_or_domain: Optional[str]) -> Optional[str]:
    """Registered domain for a URL or host, e.g. 'https://blog.acme.co.uk/x' -> 'acme.co.uk'."""
    if not url_or_domain:
        return None
    text = str(url_or_domain).strip().lower()
    if not text.startswith("http://") and not text.startswith("https://"):
        text = f"http://{text}"
    ext = _EXTRACT(text)
    if ext.domain and ext.suffix:
        return f"{ext.domain}.{ext.suffix}"
    return None


def domain_from_website(website: Optional[str]) -> Optional[str]:
    """Host part of a website string, or None when it does not look like a domain.

    Strips protocol and a leading 'www.', cuts at the first '/', '?' or '#', and
    requires a dot and more than 3 characters.
    """
    if not website:
        return None
    text = str(website).strip().lower()
    text = re.sub(r"^[a-z][a-z0-9+.-]*://", "", text)
    if text.startswith("www."):
        text = text[4:]
    text = _DOMAIN_CUT_RE.split(text, maxsplit=1)[0]
    # Drop credentials and port if present
    text = text.rsplit("@", 1)[-1].split(":", 1)[0]
    if "." not in text or len(text) <= 3:
        return None
    return text


def domain_from_company_name(company_name: Optional[str]) -> str:
    """Synthesize '<name>.com' from a company name: 'Acme Corp' -> 'acme.com'."""
    name = (company_name or "").strip().lower()
    # Strip repeated legal suffixes ("Acme Holdings Co. Ltd")
    previous = None
    while previous != name:
        previous = name
        name = _LEGAL_SUFFIX_RE.sub("", name).strip()
    slug = re.sub(r"[^a-z0-9]", "", name)
    if not slug:
        return FALLBACK_DOMAIN
    return f"{slug}.com"


def resolve_email_domain(company_name: Optional[str], website: Optional[str] = None) -> str:
    return domain_from_website(website) or domain_from_company_name(company_name)


def ensure_website_url(website: Optional[str]) -> Optional[str]:
    """Base URL (scheme + host) for scraping, defaulting to https."""
    if not website:
        return None
    text = str(website).strip()
    if not re.match(r"^https?://", text, re.IGNORECASE):
        text = f"https://{text}"
    parsed = urlparse(text)
    if not parsed.netloc:
        return None
    return f"{parsed.scheme.lower()}://{parsed.netloc.lower()}"


def normalize_linkedin_profile_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    text = str(url).strip()
    if not re.match(r"^https?://", text, re.IGNORECASE):
        text = f"https://{text}"
    u = urlparse(text)
    host = (u.netloc or '').lower().replace('www.', '')
    # Country subdomains (de.linkedin.com) collapse to the canonical host
    host = re.sub(r"^[a-z]{2}\.linkedin\.com$", "linkedin.com", host)
    path = (u.path or '').rstrip('/')
    if not host or 'linkedin.com' not in host or not path.startswith('/in/'):
        return None
    # Keep only /in/{slug} and drop trailing locale/segments (e.g., /de, /en)
    parts = [p for p in path.split('/') if p]
    if len(parts) >= 2:
        slug = unicodedata.normalize('NFKC', unquote(parts[1])).strip().lower()
        # Remove invisible characters occasionally present
        slug = slug.replace('\u200b', '').replace('\u200c', '').replace('\u200d', '')
        if slug:
            return f"https://linkedin.com/in/{slug}"
    return None
