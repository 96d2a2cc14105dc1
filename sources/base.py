from __future__ import annotations

import asyncio
import logging
import random
import re
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import httpx

from config.provider_routes import ROUTES
from config.settings import Settings, get_settings
from models.person_record import PersonRecord
from services.departments import extract_department
from services.domain_utils import normalize_linkedin_profile_url
from utils.provider_logger import log_call


logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE_STATUS = {429, 500, 502, 503, 504}

_COMPANY_SUFFIX_RE = re.compile(r"[\s,]+(?:inc|llc|corp|corporation|ltd|limited|co|gmbh|ag|plc)\.?$", re.IGNORECASE)


class ProviderError(RuntimeError):
    """A provider call failed: timeout, transport error, non-2xx status or malformed payload."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        # Transport failures carry no status code and are worth one more try
        return self.status_code is None or self.status_code in RETRYABLE_STATUS


async def send_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    provider: str,
    operation: str,
    max_retries: int = 0,
    backoff_seconds: float = 1.0,
    **kwargs: Any,
) -> httpx.Response:
    """Issue one HTTP call with retries on 5xx/429/transport errors.

    Raises ProviderError once retries are exhausted. Every attempt is traced.
    """
    attempt = 0
    while True:
        t0 = time.monotonic()
        status_code: Optional[int] = None
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            error = ProviderError(provider, f"timeout after {type(exc).__name__}")
        except httpx.HTTPError as exc:
            error = ProviderError(provider, f"network error: {exc}")
        else:
            status_code = response.status_code
            if status_code < 400:
                log_call(
                    caller=f"sources.{provider}",
                    provider=provider,
                    operation=operation,
                    url=url,
                    status_code=status_code,
                    duration_ms=int((time.monotonic() - t0) * 1000),
                )
                return response
            error = ProviderError(provider, f"HTTP {status_code}", status_code=status_code)

        log_call(
            caller=f"sources.{provider}",
            provider=provider,
            operation=operation,
            url=url,
            status_code=status_code,
            duration_ms=int((time.monotonic() - t0) * 1000),
            status="error",
            error=str(error),
            extras={"attempt": attempt + 1},
        )
        if not error.retryable or attempt >= max_retries:
            raise error
        # Exponential backoff with jitter
        delay = backoff_seconds * (2 ** attempt) + random.uniform(0, backoff_seconds / 4 if backoff_seconds else 0)
        await asyncio.sleep(delay)
        attempt += 1


def parse_json(response: httpx.Response, provider: str) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(provider, f"malformed payload: {exc}", status_code=response.status_code) from exc


def company_core_name(company_name: Optional[str]) -> str:
    name = (company_name or "").strip().lower()
    previous = None
    while previous != name:
        previous = name
        name = _COMPANY_SUFFIX_RE.sub("", name).strip()
    return name


def is_relevant_to_company(company_name: Optional[str], *fields: Optional[str]) -> bool:
    """Substring relevance of the company name against company/title fields."""
    core = company_core_name(company_name)
    if not core:
        return False
    squashed = re.sub(r"[^a-z0-9]", "", core)
    for value in fields:
        text = (value or "").lower()
        if not text:
            continue
        if core in text or (squashed and squashed in re.sub(r"[^a-z0-9]", "", text)):
            return True
    return False


def filter_relevant(items: List[T], predicate: Callable[[T], bool], min_results: int) -> List[T]:
    """Relevant items first; topped up with the earliest results when fewer than min_results pass."""
    relevant = [item for item in items if predicate(item)]
    if len(relevant) >= min_results:
        return relevant
    chosen = {id(item) for item in relevant}
    for item in items:
        if len(relevant) >= min_results:
            break
        if id(item) not in chosen:
            relevant.append(item)
            chosen.add(id(item))
    return relevant


class PeopleSource:
    """Shared behaviour for people providers.

    Subclasses implement ``_fetch``; ``fetch`` wraps it so ordinary provider
    failures resolve to an empty list instead of raising.
    """

    source_name: str = "base"

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self._transport = transport

    def is_configured(self) -> bool:
        return True

    @property
    def timeout_seconds(self) -> float:
        route = ROUTES.get(self.source_name, {})
        return float(getattr(self.settings, route.get("timeout_setting", ""), 10.0))

    @property
    def operation(self) -> str:
        return ROUTES.get(self.source_name, {}).get("operation", "fetch")

    def client(self, headers: Optional[Dict[str, str]] = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            headers=headers,
            follow_redirects=True,
            transport=self._transport,
        )

    async def request(self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> httpx.Response:
        return await send_request(
            client,
            method,
            url,
            provider=self.source_name,
            operation=self.operation,
            max_retries=self.settings.provider_max_retries,
            backoff_seconds=self.settings.provider_backoff_seconds,
            **kwargs,
        )

    async def fetch(self, company_name: str, website: Optional[str] = None) -> List[PersonRecord]:
        if not self.is_configured():
            logger.debug("source not configured", extra={"source": self.source_name, "status": "skipped"})
            return []
        t0 = time.monotonic()
        try:
            people = await self._fetch(company_name, website)
        except ProviderError as exc:
            logger.warning(
                "provider call failed",
                extra={"source": self.source_name, "status": "error", "error": str(exc)},
            )
            return []
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.warning(
                "provider payload could not be used",
                extra={"source": self.source_name, "status": "error", "error": f"{type(exc).__name__}: {exc}"},
            )
            return []
        logger.info(
            "provider returned people",
            extra={
                "source": self.source_name,
                "status": "ok",
                "records": len(people),
                "duration_ms": int((time.monotonic() - t0) * 1000),
            },
        )
        return people

    async def _fetch(self, company_name: str, website: Optional[str]) -> List[PersonRecord]:
        raise NotImplementedError

    def make_record(
        self,
        name: Optional[str],
        position: Optional[str],
        email: Optional[str] = None,
        profile_link: Optional[str] = None,
    ) -> Optional[PersonRecord]:
        name = " ".join(str(name or "").split())
        position = " ".join(str(position or "").split())
        if not name or not position:
            return None
        email = (str(email).strip().lower() or None) if email else None
        link = normalize_linkedin_profile_url(profile_link) or (str(profile_link).strip() or None if profile_link else None)
        return PersonRecord(
            name=name,
            position=position,
            email=email,
            profile_link=link,
            department=extract_department(position),
            sources=[self.source_name],
        )


def first_present(item: Dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = item.get(key)
        if value not in (None, "", [], {}):
            return value
    return None
