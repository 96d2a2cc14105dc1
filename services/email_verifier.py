from __future__ import annotations

import logging
import re
from typing import Optional

import httpx

from config.settings import Settings, get_settings
from models.email_verification import EmailPrediction, EmailVerification
from ports.verifier import EmailVerifierPort
from services.email_predictor import fallback_address, generate_email_candidates
from sources.base import ProviderError, parse_json, send_request


logger = logging.getLogger(__name__)

CONFIDENCE_THRESHOLD = 0.6
FALLBACK_CONFIDENCE_CAP = 0.7

EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+'\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}$")
DOMAIN_RE = re.compile(r"^(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,24}$")

FREE_MAIL_DOMAINS = {
    "gmail.com",
    "googlemail.com",
    "yahoo.com",
    "hotmail.com",
    "outlook.com",
    "live.com",
    "aol.com",
    "icloud.com",
    "protonmail.com",
    "gmx.com",
    "mail.com",
    "yandex.com",
    "zoho.com",
}
COMMON_TLDS = (".com", ".org", ".net")

_RESULTS = {"deliverable", "undeliverable", "risky", "unknown"}
_STATUS_TO_RESULT = {
    "valid": "deliverable",
    "invalid": "undeliverable",
    "accept_all": "risky",
    "webmail": "deliverable",
    "disposable": "undeliverable",
    "unknown": "unknown",
}
# Statuses after which the collaborator is not asked again during this run
_STICKY_FAILURES = {401, 403, 429}


def is_well_formed(email: Optional[str]) -> bool:
    if not email or ".." in email:
        return False
    return bool(EMAIL_RE.match(email.strip()))


def heuristic_verification(email: str) -> EmailVerification:
    """Local scoring used when the email-intelligence service is unavailable."""
    domain = email.rsplit("@", 1)[-1].lower()
    if not DOMAIN_RE.match(domain):
        return EmailVerification(email=email, is_valid=False, confidence=0.0, result="undeliverable", source="fallback")
    confidence = 0.5
    if domain not in FREE_MAIL_DOMAINS:
        confidence += 0.2
    if domain.endswith(COMMON_TLDS):
        confidence += 0.1
    confidence = round(min(confidence, FALLBACK_CONFIDENCE_CAP), 2)
    deliverable = confidence > CONFIDENCE_THRESHOLD
    return EmailVerification(
        email=email,
        is_valid=deliverable,
        confidence=confidence,
        result="deliverable" if deliverable else "unknown",
        source="fallback",
    )


class EmailVerifier:
    """Deliverability scoring backed by Hunter's email-verifier endpoint."""

    provider = "hunter_verifier"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self.api_key = api_key if api_key is not None else self.settings.hunter_api_key
        self._transport = transport
        self._external_disabled = False

    @property
    def external_enabled(self) -> bool:
        return bool(self.api_key) and not self._external_disabled

    async def verify(self, email: str) -> EmailVerification:
        email = (email or "").strip()
        if not is_well_formed(email):
            return EmailVerification(email=email, is_valid=False, confidence=0.0, result="undeliverable", source="fallback")
        if self.external_enabled:
            verification = await self._verify_external(email)
            if verification is not None:
                return verification
        return heuristic_verification(email)

    async def _verify_external(self, email: str) -> Optional[EmailVerification]:
        url = f"{self.settings.hunter_base_url.rstrip('/')}/email-verifier"
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.verifier_timeout_seconds),
                transport=self._transport,
            ) as client:
                response = await send_request(
                    client,
                    "GET",
                    url,
                    provider=self.provider,
                    operation="email_verifier",
                    params={"email": email, "api_key": self.api_key},
                )
                payload = parse_json(response, self.provider)
        except ProviderError as exc:
            if exc.status_code in _STICKY_FAILURES:
                self._external_disabled = True
            logger.warning(
                "email verification degraded to heuristic",
                extra={"source": self.provider, "status": "fallback", "error": str(exc)},
            )
            return None

        data = payload.get("data") if isinstance(payload, dict) else None
        score = data.get("score") if isinstance(data, dict) else None
        if not isinstance(score, (int, float)):
            logger.warning(
                "email verification payload missing score",
                extra={"source": self.provider, "status": "fallback"},
            )
            return None

        confidence = max(0.0, min(1.0, float(score) / 100.0))
        result = data.get("result")
        if result not in _RESULTS:
            result = _STATUS_TO_RESULT.get(str(data.get("status") or "").lower(), "unknown")
        if result == "deliverable":
            is_valid = True
        elif result == "risky":
            is_valid = confidence > CONFIDENCE_THRESHOLD
        else:
            is_valid = False
        return EmailVerification(email=email, is_valid=is_valid, confidence=confidence, result=result, source="external")


async def predict_and_verify_email(
    raw_name: Optional[str],
    domain: str,
    verifier: Optional[EmailVerifierPort] = None,
) -> EmailPrediction:
    """Best address for a person on a domain.

    Candidates are verified in pattern order; the first one the external
    service scores above the threshold wins. Otherwise the primary pattern is
    returned with the confidence of its own verification.
    """
    verifier = verifier or EmailVerifier()
    candidates = generate_email_candidates(raw_name, domain)
    if not candidates:
        address = fallback_address(raw_name, domain)
        verification = await verifier.verify(address)
        return EmailPrediction(email=address, confidence=verification.confidence, source=verification.source)

    primary: Optional[EmailVerification] = None
    for candidate in candidates:
        verification = await verifier.verify(candidate)
        if primary is None:
            primary = verification
        if (
            verification.source == "external"
            and verification.confidence > CONFIDENCE_THRESHOLD
            and verification.result != "undeliverable"
        ):
            return EmailPrediction(email=candidate, confidence=verification.confidence, verified=True, source="external")
        if verification.source == "fallback":
            # External service unavailable; heuristic scores cannot tell patterns apart
            break

    return EmailPrediction(email=candidates[0], confidence=primary.confidence, source=primary.source)
