from __future__ import annotations

import httpx
import pytest
import respx

from models.email_verification import EmailVerification
from services.email_verifier import EmailVerifier, heuristic_verification, predict_and_verify_email


HUNTER_VERIFY = "https://api.hunter.io/v2/email-verifier"


def _hunter_payload(score, result="deliverable", status="valid"):
    return {"data": {"score": score, "result": result, "status": status}}


@pytest.mark.asyncio
async def test_malformed_address_rejected_without_network():
    verifier = EmailVerifier(api_key="k")
    with respx.mock(assert_all_called=False) as router:
        route = router.get(HUNTER_VERIFY)
        out = await verifier.verify("not-an-email")
    assert out.is_valid is False
    assert out.confidence == 0
    assert route.called is False


def test_heuristic_scores_corporate_domain_as_deliverable():
    out = heuristic_verification("jane.doe@acme.com")
    assert out.source == "fallback"
    assert out.confidence == pytest.approx(0.7)
    assert out.result == "deliverable"
    assert out.is_valid is True


def test_heuristic_free_mail_is_unknown():
    out = heuristic_verification("jane.doe@gmail.com")
    assert out.confidence == pytest.approx(0.6)
    assert out.result == "unknown"
    assert out.is_valid is False


def test_heuristic_bad_domain():
    out = heuristic_verification("jane@-bad-.x")
    assert out.is_valid is False
    assert out.confidence == 0


@pytest.mark.asyncio
async def test_external_score_maps_to_confidence():
    verifier = EmailVerifier(api_key="k")
    with respx.mock() as router:
        router.get(HUNTER_VERIFY).mock(return_value=httpx.Response(200, json=_hunter_payload(91)))
        out = await verifier.verify("john.doe@acme.com")
    assert out.source == "external"
    assert out.confidence == pytest.approx(0.91)
    assert out.is_valid is True


@pytest.mark.asyncio
async def test_risky_is_valid_only_above_threshold():
    verifier = EmailVerifier(api_key="k")
    with respx.mock() as router:
        router.get(HUNTER_VERIFY).mock(
            side_effect=[
                httpx.Response(200, json=_hunter_payload(55, result="risky", status="accept_all")),
                httpx.Response(200, json=_hunter_payload(75, result="risky", status="accept_all")),
            ]
        )
        low = await verifier.verify("a.b@acme.com")
        high = await verifier.verify("c.d@acme.com")
    assert low.result == "risky" and low.is_valid is False
    assert high.result == "risky" and high.is_valid is True


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [400, 401, 403, 429])
async def test_collaborator_errors_degrade_to_heuristic(status):
    verifier = EmailVerifier(api_key="k")
    with respx.mock() as router:
        router.get(HUNTER_VERIFY).mock(return_value=httpx.Response(status, json={"errors": []}))
        out = await verifier.verify("john.doe@acme.com")
    assert out.source == "fallback"
    assert out.confidence <= 0.7


@pytest.mark.asyncio
async def test_network_error_degrades_to_heuristic():
    verifier = EmailVerifier(api_key="k")
    with respx.mock() as router:
        router.get(HUNTER_VERIFY).mock(side_effect=httpx.ConnectTimeout("slow"))
        out = await verifier.verify("john.doe@acme.com")
    assert out.source == "fallback"


@pytest.mark.asyncio
async def test_rate_limit_stops_further_external_calls():
    verifier = EmailVerifier(api_key="k")
    with respx.mock() as router:
        route = router.get(HUNTER_VERIFY).mock(return_value=httpx.Response(429))
        await verifier.verify("a.b@acme.com")
        await verifier.verify("c.d@acme.com")
    assert route.call_count == 1


class _ScriptedVerifier:
    """Returns external scores from a table keyed by address."""

    def __init__(self, scores):
        self.scores = scores
        self.calls = []

    async def verify(self, email):
        self.calls.append(email)
        score = self.scores.get(email, 0.2)
        return EmailVerification(
            email=email,
            is_valid=score > 0.6,
            confidence=score,
            result="deliverable" if score > 0.6 else "unknown",
            source="external",
        )


@pytest.mark.asyncio
async def test_predict_and_verify_returns_first_confident_candidate():
    verifier = _ScriptedVerifier({"j.doe@acme.com": 0.9})
    prediction = await predict_and_verify_email("John Doe", "acme.com", verifier)
    assert prediction.email == "j.doe@acme.com"
    assert prediction.verified is True
    assert verifier.calls == ["john.doe@acme.com", "johndoe@acme.com", "j.doe@acme.com"]


@pytest.mark.asyncio
async def test_predict_and_verify_falls_back_to_primary_candidate():
    verifier = _ScriptedVerifier({})
    prediction = await predict_and_verify_email("John Doe", "acme.com", verifier)
    assert prediction.email == "john.doe@acme.com"
    assert prediction.verified is False
    assert prediction.confidence == pytest.approx(0.2)


@pytest.mark.asyncio
async def test_predict_without_api_key_uses_heuristic_once():
    prediction = await predict_and_verify_email("Jane Smith", "acme.com", EmailVerifier(api_key=""))
    assert prediction.email == "jane.smith@acme.com"
    assert prediction.source == "fallback"
    assert prediction.confidence == pytest.approx(0.7)
