from __future__ import annotations

import logging
from typing import Optional

from pipelines.runner import RunContext
from ports.verifier import EmailVerifierPort
from services.email_predictor import predict_email
from services.email_verifier import EmailVerifier, predict_and_verify_email


logger = logging.getLogger(__name__)


class EnrichEmails:
    """Fill missing emails, one person at a time (the verifier is rate limited).

    A verifier that raises costs that person the confidence score, never the record.
    """

    def __init__(self, verifier: Optional[EmailVerifierPort] = None):
        self.verifier = verifier

    async def run(self, ctx: RunContext) -> RunContext:
        verifier = self.verifier or EmailVerifier()
        enriched = []
        predicted = 0
        for person in ctx.people or []:
            if person.email:
                enriched.append(person)
                continue
            predicted += 1
            try:
                prediction = await predict_and_verify_email(person.name, ctx.domain, verifier)
            except Exception as exc:  # a failing verifier never drops the person
                logger.warning(
                    "email verification failed; using primary pattern",
                    extra={"step": "enrich_emails", "status": "fallback", "error": f"{type(exc).__name__}: {exc}"},
                )
                enriched.append(person.model_copy(update={"email": predict_email(person.name, ctx.domain)}))
                continue
            enriched.append(
                person.model_copy(
                    update={
                        "email": prediction.email,
                        "email_confidence": prediction.confidence,
                        "email_verified": prediction.verified,
                    }
                )
            )
        ctx.people = enriched
        ctx.meta["emails_predicted"] = predicted
        return ctx
