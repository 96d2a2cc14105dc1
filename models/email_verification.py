from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


VerificationResult = Literal["deliverable", "undeliverable", "risky", "unknown"]
VerificationSource = Literal["external", "fallback"]


class EmailVerification(BaseModel):
    email: str
    is_valid: bool = Field(alias="isValid")
    confidence: float = Field(ge=0.0, le=1.0)
    result: VerificationResult = "unknown"
    source: VerificationSource = "fallback"

    model_config = ConfigDict(populate_by_name=True)


class EmailPrediction(BaseModel):
    """Chosen address for a person plus the verification that backed it."""

    email: str
    confidence: float = 0.0
    verified: bool = False
    source: VerificationSource = "fallback"

    model_config = ConfigDict(populate_by_name=True)
