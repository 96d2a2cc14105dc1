from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


Department = Literal["Executive", "Technology", "Sales", "Marketing", "Operations"]

DEFAULT_DEPARTMENT: Department = "Operations"


class PersonRecord(BaseModel):
    """One observed or merged identity flowing through the discovery pipeline."""

    name: str
    position: str
    email: str | None = None
    profile_link: str | None = Field(default=None, alias="profileLink")
    department: Department = DEFAULT_DEPARTMENT

    # Names of the sources that observed this identity (unioned on merge)
    sources: list[str] = Field(default_factory=list)

    # Filled by email enrichment
    email_confidence: float | None = Field(default=None, alias="emailConfidence")
    email_verified: bool = Field(default=False, alias="emailVerified")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)
