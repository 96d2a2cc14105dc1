from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from models.person_record import PersonRecord
from models.source_flags import SourceFlags


class KeyPeopleResult(BaseModel):
    """Public result of one discovery run: 1..5 people plus provider flags."""

    people: list[PersonRecord] = Field(default_factory=list)
    sources_used: SourceFlags = Field(default_factory=SourceFlags, alias="sourcesUsed")
    used_fallback: bool = Field(default=False, alias="usedFallback")

    model_config = ConfigDict(populate_by_name=True)
