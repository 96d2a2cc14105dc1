from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from config.provider_routes import flag_for_source
from models.person_record import PersonRecord


class SourceFlags(BaseModel):
    """Which providers contributed at least one surviving record."""

    professional_network: bool = Field(default=False, alias="professionalNetwork")
    startup_database: bool = Field(default=False, alias="startupDatabase")
    website_scrape: bool = Field(default=False, alias="websiteScrape")
    email_directory: bool = Field(default=False, alias="emailDirectory")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_people(cls, people: Iterable[PersonRecord]) -> "SourceFlags":
        flags: dict[str, bool] = {}
        for person in people:
            for source_name in person.sources:
                flag = flag_for_source(source_name)
                if flag:
                    flags[flag] = True
        return cls(**flags)

    def any(self) -> bool:
        return any(self.model_dump().values())
