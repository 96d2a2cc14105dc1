from __future__ import annotations

import logging
from typing import List, Optional

from extractors.chain import PeopleExtractor
from models.person_record import PersonRecord
from services.domain_utils import ensure_website_url
from sources.base import PeopleSource, ProviderError, send_request
from sources.registry import register


logger = logging.getLogger(__name__)


class CompanyWebsiteSource(PeopleSource):
    """Scrapes the company's own team/about pages and runs the extraction chain."""

    source_name = "company_website"

    def __init__(self, *args, extractor: Optional[PeopleExtractor] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.extractor = extractor or PeopleExtractor()

    async def _fetch(self, company_name: str, website: Optional[str]) -> List[PersonRecord]:
        base_url = ensure_website_url(website)
        if not base_url:
            return []
        target = self.settings.website_target_candidates
        pages = self.settings.team_pages[: self.settings.website_max_pages]

        people: List[PersonRecord] = []
        seen: set = set()
        headers = {"User-Agent": self.settings.scraper_user_agent, "Accept": "text/html,application/xhtml+xml"}
        async with self.client(headers=headers) as client:
            for path in pages:
                url = f"{base_url}/{path.lstrip('/')}"
                try:
                    # Missing pages are expected; no retries while probing
                    response = await send_request(
                        client, "GET", url, provider=self.source_name, operation=self.operation, max_retries=0
                    )
                except ProviderError as exc:
                    logger.debug("team page unavailable", extra={"source": self.source_name, "error": str(exc)})
                    continue
                for candidate in self.extractor.extract(response.text):
                    key = candidate.name.lower()
                    if key in seen:
                        continue
                    record = self.make_record(candidate.name, candidate.title, candidate.email, candidate.profile_link)
                    if record:
                        seen.add(key)
                        people.append(record)
                if len(people) >= target:
                    break
        return people[:target]


def _register():
    register(CompanyWebsiteSource.source_name, CompanyWebsiteSource)


_register()
