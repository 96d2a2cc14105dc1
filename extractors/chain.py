from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from extractors.base import Candidate, ExtractionStrategy
from extractors.container import ContainerStrategy
from extractors.executive_titles import ExecutiveTitleStrategy
from extractors.inline_patterns import InlinePatternStrategy
from extractors.mailto import associate_emails, collect_mailto_addresses
from extractors.structured_data import StructuredDataStrategy


logger = logging.getLogger(__name__)


def default_strategies() -> List[ExtractionStrategy]:
    return [
        ContainerStrategy(),
        StructuredDataStrategy(),
        InlinePatternStrategy(),
        ExecutiveTitleStrategy(),
    ]


class PeopleExtractor:
    """Runs extraction strategies in order and unions their candidates by name."""

    def __init__(self, strategies: Optional[Iterable[ExtractionStrategy]] = None):
        self.strategies = list(strategies) if strategies is not None else default_strategies()

    def extract(self, html: str) -> List[Candidate]:
        if not html:
            return []
        found: Dict[str, Candidate] = {}
        for strategy in self.strategies:
            try:
                candidates = strategy.extract(html)
            except Exception as exc:  # a broken strategy must not abort the page
                logger.warning(
                    "extraction strategy failed",
                    extra={"step": getattr(strategy, "name", type(strategy).__name__), "status": "skipped", "error": str(exc)},
                )
                continue
            for candidate in candidates:
                key = " ".join(candidate.name.lower().split())
                existing = found.get(key)
                if existing is None:
                    found[key] = candidate
                    continue
                existing.email = existing.email or candidate.email
                existing.profile_link = existing.profile_link or candidate.profile_link
        people = list(found.values())
        associate_emails(people, collect_mailto_addresses(html))
        return people


def extract_people(html: str) -> List[Candidate]:
    return PeopleExtractor().extract(html)
