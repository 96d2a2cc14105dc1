from __future__ import annotations

import asyncio
import logging
from typing import List, Sequence

from pipelines.runner import RunContext
from ports.source import PeopleSourcePort


logger = logging.getLogger(__name__)


class CollectPeople:
    """Fan out to every configured source concurrently and keep whatever succeeded.

    A source that raises does not cancel its siblings; its result counts as empty.
    """

    def __init__(self, sources: Sequence[PeopleSourcePort]):
        self.sources = list(sources)

    async def run(self, ctx: RunContext) -> RunContext:
        active = [s for s in self.sources if s.is_configured()]
        results = await asyncio.gather(
            *(s.fetch(ctx.company_name, ctx.website) for s in active),
            return_exceptions=True,
        )

        people: List = list(ctx.people or [])
        counts = {}
        for source, result in zip(active, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    # CancelledError / KeyboardInterrupt are not provider failures
                    raise result
                logger.warning(
                    "source raised; treating as empty",
                    extra={"source": source.source_name, "status": "error", "error": f"{type(result).__name__}: {result}"},
                )
                counts[source.source_name] = 0
                continue
            counts[source.source_name] = len(result)
            people.extend(result)

        ctx.people = people
        ctx.meta["source_counts"] = counts
        ctx.meta["sources_attempted"] = [s.source_name for s in active]
        return ctx
