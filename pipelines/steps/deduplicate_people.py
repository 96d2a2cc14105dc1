from __future__ import annotations

from pipelines.runner import RunContext
from services.deduplication import deduplicate_people


class DeduplicatePeople:
    async def run(self, ctx: RunContext) -> RunContext:
        before = len(ctx.people or [])
        ctx.people = deduplicate_people(ctx.people or [])
        ctx.meta["duplicates_merged"] = before - len(ctx.people)
        return ctx
