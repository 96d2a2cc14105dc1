from __future__ import annotations

from pipelines.runner import RunContext
from services.prioritizer import DEFAULT_LIMIT, prioritize_people


class PrioritizePeople:
    def __init__(self, limit: int = DEFAULT_LIMIT) -> None:
        self.limit = limit

    async def run(self, ctx: RunContext) -> RunContext:
        ctx.people = prioritize_people(ctx.people or [], limit=self.limit)
        return ctx
