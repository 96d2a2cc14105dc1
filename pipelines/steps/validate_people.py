from __future__ import annotations

from data_validator import DataValidator
from pipelines.runner import RunContext


class ValidatePeople:
    def __init__(self) -> None:
        self.validator = DataValidator()

    async def run(self, ctx: RunContext) -> RunContext:
        ctx.people = self.validator.validate_all_people(ctx.people or [])
        # Attach validation stats into meta for optional logging
        ctx.meta["validation_stats"] = self.validator.get_validation_stats()
        return ctx
