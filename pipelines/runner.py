from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from models.person_record import PersonRecord
from utils.logging_setup import init_logging


logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    company_name: str = ""
    website: Optional[str] = None
    # Email domain resolved once per invocation; steps must not change it
    domain: str = ""
    people: List[PersonRecord] = field(default_factory=list)
    meta: dict = field(default_factory=dict)


class Step(Protocol):
    async def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    async def run(self, ctx: RunContext) -> RunContext:
        # Make logging idempotent for any direct runner use
        init_logging()
        for step in self.steps:
            step_name = type(step).__name__
            t0 = time.monotonic()
            ctx = await step.run(ctx)
            logger.info(
                "step complete",
                extra={
                    "step": step_name,
                    "status": "ok",
                    "records": len(ctx.people),
                    "duration_ms": int((time.monotonic() - t0) * 1000),
                    "run_id": ctx.meta.get("run_id", "-"),
                },
            )
        return ctx
