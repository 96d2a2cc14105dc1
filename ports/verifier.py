from __future__ import annotations

from typing import Protocol

from models.email_verification import EmailVerification


class EmailVerifierPort(Protocol):
    async def verify(self, email: str) -> EmailVerification:
        ...
