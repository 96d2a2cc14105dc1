from .source import PeopleSourcePort
from .verifier import EmailVerifierPort
from .fallback import FallbackPort

__all__ = [
    "PeopleSourcePort",
    "EmailVerifierPort",
    "FallbackPort",
]
