from .person_record import PersonRecord, Department, DEFAULT_DEPARTMENT
from .source_flags import SourceFlags
from .email_verification import EmailVerification, EmailPrediction
from .discovery_result import KeyPeopleResult

__all__ = [
    "PersonRecord",
    "Department",
    "DEFAULT_DEPARTMENT",
    "SourceFlags",
    "EmailVerification",
    "EmailPrediction",
    "KeyPeopleResult",
]
