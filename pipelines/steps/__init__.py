# Namespace for pipeline steps
from .collect_people import CollectPeople  # noqa: F401
from .validate_people import ValidatePeople  # noqa: F401
from .deduplicate_people import DeduplicatePeople  # noqa: F401
from .enrich_emails import EnrichEmails  # noqa: F401
from .prioritize_people import PrioritizePeople  # noqa: F401
