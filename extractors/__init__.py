from .base import Candidate, ExtractionStrategy, is_valid_name, is_valid_title
from .chain import PeopleExtractor, default_strategies, extract_people

__all__ = [
    "Candidate",
    "ExtractionStrategy",
    "PeopleExtractor",
    "default_strategies",
    "extract_people",
    "is_valid_name",
    "is_valid_title",
]
