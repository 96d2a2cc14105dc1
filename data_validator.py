import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from models.person_record import PersonRecord
from services.departments import extract_department
from services.domain_utils import normalize_linkedin_profile_url
from services.email_verifier import is_well_formed


class DataValidator:
    def __init__(self):
        self.validation_stats = {
            'total_people': 0,
            'valid_people': 0,
            'invalid_people': 0,
            'validation_errors': []
        }

    def validate_profile_link(self, url: Optional[str]) -> bool:
        """Validate LinkedIn profile URL format."""
        if not url or not isinstance(url, str):
            return False

        parsed = urlparse(url)
        return (
            parsed.scheme in ['http', 'https'] and
            'linkedin.com' in parsed.netloc.lower() and
            '/in/' in parsed.path
        )

    def validate_name(self, name: Optional[str]) -> bool:
        """Validate person name."""
        if not name or not isinstance(name, str):
            return False

        name = name.strip()
        return (
            len(name) >= 2 and
            len(name) <= 100 and
            not name.startswith(('http', 'www', '@')) and
            '@' not in name and
            any(ch.isalpha() for ch in name)
        )

    def validate_position(self, position: Optional[str]) -> bool:
        if not position or not isinstance(position, str):
            return False
        position = position.strip()
        return 2 <= len(position) <= 200 and any(ch.isalpha() for ch in position)

    def validate_person(self, person: PersonRecord) -> Dict[str, Any]:
        """Validate a single person record and return validation results."""
        errors: List[str] = []
        warnings: List[str] = []

        if not self.validate_name(person.name):
            errors.append(f"Invalid name: {person.name!r}")
        if not self.validate_position(person.position):
            errors.append(f"Invalid position for {person.name!r}: {person.position!r}")
        if person.email and not is_well_formed(person.email):
            warnings.append(f"Email format looks invalid: {person.email}")
        if person.profile_link and not self.validate_profile_link(person.profile_link):
            warnings.append(f"Profile link is not a LinkedIn profile: {person.profile_link}")

        is_valid = not errors
        self.validation_stats['total_people'] += 1
        if is_valid:
            self.validation_stats['valid_people'] += 1
        else:
            self.validation_stats['invalid_people'] += 1
            self.validation_stats['validation_errors'].extend(errors)

        return {'is_valid': is_valid, 'errors': errors, 'warnings': warnings, 'person': person}

    def clean_person(self, person: PersonRecord) -> PersonRecord:
        """Trim fields, drop unusable emails/links and re-derive the department."""
        name = " ".join(person.name.split())
        position = " ".join(person.position.split())
        email = person.email.strip().lower() if person.email else None
        if email and not is_well_formed(email):
            email = None
        link = person.profile_link
        if link and self.validate_profile_link(link):
            link = normalize_linkedin_profile_url(link) or link
        elif link and not re.match(r"^https?://", link):
            link = None
        department = person.department
        if department == "Operations":
            department = extract_department(position)
        return person.model_copy(
            update={
                'name': name,
                'position': position,
                'email': email,
                'profile_link': link,
                'department': department,
            }
        )

    def validate_all_people(self, people: List[PersonRecord]) -> List[PersonRecord]:
        """Validate all people and return only valid, cleaned ones."""
        valid_people = []

        logging.info(f"Starting validation of {len(people)} people")

        for i, person in enumerate(people):
            result = self.validate_person(person)
            if result['is_valid']:
                valid_people.append(self.clean_person(person))
                if result['warnings']:
                    logging.warning(f"Person {i+1} has warnings: {result['warnings']}")
            else:
                logging.info(f"Person {i+1} dropped: {result['errors']}")

        logging.info(f"Validation completed. Valid: {len(valid_people)}, "
                     f"Invalid: {len(people) - len(valid_people)}")

        return valid_people

    def get_validation_stats(self) -> Dict:
        """Return validation statistics."""
        return self.validation_stats.copy()
