from __future__ import annotations

from data_validator import DataValidator
from models.person_record import PersonRecord


def test_validate_all_people_drops_invalid_and_counts():
    v = DataValidator()
    people = [
        PersonRecord(name="  Alice   Example ", position="Head of  Product", email="Alice@Acme.com"),
        PersonRecord(name="https://acme.com", position="CEO"),
        PersonRecord(name="Bob Stone", position=""),
    ]
    out = v.validate_all_people(people)
    assert [p.name for p in out] == ["Alice Example"]
    assert out[0].position == "Head of Product"
    assert out[0].email == "alice@acme.com"
    stats = v.get_validation_stats()
    assert stats["total_people"] == 3
    assert stats["valid_people"] == 1
    assert stats["invalid_people"] == 2


def test_clean_person_normalizes_links_and_emails():
    v = DataValidator()
    person = PersonRecord(
        name="Alice Example",
        position="Chief Technology Officer",
        email="not an email",
        profile_link="https://www.linkedin.com/in/Alice-Example/de",
    )
    cleaned = v.clean_person(person)
    assert cleaned.email is None
    assert cleaned.profile_link == "https://linkedin.com/in/alice-example"
    # Default department is re-derived from the title
    assert cleaned.department == "Technology"


def test_non_linkedin_links_are_kept_with_a_warning():
    v = DataValidator()
    person = PersonRecord(name="Alice Example", position="CEO", profile_link="https://acme.com/team/alice")
    result = v.validate_person(person)
    assert result["is_valid"] is True
    assert result["warnings"]
    assert v.clean_person(person).profile_link == "https://acme.com/team/alice"


def test_profile_link_validation():
    v = DataValidator()
    assert v.validate_profile_link("https://linkedin.com/in/alice")
    assert not v.validate_profile_link("https://linkedin.com/company/acme")
    assert not v.validate_profile_link("ftp://linkedin.com/in/alice")
    assert not v.validate_profile_link(None)
