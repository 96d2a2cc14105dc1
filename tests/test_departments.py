from __future__ import annotations

import pytest

from services.departments import extract_department, seniority_score


@pytest.mark.parametrize(
    "position,expected",
    [
        ("Chief Technology Officer", "Technology"),
        ("CTO", "Technology"),
        ("  CEO  ", "Executive"),
        ("chief executive officer", "Executive"),
        ("Co-Founder", "Executive"),
        ("Chief Financial Officer", "Executive"),
        ("VP Engineering", "Technology"),
        ("Senior Software Engineer", "Technology"),
        ("Product Manager", "Technology"),
        ("UX Designer", "Technology"),
        ("Product Owner", "Technology"),
        ("Owner", "Executive"),
        ("Business Owner", "Executive"),
        ("Process Owner", "Operations"),
        ("Head of Sales", "Sales"),
        ("Business Development Manager", "Sales"),
        ("Account Manager", "Sales"),
        ("MARKETING DIRECTOR", "Marketing"),
        ("Growth Lead", "Marketing"),
        ("Communications Director", "Marketing"),
        ("Office Manager", "Operations"),
        ("HR Manager", "Operations"),
        ("", "Operations"),
        (None, "Operations"),
    ],
)
def test_extract_department(position, expected):
    assert extract_department(position) == expected


def test_vice_president_of_sales_is_not_executive():
    assert extract_department("Vice President of Sales") == "Sales"


@pytest.mark.parametrize(
    "position,score",
    [
        ("CEO", 10),
        ("President", 10),
        ("Chief Executive Officer", 10),
        ("Founder", 9),
        ("Co-Founder", 9),
        ("CTO", 8),
        ("CFO", 8),
        ("Chief Marketing Officer", 7),
        ("VP of Sales", 6),
        ("Vice President", 6),
        ("Director of Engineering", 5),
        ("Head of Marketing", 4),
        ("Tech Lead", 4),
        ("Office Manager", 3),
        ("Senior Analyst", 2),
        ("Analyst", 1),
        ("", 1),
    ],
)
def test_seniority_score(position, score):
    assert seniority_score(position) == score
