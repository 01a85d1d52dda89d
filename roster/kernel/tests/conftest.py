"""
Roster kernel test configuration.

Shared fixtures: sample students, states built from them, and an in-memory
storage slot so the store never touches the filesystem.
"""

from datetime import date
from decimal import Decimal

import pytest

from roster.kernel.store import MemoryStorage
from roster.kernel.types import StoreState, Student


@pytest.fixture
def make_student():
    """Factory for students with sensible defaults; override any field."""

    def _make(id: str = "s1", **overrides) -> Student:
        fields = {
            "id": id,
            "first_name": "John",
            "last_name": "Doe",
            "email": "john.doe@email.com",
            "phone": "+1-555-0123",
            "date_of_birth": date(1998, 5, 15),
            "address": "123 Main St, City, State 12345",
            "course": "Computer Science",
            "year": "Senior",
            "gpa": Decimal("3.8"),
            "enrollment_date": date(2020, 9, 1),
        }
        fields.update(overrides)
        return Student(**fields)

    return _make


@pytest.fixture
def john(make_student):
    return make_student("1")


@pytest.fixture
def jane(make_student):
    return make_student(
        "2",
        first_name="Jane",
        last_name="Smith",
        email="jane.smith@email.com",
        phone="+1-555-0124",
        date_of_birth=date(1999, 3, 22),
        address="456 Oak Ave, City, State 12346",
        course="Business Administration",
        year="Junior",
        gpa=Decimal("3.6"),
        enrollment_date=date(2021, 9, 1),
    )


@pytest.fixture
def two_students(john, jane):
    """John (CS, Senior, 3.8) then Jane (Business, Junior, 3.6)."""
    return StoreState(students=(john, jane))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def valid_form_input():
    """Raw form input as the form layer collects it: camelCase, all strings."""
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "phone": "+44-20-0000",
        "dateOfBirth": "2001-12-10",
        "address": "12 St James's Square, London",
        "course": "Mathematics",
        "year": "Freshman",
        "gpa": "4.0",
        "enrollmentDate": "2023-09-01",
    }
