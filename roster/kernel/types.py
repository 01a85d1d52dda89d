"""
Roster Kernel — Shared Types

Data classes used across actions, reducer, views, renderer, and store.
These are the contracts that bind the kernel together.

Wire format (what the storage slot holds): a JSON array of student objects
with camelCase keys, every value a string. Dates are YYYY-MM-DD, gpa is the
decimal's text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

COURSE_OPTIONS: list[str] = [
    "Computer Science",
    "Business Administration",
    "Engineering",
    "Mathematics",
    "Physics",
    "Chemistry",
    "Biology",
    "Psychology",
    "English Literature",
    "History",
    "Economics",
    "Political Science",
]

YEAR_OPTIONS: list[str] = [
    "Freshman",
    "Sophomore",
    "Junior",
    "Senior",
    "Graduate",
]


# ---------------------------------------------------------------------------
# Action type registry
# ---------------------------------------------------------------------------

ACTION_TYPES: set[str] = {
    # Collection
    "student.add",
    "student.update",
    "student.remove",
    "students.load",
    # Criteria (session only, never persisted)
    "criteria.search",
    "criteria.course",
    "criteria.year",
}

# Actions that change the student collection and therefore trigger a write
COLLECTION_ACTIONS: set[str] = {
    "student.add",
    "student.update",
    "student.remove",
    "students.load",
}

# Python attribute -> wire key
WIRE_KEYS: dict[str, str] = {
    "id": "id",
    "first_name": "firstName",
    "last_name": "lastName",
    "email": "email",
    "phone": "phone",
    "date_of_birth": "dateOfBirth",
    "address": "address",
    "course": "course",
    "year": "year",
    "gpa": "gpa",
    "enrollment_date": "enrollmentDate",
}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InvalidRecord(Exception):
    """A stored student object is missing a key or holds an unparsable value."""

    pass


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Student:
    """
    One enrolled person.

    `id` is assigned by the store and never changes afterwards. Every other
    field is validated by the form layer before it gets here; the kernel
    trusts its caller and only insists that gpa is a finite number and the
    dates are real dates.
    """

    id: str
    first_name: str
    last_name: str
    email: str
    phone: str
    date_of_birth: date
    address: str
    course: str
    year: str
    gpa: Decimal
    enrollment_date: date

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "dateOfBirth": self.date_of_birth.isoformat(),
            "address": self.address,
            "course": self.course,
            "year": self.year,
            "gpa": str(self.gpa),
            "enrollmentDate": self.enrollment_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Student:
        if not isinstance(d, dict):
            raise InvalidRecord(f"expected object, got {type(d).__name__}")

        missing = [key for key in WIRE_KEYS.values() if key not in d]
        if missing:
            raise InvalidRecord(f"missing keys: {', '.join(missing)}")

        return cls(
            id=str(d["id"]),
            first_name=str(d["firstName"]),
            last_name=str(d["lastName"]),
            email=str(d["email"]),
            phone=str(d["phone"]),
            date_of_birth=parse_date(d["dateOfBirth"], "dateOfBirth"),
            address=str(d["address"]),
            course=str(d["course"]),
            year=str(d["year"]),
            gpa=parse_gpa(d["gpa"]),
            enrollment_date=parse_date(d["enrollmentDate"], "enrollmentDate"),
        )


@dataclass(frozen=True)
class StoreState:
    """
    Everything the store owns.

    students keeps insertion order. The three criteria use "" for "no filter".
    """

    students: tuple[Student, ...] = ()
    search_term: str = ""
    filter_course: str = ""
    filter_year: str = ""


@dataclass
class Action:
    """
    A request to change the store state.
    The reducer reads only `type` and `payload`.
    """

    type: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass
class ReduceResult:
    """
    Result of applying one action to a state.
    The reducer never raises; it always returns one of these.
    """

    state: StoreState
    applied: bool
    error: str | None = None


@dataclass
class Statistics:
    """Aggregates over the whole collection (not the filtered view)."""

    total_students: int
    average_gpa: str
    courses: list[str]
    years: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalStudents": self.total_students,
            "averageGPA": self.average_gpa,
            "courses": list(self.courses),
            "years": list(self.years),
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_gpa(value: Any) -> Decimal:
    """Parse a gpa value into a finite Decimal. Raises InvalidRecord otherwise."""
    try:
        gpa = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidRecord(f"gpa is not a number: {value!r}") from None
    if not gpa.is_finite():
        raise InvalidRecord(f"gpa is not a finite number: {value!r}")
    return gpa


def parse_date(value: Any, name: str = "date") -> date:
    """Parse a YYYY-MM-DD string. Raises InvalidRecord otherwise."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise InvalidRecord(f"{name} is not a YYYY-MM-DD date: {value!r}") from None
