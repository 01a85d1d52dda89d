"""
Roster Kernel — Derived View

Read-only computations over the store state: the filtered list and the
aggregate statistics. Recomputed on every read; the collection is small, so
there is no caching.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from roster.kernel.types import Statistics, StoreState, Student

_TWO_PLACES = Decimal("0.01")


def matches_search(student: Student, term: str) -> bool:
    """Case-insensitive substring match on first name, last name, email, course."""
    if term == "":
        return True
    needle = term.lower()
    return any(
        needle in value.lower()
        for value in (student.first_name, student.last_name, student.email, student.course)
    )


def filter_students(state: StoreState) -> list[Student]:
    """
    Students passing the search term and both filters, in collection order.
    An empty criterion matches everything; course and year compare exactly.
    """
    return [
        s
        for s in state.students
        if matches_search(s, state.search_term)
        and (state.filter_course == "" or s.course == state.filter_course)
        and (state.filter_year == "" or s.year == state.filter_year)
    ]


def average_gpa(students: Iterable[Student]) -> str:
    """Mean gpa rounded half-up to two places, as text. "0.00" when empty."""
    values = [s.gpa for s in students]
    if not values:
        return "0.00"
    mean = sum(values, Decimal(0)) / len(values)
    return str(mean.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


def distinct(values: Iterable[str]) -> list[str]:
    """Unique values in order of first appearance."""
    return list(dict.fromkeys(values))


def compute_statistics(students: Iterable[Student]) -> Statistics:
    students = list(students)
    return Statistics(
        total_students=len(students),
        average_gpa=average_gpa(students),
        courses=distinct(s.course for s in students),
        years=distinct(s.year for s in students),
    )
