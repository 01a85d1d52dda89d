"""
Roster Kernel — Reducer

Pure function: (state, action) → ReduceResult
No side effects. No IO. Deterministic.

Given the same sequence of actions, produces the same state every time.
Identifiers are minted by the action factories, never here.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any

from roster.kernel.actions import validate_action
from roster.kernel.types import Action, ReduceResult, StoreState, Student

# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

SEED_STUDENTS: tuple[Student, ...] = (
    Student(
        id="1",
        first_name="John",
        last_name="Doe",
        email="john.doe@email.com",
        phone="+1-555-0123",
        date_of_birth=date(1998, 5, 15),
        address="123 Main St, City, State 12345",
        course="Computer Science",
        year="Senior",
        gpa=Decimal("3.8"),
        enrollment_date=date(2020, 9, 1),
    ),
    Student(
        id="2",
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
    ),
    Student(
        id="3",
        first_name="Mike",
        last_name="Johnson",
        email="mike.johnson@email.com",
        phone="+1-555-0125",
        date_of_birth=date(2000, 1, 10),
        address="789 Pine Rd, City, State 12347",
        course="Engineering",
        year="Sophomore",
        gpa=Decimal("3.9"),
        enrollment_date=date(2022, 9, 1),
    ),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def empty_state() -> StoreState:
    """No students, no criteria."""
    return StoreState()


def seed_state() -> StoreState:
    """The state used when storage holds nothing usable."""
    return StoreState(students=SEED_STUDENTS)


def reduce(state: StoreState, action: Action) -> ReduceResult:
    """
    Apply one action to the current state.
    Returns the new state + applied flag + error.

    Pure function. StoreState is frozen, so the input is never modified;
    rejected actions hand back the very same state object.
    """
    handler = _HANDLERS.get(action.type)
    if handler is None:
        return _reject(state, "UNKNOWN_ACTION", action.type)

    errors = validate_action(action.type, action.payload)
    if errors:
        return _reject(state, "INVALID_PAYLOAD", "; ".join(errors))

    return handler(state, action.payload)


def replay(actions: list[Action], initial: StoreState | None = None) -> StoreState:
    """
    Fold actions over a state, skipping rejected ones.
    replay(actions) == reduce(reduce(reduce(empty(), a1), a2), a3)...
    """
    state = initial if initial is not None else empty_state()
    for action in actions:
        result = reduce(state, action)
        if result.applied:
            state = result.state
    return state


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _reject(state: StoreState, code: str, msg: str) -> ReduceResult:
    return ReduceResult(state=state, applied=False, error=f"{code}: {msg}")


def _ok(state: StoreState) -> ReduceResult:
    return ReduceResult(state=state, applied=True)


def _index_of(students: tuple[Student, ...], student_id: str) -> int | None:
    for i, student in enumerate(students):
        if student.id == student_id:
            return i
    return None


# ---------------------------------------------------------------------------
# Action handlers
# ---------------------------------------------------------------------------


def _handle_student_add(state: StoreState, p: dict[str, Any]) -> ReduceResult:
    student: Student = p["student"]

    if _index_of(state.students, student.id) is not None:
        return _reject(state, "STUDENT_ALREADY_EXISTS", student.id)

    return _ok(replace(state, students=state.students + (student,)))


def _handle_student_update(state: StoreState, p: dict[str, Any]) -> ReduceResult:
    student: Student = p["student"]

    idx = _index_of(state.students, student.id)
    if idx is None:
        return _reject(state, "STUDENT_NOT_FOUND", student.id)

    students = state.students[:idx] + (student,) + state.students[idx + 1 :]
    return _ok(replace(state, students=students))


def _handle_student_remove(state: StoreState, p: dict[str, Any]) -> ReduceResult:
    student_id = p["id"]

    idx = _index_of(state.students, student_id)
    if idx is None:
        return _reject(state, "STUDENT_NOT_FOUND", student_id)

    students = state.students[:idx] + state.students[idx + 1 :]
    return _ok(replace(state, students=students))


def _handle_students_load(state: StoreState, p: dict[str, Any]) -> ReduceResult:
    return _ok(replace(state, students=tuple(p["students"])))


def _handle_criteria_search(state: StoreState, p: dict[str, Any]) -> ReduceResult:
    return _ok(replace(state, search_term=p["value"]))


def _handle_criteria_course(state: StoreState, p: dict[str, Any]) -> ReduceResult:
    return _ok(replace(state, filter_course=p["value"]))


def _handle_criteria_year(state: StoreState, p: dict[str, Any]) -> ReduceResult:
    return _ok(replace(state, filter_year=p["value"]))


# ---------------------------------------------------------------------------
# Handler dispatch table
# ---------------------------------------------------------------------------

_HANDLERS: dict[str, Any] = {
    "student.add": _handle_student_add,
    "student.update": _handle_student_update,
    "student.remove": _handle_student_remove,
    "students.load": _handle_students_load,
    "criteria.search": _handle_criteria_search,
    "criteria.course": _handle_criteria_course,
    "criteria.year": _handle_criteria_year,
}
