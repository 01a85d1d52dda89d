"""
Roster Kernel — Action Construction

Factory functions for creating well-formed actions.
Used by the store to wrap its operations before feeding them to the reducer,
and by tests to build actions concisely.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

from roster.kernel.types import ACTION_TYPES, Action, Student

# action type -> (required payload key, accepted value types)
_PAYLOAD_FIELDS: dict[str, tuple[str, type | tuple[type, ...]]] = {
    "student.add": ("student", Student),
    "student.update": ("student", Student),
    "student.remove": ("id", str),
    "students.load": ("students", (tuple, list)),
    "criteria.search": ("value", str),
    "criteria.course": ("value", str),
    "criteria.year": ("value", str),
}


def new_student_id() -> str:
    """A fresh, globally unique student identifier."""
    return str(uuid.uuid4())


def make_action(type: str, payload: dict[str, Any] | None = None) -> Action:
    return Action(type=type, payload=payload or {})


def add_student(student: Student) -> Action:
    """
    Append a student. The id on the record is used as-is.

    Callers normally get the record from StudentForm.to_student(new_student_id()).
    """
    return make_action("student.add", {"student": student})


def update_student(student: Student) -> Action:
    return make_action("student.update", {"student": student})


def remove_student(student_id: str) -> Action:
    return make_action("student.remove", {"id": student_id})


def load_students(students: Iterable[Student]) -> Action:
    """Replace the whole collection (hydration)."""
    return make_action("students.load", {"students": tuple(students)})


def set_search_term(term: str) -> Action:
    return make_action("criteria.search", {"value": term})


def set_course_filter(course: str) -> Action:
    return make_action("criteria.course", {"value": course})


def set_year_filter(year: str) -> Action:
    return make_action("criteria.year", {"value": year})


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_action(action_type: str, payload: Any) -> list[str]:
    """
    Check an action's type and payload structure.
    Returns a list of error strings. Empty list = valid.

    Structural only: whether the referenced student exists is the reducer's
    call.
    """
    if action_type not in ACTION_TYPES:
        return [f"Unknown action type: {action_type}"]

    if not isinstance(payload, dict):
        return ["Payload must be a dict"]

    key, expected = _PAYLOAD_FIELDS[action_type]
    if key not in payload:
        return [f"Missing payload key: {key}"]

    value = payload[key]
    if not isinstance(value, expected):
        return [f"Payload key {key!r} has the wrong type: {type(value).__name__}"]

    if key == "students":
        errors = [f"students[{i}] is not a Student" for i, s in enumerate(value) if not isinstance(s, Student)]
        if errors:
            return errors
        ids = [s.id for s in value]
        if len(set(ids)) != len(ids):
            return ["students contains duplicate ids"]

    return []
