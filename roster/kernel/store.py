"""
Roster Kernel — Student Store

Sits between the pure functions (reducer, views) and the outside world
(the storage slot, the form and list layers). Owns the one StoreState of the
process and is its only write surface.

Operations: add, update, remove, set_search_term, set_course_filter,
set_year_filter, plus the read side (filtered_students, statistics).

This is where IO happens. The reducer and views are pure.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from roster.kernel import actions
from roster.kernel.reducer import reduce, seed_state
from roster.kernel.types import (
    COLLECTION_ACTIONS,
    Action,
    InvalidRecord,
    ReduceResult,
    Statistics,
    StoreState,
    Student,
)
from roster.kernel.views import compute_statistics, filter_students

if TYPE_CHECKING:
    from roster.kernel.forms import StudentForm

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "students"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class StudentNotFound(Exception):
    """No student with this id (raised only in strict mode)."""

    pass


class StorageError(Exception):
    """The storage slot could not be read or written."""

    pass


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------


class StudentStorage:
    """
    Abstract key-value storage: one named slot holding a text blob.
    Implement with a file for the CLI, or in-memory for tests.
    Implementations raise StorageError on failure.
    """

    def get(self, key: str) -> str | None:
        """Fetch the blob stored under key. Returns None if not set."""
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        raise NotImplementedError


class MemoryStorage(StudentStorage):
    """In-memory storage for testing."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.slots: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.slots.get(key)

    def set(self, key: str, value: str) -> None:
        self.slots[key] = value
        self.writes += 1


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def serialize_students(students: tuple[Student, ...] | list[Student]) -> str:
    """The slot's wire format: JSON array of camelCase string objects."""
    return json.dumps([s.to_dict() for s in students])


def deserialize_students(blob: str) -> list[Student]:
    """
    Parse a slot blob back into students.
    Raises InvalidRecord if the blob is not a JSON array of valid records.
    """
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise InvalidRecord(f"not valid JSON: {e}") from None

    if not isinstance(data, list):
        raise InvalidRecord(f"expected a JSON array, got {type(data).__name__}")

    students = [Student.from_dict(item) for item in data]

    seen: set[str] = set()
    for s in students:
        if s.id in seen:
            raise InvalidRecord(f"duplicate id: {s.id}")
        seen.add(s.id)
    return students


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class StudentStore:
    """
    The single authoritative holder of the student collection and criteria.
    Pass one instance to whatever renders the list and the forms.
    """

    def __init__(self, storage: StudentStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._state = self._hydrate()

    # -- read side --

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def students(self) -> tuple[Student, ...]:
        return self._state.students

    def get(self, student_id: str) -> Student | None:
        for student in self._state.students:
            if student.id == student_id:
                return student
        return None

    def filtered_students(self) -> list[Student]:
        return filter_students(self._state)

    def statistics(self) -> Statistics:
        return compute_statistics(self._state.students)

    # -- write side --

    def dispatch(self, action: Action) -> ReduceResult:
        """
        Reduce one action into the state.
        Collection changes are persisted before this returns.
        """
        result = reduce(self._state, action)
        if not result.applied:
            logger.debug("store: %s not applied (%s)", action.type, result.error)
            return result

        self._state = result.state
        if action.type in COLLECTION_ACTIONS:
            self._persist()
        return result

    def add(self, draft: StudentForm) -> Student:
        """Assign a fresh id to a validated form and append it."""
        student = draft.to_student(actions.new_student_id())
        result = self.dispatch(actions.add_student(student))
        if not result.applied:
            # uuid4 collision; the reducer refused to break id uniqueness
            raise RuntimeError(result.error)
        logger.info("store: added student %s", student.id)
        return student

    def update(self, student: Student, *, strict: bool = False) -> bool:
        """
        Replace the student with the same id, keeping its position.
        Unknown id is a no-op returning False, or StudentNotFound when strict.
        """
        result = self.dispatch(actions.update_student(student))
        if not result.applied and strict:
            raise StudentNotFound(student.id)
        return result.applied

    def remove(self, student_id: str, *, strict: bool = False) -> bool:
        """
        Delete the student with this id.
        Unknown id is a no-op returning False, or StudentNotFound when strict.
        """
        result = self.dispatch(actions.remove_student(student_id))
        if not result.applied and strict:
            raise StudentNotFound(student_id)
        if result.applied:
            logger.info("store: removed student %s", student_id)
        return result.applied

    def set_search_term(self, term: str) -> None:
        self.dispatch(actions.set_search_term(term))

    def set_course_filter(self, course: str) -> None:
        self.dispatch(actions.set_course_filter(course))

    def set_year_filter(self, year: str) -> None:
        self.dispatch(actions.set_year_filter(year))

    # -- persistence --

    def _hydrate(self) -> StoreState:
        """
        Initial state: the stored collection if the slot holds a valid one,
        otherwise the seed set (which is then written back to the slot).
        """
        state = seed_state()

        try:
            blob = self._storage.get(self._key)
        except StorageError as e:
            logger.warning("store: could not read slot %r, using seed data: %s", self._key, e)
            blob = None
        else:
            if blob is not None:
                try:
                    students = deserialize_students(blob)
                except InvalidRecord as e:
                    logger.warning("store: slot %r is corrupt, using seed data: %s", self._key, e)
                else:
                    result = reduce(state, actions.load_students(students))
                    logger.info("store: loaded %d students from %r", len(students), self._key)
                    return result.state

        self._write(state.students)
        return state

    def _persist(self) -> None:
        self._write(self._state.students)

    def _write(self, students: tuple[Student, ...]) -> None:
        try:
            self._storage.set(self._key, serialize_students(students))
        except StorageError as e:
            logger.error("store: failed to write slot %r, keeping in-memory state: %s", self._key, e)
