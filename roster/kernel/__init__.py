"""
Roster Kernel — the student records engine.

Components:
  reducer   — (state, action) → state  (pure, deterministic)
  views     — filtered list and statistics over a state (pure)
  forms     — validation boundary for raw user input
  store     — owns the state, persists the collection to a storage slot
  renderer  — text / HTML rendering of the derived view
"""

from roster.kernel.file_storage import FileStorage
from roster.kernel.forms import StudentForm, validate_form
from roster.kernel.reducer import empty_state, reduce, replay, seed_state
from roster.kernel.renderer import render
from roster.kernel.store import (
    MemoryStorage,
    StorageError,
    StudentNotFound,
    StudentStorage,
    StudentStore,
)
from roster.kernel.types import COURSE_OPTIONS, YEAR_OPTIONS, Statistics, StoreState, Student
from roster.kernel.views import compute_statistics, filter_students

__all__ = [
    "reduce",
    "replay",
    "empty_state",
    "seed_state",
    "filter_students",
    "compute_statistics",
    "StudentForm",
    "validate_form",
    "render",
    "StudentStore",
    "StudentStorage",
    "MemoryStorage",
    "FileStorage",
    "StorageError",
    "StudentNotFound",
    "Student",
    "StoreState",
    "Statistics",
    "COURSE_OPTIONS",
    "YEAR_OPTIONS",
]
