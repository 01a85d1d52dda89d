"""
Roster Kernel — Form Validation

Validates raw user input before it reaches the store.
The store never re-checks a record; everything a form submits goes through
StudentForm first. Validation is field-level: each failing field gets one
human-readable message, keyed by its camelCase form name.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from roster.kernel.types import WIRE_KEYS, Student

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")

GPA_MIN = Decimal("0")
GPA_MAX = Decimal("4")

REQUIRED_MESSAGES: dict[str, str] = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "email": "Email is required",
    "phone": "Phone is required",
    "date_of_birth": "Date of birth is required",
    "address": "Address is required",
    "course": "Course is required",
    "year": "Year is required",
    "gpa": "GPA is required",
    "enrollment_date": "Enrollment date is required",
}

_FORM_KEYS: dict[str, str] = {wire: attr for attr, wire in WIRE_KEYS.items() if attr != "id"}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class StudentForm(BaseModel):
    """A complete, validated student record that has no id yet."""

    model_config = ConfigDict(extra="forbid", frozen=True)

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

    @field_validator("first_name", "last_name", "phone", "address", "course", "year", mode="before")
    @classmethod
    def _required_text(cls, value: Any, info: ValidationInfo) -> Any:
        if _is_blank(value):
            raise ValueError(REQUIRED_MESSAGES[info.field_name])
        return value

    @field_validator("email", mode="before")
    @classmethod
    def _valid_email(cls, value: Any) -> Any:
        if _is_blank(value):
            raise ValueError(REQUIRED_MESSAGES["email"])
        if not EMAIL_RE.search(str(value)):
            raise ValueError("Email is invalid")
        return value

    @field_validator("date_of_birth", "enrollment_date", mode="before")
    @classmethod
    def _valid_date(cls, value: Any, info: ValidationInfo) -> Any:
        if _is_blank(value):
            raise ValueError(REQUIRED_MESSAGES[info.field_name])
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value).strip())
        except ValueError:
            label = REQUIRED_MESSAGES[info.field_name].removesuffix(" is required")
            raise ValueError(f"{label} must be a valid date") from None

    @field_validator("gpa", mode="before")
    @classmethod
    def _valid_gpa(cls, value: Any) -> Any:
        if _is_blank(value):
            raise ValueError(REQUIRED_MESSAGES["gpa"])
        try:
            gpa = Decimal(str(value).strip())
        except InvalidOperation:
            gpa = None
        if gpa is None or not gpa.is_finite() or gpa < GPA_MIN or gpa > GPA_MAX:
            raise ValueError("GPA must be a number between 0 and 4")
        return gpa

    def to_student(self, student_id: str) -> Student:
        return Student(id=student_id, **self.model_dump())

    @classmethod
    def from_student(cls, student: Student) -> StudentForm:
        """Populate the edit form from an existing record."""
        return cls(
            first_name=student.first_name,
            last_name=student.last_name,
            email=student.email,
            phone=student.phone,
            date_of_birth=student.date_of_birth,
            address=student.address,
            course=student.course,
            year=student.year,
            gpa=student.gpa,
            enrollment_date=student.enrollment_date,
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_form(raw: Mapping[str, Any]) -> tuple[StudentForm | None, dict[str, str]]:
    """
    Validate raw form input (camelCase keys, usually all strings).

    Returns (form, {}) on success, (None, errors) otherwise, where errors maps
    each failing camelCase field to its first message. An "id" key is ignored
    so an edited record can be fed straight back in.
    """
    data: dict[str, Any] = {}
    unknown: list[str] = []
    for key, value in raw.items():
        if key == "id":
            continue
        if key in _FORM_KEYS:
            data[_FORM_KEYS[key]] = value
        else:
            unknown.append(key)

    errors: dict[str, str] = {key: "Unknown field" for key in unknown}

    try:
        form = StudentForm(**data)
    except ValidationError as e:
        for err in e.errors():
            attr = str(err["loc"][0]) if err["loc"] else ""
            key = WIRE_KEYS.get(attr, attr)
            if key in errors:
                continue
            errors[key] = _message_for(attr, err)
        return None, errors

    if errors:
        return None, errors
    return form, {}


def _message_for(attr: str, err: Any) -> str:
    if err["type"] == "missing":
        return REQUIRED_MESSAGES.get(attr, "This field is required")
    if err["type"] == "value_error":
        return str(err["ctx"]["error"])
    return err["msg"]
