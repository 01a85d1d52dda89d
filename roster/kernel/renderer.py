"""
Roster Kernel — Renderer

Pure function: (state, channel) → text or HTML string
No IO. Deterministic: same state → same output, always.

Two channels:
- text: terminal listing used by the CLI
- html: stats grid + student cards fragment

Both render the statistics block and the filtered student list through
Mustache templates. The HTML templates use {{var}} (escaped); the text
templates use {{{var}}} since nothing is interpreted there.
"""

from __future__ import annotations

from typing import Any

import chevron

from roster.kernel.types import Statistics, StoreState, Student
from roster.kernel.views import compute_statistics, filter_students

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

STUDENT_TEXT = """\
{{{first_name}}} {{{last_name}}}  [{{{id}}}]
  Email: {{{email}}}
  Phone: {{{phone}}}
  Course: {{{course}}}
  Year: {{{year}}}
  GPA: {{{gpa}}}
  Date of Birth: {{{date_of_birth}}}
  Enrollment Date: {{{enrollment_date}}}
  Address: {{{address}}}
"""

TEXT_TEMPLATE = """\
Total Students: {{{total_students}}}
Average GPA: {{{average_gpa}}}
Courses: {{{course_count}}}
Filtered Results: {{{filtered_count}}}
{{#students}}

""" + STUDENT_TEXT + """\
{{/students}}
{{^students}}

No students found
Try adjusting your search criteria or add a new student.
{{/students}}
"""

HTML_TEMPLATE = """\
<div class="stats-grid">
  <div class="stat-card"><div class="stat-number">{{total_students}}</div><div class="stat-label">Total Students</div></div>
  <div class="stat-card"><div class="stat-number">{{average_gpa}}</div><div class="stat-label">Average GPA</div></div>
  <div class="stat-card"><div class="stat-number">{{course_count}}</div><div class="stat-label">Courses</div></div>
  <div class="stat-card"><div class="stat-number">{{filtered_count}}</div><div class="stat-label">Filtered Results</div></div>
</div>
{{#has_students}}
<div class="student-grid">
{{#students}}
  <div class="student-card" data-id="{{id}}">
    <div class="student-info">
      <h3>{{first_name}} {{last_name}}</h3>
      <p><strong>Email:</strong> {{email}}</p>
      <p><strong>Phone:</strong> {{phone}}</p>
      <p><strong>Course:</strong> {{course}}</p>
      <p><strong>Year:</strong> {{year}}</p>
      <p><strong>GPA:</strong> {{gpa}}</p>
      <p><strong>Date of Birth:</strong> {{date_of_birth}}</p>
      <p><strong>Enrollment Date:</strong> {{enrollment_date}}</p>
      <p><strong>Address:</strong> {{address}}</p>
    </div>
  </div>
{{/students}}
</div>
{{/has_students}}
{{^has_students}}
<div class="card no-students">
  <h3>No students found</h3>
  <p>Try adjusting your search criteria or add a new student.</p>
</div>
{{/has_students}}
"""

_TEMPLATES: dict[str, str] = {
    "text": TEXT_TEMPLATE,
    "html": HTML_TEMPLATE,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(state: StoreState, channel: str = "text") -> str:
    """
    Render statistics plus the filtered student list.
    Raises ValueError for an unknown channel.
    """
    template = _TEMPLATES.get(channel)
    if template is None:
        raise ValueError(f"Unknown channel: {channel}")

    students = filter_students(state)
    context = build_context(compute_statistics(state.students), students)
    return chevron.render(template, context)


def render_student(student: Student) -> str:
    """One student as text, the same block the list uses."""
    return chevron.render(STUDENT_TEXT, _student_context(student)).rstrip()


def build_context(stats: Statistics, students: list[Student]) -> dict[str, Any]:
    """Mustache context: flat stats plus one dict of display strings per student."""
    return {
        "total_students": stats.total_students,
        "average_gpa": stats.average_gpa,
        "course_count": len(stats.courses),
        "filtered_count": len(students),
        "has_students": bool(students),
        "students": [_student_context(s) for s in students],
    }


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _student_context(student: Student) -> dict[str, str]:
    return {
        "id": student.id,
        "first_name": student.first_name,
        "last_name": student.last_name,
        "email": student.email,
        "phone": student.phone,
        "course": student.course,
        "year": student.year,
        "gpa": str(student.gpa),
        "date_of_birth": student.date_of_birth.isoformat(),
        "enrollment_date": student.enrollment_date.isoformat(),
        "address": student.address,
    }
