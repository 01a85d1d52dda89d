"""REPL for Roster CLI."""

from __future__ import annotations

from pathlib import Path

from roster.kernel.forms import validate_form
from roster.kernel.renderer import render, render_student
from roster.kernel.store import StudentStore
from roster.kernel.types import COURSE_OPTIONS, YEAR_OPTIONS

# (form key, prompt label)
FORM_FIELDS: list[tuple[str, str]] = [
    ("firstName", "First Name"),
    ("lastName", "Last Name"),
    ("email", "Email"),
    ("phone", "Phone"),
    ("dateOfBirth", "Date of Birth (YYYY-MM-DD)"),
    ("address", "Address"),
    ("course", "Course"),
    ("year", "Year"),
    ("gpa", "GPA"),
    ("enrollmentDate", "Enrollment Date (YYYY-MM-DD)"),
]

_OPTIONS: dict[str, list[str]] = {
    "course": COURSE_OPTIONS,
    "year": YEAR_OPTIONS,
}

CANCEL = "/cancel"


class FormCancelled(Exception):
    pass


class Repl:
    """Interactive REPL over one StudentStore."""

    def __init__(self, store: StudentStore):
        self.store = store
        self.running = True

    def start(self):
        """Start the REPL."""
        stats = self.store.statistics()
        print(f"roster > {stats.total_students} students. Type /help for commands.")

        while self.running:
            try:
                line = input("roster > ").strip()

                if not line:
                    continue

                if line.startswith("/"):
                    self._handle_command(line)
                else:
                    # Plain text is a search
                    self._set_search(line)

            except (EOFError, KeyboardInterrupt):
                print()
                break

    def _handle_command(self, line: str):
        """Handle REPL commands."""
        parts = line.split(maxsplit=1)
        cmd = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else ""

        if cmd == "/quit":
            self.running = False
            print("Goodbye.")
        elif cmd == "/list":
            self._list()
        elif cmd == "/show":
            if arg:
                self._show(arg)
            else:
                print("Usage: /show <id>")
        elif cmd == "/add":
            self._add()
        elif cmd == "/edit":
            if arg:
                self._edit(arg)
            else:
                print("Usage: /edit <id>")
        elif cmd == "/delete":
            if arg:
                self._delete(arg)
            else:
                print("Usage: /delete <id>")
        elif cmd == "/search":
            self._set_search(arg)
        elif cmd == "/course":
            self._set_course(arg)
        elif cmd == "/year":
            self._set_year(arg)
        elif cmd == "/clear":
            self.store.set_search_term("")
            self.store.set_course_filter("")
            self.store.set_year_filter("")
            print("  Search and filters cleared.")
        elif cmd == "/stats":
            self._stats()
        elif cmd == "/export":
            if arg:
                self._export(arg)
            else:
                print("Usage: /export <file.html>")
        elif cmd == "/help":
            self._show_help()
        else:
            print(f"Unknown command: {cmd}")
            print("Type /help for available commands.")

    # -- list side --

    def _list(self):
        print()
        for line in render(self.store.state, channel="text").rstrip().split("\n"):
            print(f"  {line}" if line else "")
        print()

    def _show(self, student_id: str):
        student = self.store.get(student_id)
        if student is None:
            print(f"  No student with id {student_id}.")
            return
        for line in render_student(student).split("\n"):
            print(f"  {line}")

    def _stats(self):
        stats = self.store.statistics()
        print(f"  Total Students: {stats.total_students}")
        print(f"  Average GPA: {stats.average_gpa}")
        print(f"  Courses: {', '.join(stats.courses) or '-'}")
        print(f"  Years: {', '.join(stats.years) or '-'}")
        print(f"  Filtered Results: {len(self.store.filtered_students())}")

    def _set_search(self, term: str):
        self.store.set_search_term(term)
        self._list()

    def _set_course(self, course: str):
        course = _pick_option(course, COURSE_OPTIONS)
        self.store.set_course_filter(course)
        print(f"  Course filter: {course or 'All Courses'}")

    def _set_year(self, year: str):
        year = _pick_option(year, YEAR_OPTIONS)
        self.store.set_year_filter(year)
        print(f"  Year filter: {year or 'All Years'}")

    def _export(self, path: str):
        target = Path(path).expanduser()
        try:
            target.write_text(render(self.store.state, channel="html"), encoding="utf-8")
        except OSError as e:
            print(f"  Failed to export: {e}")
            return
        print(f"  Wrote {target}")

    # -- form side --

    def _add(self):
        print("  Add New Student (type /cancel to abort)")
        try:
            form = self._prompt_form({})
        except FormCancelled:
            print("  Cancelled.")
            return
        student = self.store.add(form)
        print(f"  Added {student.full_name} [{student.id}]")

    def _edit(self, student_id: str):
        student = self.store.get(student_id)
        if student is None:
            print(f"  No student with id {student_id}.")
            return

        print("  Edit Student (Enter keeps the current value, /cancel aborts)")
        try:
            form = self._prompt_form(student.to_dict())
        except FormCancelled:
            print("  Cancelled.")
            return
        self.store.update(form.to_student(student.id))
        print(f"  Updated {student_id}")

    def _delete(self, student_id: str):
        student = self.store.get(student_id)
        if student is None:
            print(f"  No student with id {student_id}.")
            return

        answer = input(f"  Are you sure you want to delete {student.full_name}? [y/N] ").strip().lower()
        if answer not in ("y", "yes"):
            print("  Kept.")
            return
        self.store.remove(student_id)
        print(f"  Deleted {student_id}")

    def _prompt_form(self, initial: dict[str, str]):
        """
        Prompt for every field, then re-prompt only the failing ones until
        the form validates. Raises FormCancelled on /cancel or EOF.
        """
        values = dict(initial)
        pending = [key for key, _ in FORM_FIELDS]

        while True:
            for key in pending:
                values[key] = self._prompt_field(key, values.get(key, ""))

            form, errors = validate_form(values)
            if form is not None:
                return form

            for key, message in errors.items():
                print(f"  ! {message}")
            pending = [key for key, _ in FORM_FIELDS if key in errors]

    def _prompt_field(self, key: str, current: str) -> str:
        label = dict(FORM_FIELDS)[key]
        options = _OPTIONS.get(key)
        if options:
            print("    " + "  ".join(f"{i}) {name}" for i, name in enumerate(options, 1)))

        suffix = f" [{current}]" if current else ""
        try:
            raw = input(f"    {label}{suffix}: ").strip()
        except EOFError:
            raise FormCancelled() from None

        if raw == CANCEL:
            raise FormCancelled()
        if not raw:
            return current
        return _pick_option(raw, options) if options else raw

    def _show_help(self):
        """Show help message."""
        print("""
  REPL Commands:
    /list            - Show statistics and the filtered students
    /show <id>       - Show one student
    /add             - Add a new student
    /edit <id>       - Edit a student
    /delete <id>     - Delete a student (asks first)
    /search [term]   - Search by name, email, or course (empty clears)
    /course [name|n] - Filter by course (empty shows all courses)
    /year [name|n]   - Filter by year (empty shows all years)
    /clear           - Clear search and filters
    /stats           - Show statistics
    /export <file>   - Write the current view as HTML
    /help            - Show this help
    /quit            - Exit REPL

  Any other text is used as the search term.
""")


def _pick_option(value: str, options: list[str] | None) -> str:
    """Accept a 1-based option number as shorthand for the option itself."""
    if options and value.isdigit() and 1 <= int(value) <= len(options):
        return options[int(value) - 1]
    return value
