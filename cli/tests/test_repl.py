"""Tests for the Roster REPL: commands drive the store, output goes to stdout."""

import pytest

from roster.kernel.store import MemoryStorage, StudentStore
from roster_cli.repl import Repl

ADA = [
    "Ada",
    "Lovelace",
    "ada@example.com",
    "+44-20-0000",
    "2001-12-10",
    "12 St James's Square, London",
    "4",  # Mathematics, by number
    "Freshman",
    "4.0",
    "2023-09-01",
]


@pytest.fixture
def store():
    return StudentStore(MemoryStorage())


def run(monkeypatch, store, lines):
    """Feed lines to input() until they run out (EOF ends the REPL)."""
    feed = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    repl = Repl(store)
    repl.start()
    return repl


def test_quit(monkeypatch, store, capsys):
    repl = run(monkeypatch, store, ["/quit"])

    assert repl.running is False
    assert "Goodbye." in capsys.readouterr().out


def test_list_shows_stats_and_students(monkeypatch, store, capsys):
    run(monkeypatch, store, ["/list"])
    out = capsys.readouterr().out

    assert "Total Students: 3" in out
    assert "Jane Smith  [2]" in out


def test_plain_text_searches(monkeypatch, store, capsys):
    run(monkeypatch, store, ["jane"])
    out = capsys.readouterr().out

    assert store.state.search_term == "jane"
    assert "Filtered Results: 1" in out
    assert "John Doe" not in out


def test_filters_by_name_and_number(monkeypatch, store):
    run(monkeypatch, store, ["/course Engineering", "/year 2"])

    assert store.state.filter_course == "Engineering"
    assert store.state.filter_year == "Sophomore"
    assert [s.id for s in store.filtered_students()] == ["3"]


def test_clear_resets_criteria(monkeypatch, store):
    run(monkeypatch, store, ["/search jo", "/course Engineering", "/year Senior", "/clear"])

    assert store.state.search_term == ""
    assert store.state.filter_course == ""
    assert store.state.filter_year == ""


def test_add_student(monkeypatch, store, capsys):
    run(monkeypatch, store, ["/add", *ADA])

    added = store.students[-1]
    assert len(store.students) == 4
    assert added.full_name == "Ada Lovelace"
    assert added.course == "Mathematics"
    assert "Added Ada Lovelace" in capsys.readouterr().out


def test_add_reprompts_invalid_fields(monkeypatch, store, capsys):
    bad = list(ADA)
    bad[2] = "not-an-email"
    bad[8] = "5"
    run(monkeypatch, store, ["/add", *bad, "ada@example.com", "3.9"])

    out = capsys.readouterr().out
    assert "Email is invalid" in out
    assert "GPA must be a number between 0 and 4" in out
    assert store.students[-1].email == "ada@example.com"
    assert str(store.students[-1].gpa) == "3.9"


def test_add_cancel(monkeypatch, store, capsys):
    run(monkeypatch, store, ["/add", "Ada", "/cancel"])

    assert len(store.students) == 3
    assert "Cancelled." in capsys.readouterr().out


def test_edit_keeps_blank_fields(monkeypatch, store):
    # Change only the last name; Enter keeps everything else
    answers = ["", "Smith-Jones"] + [""] * 8
    run(monkeypatch, store, ["/edit 2", *answers])

    jane = store.get("2")
    assert jane.last_name == "Smith-Jones"
    assert jane.first_name == "Jane"
    assert [s.id for s in store.students] == ["1", "2", "3"]


def test_edit_unknown_id(monkeypatch, store, capsys):
    run(monkeypatch, store, ["/edit nope"])
    assert "No student with id nope." in capsys.readouterr().out


def test_delete_confirmed(monkeypatch, store):
    run(monkeypatch, store, ["/delete 1", "y"])
    assert store.get("1") is None


def test_delete_declined(monkeypatch, store, capsys):
    run(monkeypatch, store, ["/delete 1", "n"])

    assert store.get("1") is not None
    assert "Kept." in capsys.readouterr().out


def test_show(monkeypatch, store, capsys):
    run(monkeypatch, store, ["/show 3"])
    assert "Mike Johnson  [3]" in capsys.readouterr().out


def test_stats(monkeypatch, store, capsys):
    run(monkeypatch, store, ["/stats"])
    out = capsys.readouterr().out

    assert "Average GPA: 3.77" in out
    assert "Courses: Computer Science, Business Administration, Engineering" in out


def test_export_html(monkeypatch, store, tmp_path):
    target = tmp_path / "students.html"
    run(monkeypatch, store, [f"/export {target}"])

    assert 'class="student-card"' in target.read_text()


@pytest.mark.parametrize("line", ["/show", "/edit", "/delete", "/export"])
def test_usage_messages(monkeypatch, store, capsys, line):
    run(monkeypatch, store, [line])
    assert "Usage:" in capsys.readouterr().out


def test_unknown_command(monkeypatch, store, capsys):
    run(monkeypatch, store, ["/frobnicate"])
    assert "Unknown command: /frobnicate" in capsys.readouterr().out
