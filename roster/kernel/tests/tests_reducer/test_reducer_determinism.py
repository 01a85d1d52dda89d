"""
Roster Reducer — Determinism and Purity Tests

Same actions in, same state out. The input state is never modified.
"""

from roster.kernel import actions
from roster.kernel.reducer import empty_state, reduce, replay


def _actions(make_student):
    return [
        actions.add_student(make_student("a", first_name="Ann")),
        actions.add_student(make_student("b", first_name="Bob")),
        actions.set_search_term("an"),
        actions.update_student(make_student("a", first_name="Anna")),
        actions.add_student(make_student("c", first_name="Cy")),
        actions.remove_student("b"),
        actions.remove_student("missing"),
        actions.set_year_filter("Senior"),
    ]


def test_replay_is_deterministic(make_student):
    assert replay(_actions(make_student)) == replay(_actions(make_student))


def test_replay_matches_manual_fold(make_student):
    state = empty_state()
    for action in _actions(make_student):
        result = reduce(state, action)
        if result.applied:
            state = result.state

    assert replay(_actions(make_student)) == state


def test_replay_result(make_student):
    state = replay(_actions(make_student))

    assert [s.first_name for s in state.students] == ["Anna", "Cy"]
    assert state.search_term == "an"
    assert state.filter_year == "Senior"


def test_replay_from_initial_state(two_students, make_student):
    state = replay([actions.add_student(make_student("3"))], initial=two_students)
    assert [s.id for s in state.students] == ["1", "2", "3"]


def test_input_state_is_not_modified(two_students, make_student):
    before = two_students.students

    reduce(two_students, actions.add_student(make_student("3")))
    reduce(two_students, actions.remove_student("1"))
    reduce(two_students, actions.set_search_term("x"))

    assert two_students.students is before
    assert two_students.search_term == ""
