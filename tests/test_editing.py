import pytest

from quiz_import.editing import (
    add_question,
    delete_at,
    delete_question,
    find_index,
    merge,
    merge_result,
    renumber,
    set_correct_option,
    update_option_text,
    update_question_text,
)
from quiz_import.errors import AmbiguousCorrectAnswerError, ValidationError
from quiz_import.models import Option, ParsedResult, Question
from quiz_import.parsing import parse_questions


def make_question(text, number=1, correct=0):
    return Question(
        number=number,
        text=text,
        options=[Option(f"{text}-{i}", i == correct) for i in range(4)],
    )


@pytest.fixture
def three():
    return renumber([make_question("q1"), make_question("q2"), make_question("q3")])


def test_renumber(three):
    assert [q.number for q in three] == [1, 2, 3]
    assert [q.text for q in three] == ["q1", "q2", "q3"]


def test_scenario_c_merge():
    q1, q2 = renumber([make_question("q1"), make_question("q2")])
    q3 = make_question("q3")

    merged = merge([q1, q2], [q3])

    assert [q.text for q in merged] == ["q1", "q2", "q3"]
    assert [q.number for q in merged] == [1, 2, 3]
    assert merged[0] is q1 and merged[1] is q2


def test_merge_length_and_numbering(three, scenario_a_text):
    parsed = parse_questions(scenario_a_text)
    merged = merge(three, parsed)

    assert len(merged) == len(three) + len(parsed.questions)
    for i, q in enumerate(merged):
        assert q.number == i + 1
    assert [q.text for q in merged[:3]] == ["q1", "q2", "q3"]


def test_merge_does_not_mutate_inputs(three):
    incoming = [make_question("new")]
    snapshot = list(three)

    merge(three, incoming)

    assert three == snapshot
    assert incoming[0].number == 1


def test_merge_same_batch_twice_gets_distinct_uids(three):
    merged = merge(three, three)
    assert len({q.uid for q in merged}) == 6


def test_merge_renumbers_warnings():
    parsed = parse_questions("1. A\na) x\n+b) y\n2. B\na) x\nb) y")
    merged = merge(parsed.questions, parsed)

    flagged = [q for q in merged if q.warnings]
    assert [q.number for q in flagged] == [2, 4]
    assert [w.number for q in flagged for w in q.warnings] == [2, 4]


def test_merge_result_keeps_first_title():
    first = parse_questions("Quiz one\n1. A\n+a) x")
    second = parse_questions("Quiz two\n1. B\n+a) y")

    quiz = merge_result(None, first)
    quiz = merge_result(quiz, second)

    assert quiz.title == "Quiz one"
    assert [q.text for q in quiz.questions] == ["A", "B"]
    assert [q.number for q in quiz.questions] == [1, 2]


def test_merge_result_adopts_title_when_missing():
    quiz = ParsedResult(questions=[], title=None)
    parsed = parse_questions("Quiz two\n1. B\n+a) y")
    assert merge_result(quiz, parsed).title == "Quiz two"


@pytest.mark.parametrize("k", [0, 2, 4])
def test_delete_at_renumbers(k):
    questions = renumber([make_question(f"q{i}") for i in range(5)])

    remaining = delete_at(questions, k)

    assert len(remaining) == 4
    assert [q.number for q in remaining] == [1, 2, 3, 4]
    expected = [q.text for i, q in enumerate(questions) if i != k]
    assert [q.text for q in remaining] == expected
    assert len(questions) == 5


def test_delete_at_out_of_range(three):
    with pytest.raises(IndexError):
        delete_at(three, 3)


def test_delete_question_by_uid(three):
    remaining = delete_question(three, three[1].uid)
    assert [q.text for q in remaining] == ["q1", "q3"]
    assert remaining[1].uid == three[2].uid
    assert remaining[1].number == 2

    with pytest.raises(KeyError):
        delete_question(remaining, three[1].uid)


def test_find_index(three):
    assert find_index(three, three[2].uid) == 2


def test_update_question_text(three):
    edited = update_question_text(three, three[0].uid, "new text")
    assert edited[0].text == "new text"
    assert three[0].text == "q1"


def test_update_option_text(three):
    edited = update_option_text(three, three[1].uid, 2, "changed")
    assert edited[1].options[2].text == "changed"
    assert edited[1].options[2].is_correct is False
    assert three[1].options[2].text == "q2-2"

    with pytest.raises(IndexError):
        update_option_text(three, three[1].uid, 9, "nope")


def test_set_correct_option_is_exclusive_and_clears_warnings():
    parsed = parse_questions("1. A\na) x\nb) y\nc) z")
    question = parsed.questions[0]
    assert question.warnings

    edited = set_correct_option(parsed.questions, question.uid, 2)

    assert [o.is_correct for o in edited[0].options] == [False, False, True]
    assert edited[0].warnings == ()
    assert question.warnings[0].reason == AmbiguousCorrectAnswerError.MISSING


def test_add_question(three):
    options = [Option(" yes ", True), Option("no")]
    grown = add_question(three, " Is it? ", options)

    assert len(grown) == 4
    assert grown[-1].number == 4
    assert grown[-1].text == "Is it?"
    assert [o.text for o in grown[-1].options] == ["yes", "no"]
    assert len(three) == 3


@pytest.mark.parametrize(
    "text, options",
    [
        ("", [Option("a", True), Option("b")]),
        ("Q?", []),
        ("Q?", [Option("a", True), Option("  ")]),
        ("Q?", [Option("a"), Option("b")]),
        ("Q?", [Option("a", True), Option("b", True)]),
    ],
)
def test_add_question_validation(three, text, options):
    with pytest.raises(ValidationError):
        add_question(three, text, options)
