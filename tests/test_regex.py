import re
from quiz_import.config import DEFAULT_CORRECT_MARKERS
from quiz_import.regexes import (
    LABEL_STR,
    QNUM_STR,
    QUESTION_MARKER_RE,
    body_marker_re,
    marker_class,
    marker_prefix_re,
    option_line_re,
)

MARKERS = DEFAULT_CORRECT_MARKERS


def test_qnum_str():
    m = re.match(QNUM_STR, "12. What")
    assert m and m.group(1) == "12"

    assert re.match(QNUM_STR, "12.5 kg") is None


def test_label_str():
    for label in ("a)", "B.", "3)", "d."):
        assert re.match(LABEL_STR, label)
    assert re.match(LABEL_STR, "e)") is None


def test_question_marker_re():
    m = QUESTION_MARKER_RE.match("7. Which gas is inert?")
    assert m
    assert m.group(1) == "7"
    assert m.group(2) == "Which gas is inert?"


def test_question_marker_re_rejects_lookalikes():
    for line in ("10:30 meeting", " 3. indented", "3.5 kg of salt", "Q1. nope", "1.no space"):
        assert QUESTION_MARKER_RE.match(line) is None, line


def test_option_line_re():
    m = option_line_re(MARKERS).match("b) Paris")
    assert m and m.group("label") == "b" and m.group("pre") is None
    assert m.group("body") == "Paris"

    m2 = option_line_re(MARKERS).match("+b) Paris")
    assert m2 and m2.group("pre") == "+" and m2.group("body") == "Paris"

    m3 = option_line_re(MARKERS).match("C. – Madrid")
    assert m3 and m3.group("body") == "– Madrid"


def test_body_marker_re():
    assert body_marker_re(MARKERS).match("* 4")
    assert body_marker_re(MARKERS).match("– 4")
    assert body_marker_re(MARKERS).match("-5") is None


def test_marker_prefix_re():
    assert marker_prefix_re(MARKERS).sub("", "+ Paris") == "Paris"
    assert marker_prefix_re(MARKERS).sub("", "+b) Paris") == "b) Paris"
    assert marker_prefix_re(MARKERS).sub("", "-5") == "-5"


def test_marker_class_escapes():
    pattern = re.compile(marker_class(("]", "^", "#")))
    assert pattern.match("]") and pattern.match("^") and pattern.match("#")
    assert pattern.match("a") is None
