import re
from functools import lru_cache
from typing import Iterable, Pattern

from quiz_import.config import OPTION_LABELS


# ---------- REGEXES ----------
# building blocks

QNUM_STR = r"(\d+)\.\s+"                      # "12. "  -> group(1): number as written
LABEL_STR = rf"[{OPTION_LABELS}][.)]"         # "a)", "B.", "3)"


def marker_class(markers: Iterable[str]) -> str:
    """Character class matching any of the given correctness markers."""
    return "[" + "".join(re.escape(m) for m in markers) + "]"


# "12. What is..." -- only at the very start of the line, so "10:30",
# "3.5 kg" and indented numbers never start a question.
QUESTION_MARKER_RE = re.compile(
    rf"""^
        {QNUM_STR}
        (.*?)\s*$                 # prompt text on the marker line -> group(2)
    """,
    re.VERBOSE,
)

# used by the normalizer
QUESTION_NUMBER_PREFIX_RE = re.compile(rf"^{QNUM_STR}")
OPTION_LABEL_PREFIX_RE = re.compile(rf"^{LABEL_STR}\s+")


@lru_cache(maxsize=32)
def option_line_re(markers: tuple) -> Pattern:
    """
    Option line, e.g. "b) Paris", "B. + Paris" or "+b) Paris".

    A marker glued in front of the label is captured as group("pre"); a
    marker after the label stays at the start of group("body").
    """
    return re.compile(
        rf"""^\s*
            (?P<pre>{marker_class(markers)})?\s*
            (?P<label>[{OPTION_LABELS}])[.)]\s+
            (?P<body>.*?)\s*$
        """,
        re.VERBOSE,
    )


@lru_cache(maxsize=32)
def body_marker_re(markers: tuple) -> Pattern:
    """Correctness marker at the start of option text: "+ Paris", "– 4"."""
    return re.compile(rf"^(?P<marker>{marker_class(markers)})\s+(?P<rest>.*)$")


@lru_cache(maxsize=32)
def marker_prefix_re(markers: tuple) -> Pattern:
    """
    Leading marker to strip from display text: followed by whitespace, or glued
    to an option label ("+b) Paris"). "-5" keeps its sign.
    """
    return re.compile(rf"^{marker_class(markers)}(?:\s+|(?={LABEL_STR}\s))")


__all__ = [
    # building blocks
    "QNUM_STR",
    "LABEL_STR",
    "marker_class",

    # compiled regexes
    "QUESTION_MARKER_RE",
    "QUESTION_NUMBER_PREFIX_RE",
    "OPTION_LABEL_PREFIX_RE",

    # marker-dependent regexes
    "option_line_re",
    "body_marker_re",
    "marker_prefix_re",
]
