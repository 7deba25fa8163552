"""
Display cleanup for imported question and option text.

Steps, in order:
  1. question text: drop the leading "<digits>." number
  2. option text: drop the leading "a)" / "B." / "3)" label
  3. option text: drop a leading correctness marker
  4. trim surrounding whitespace

The steps are repeated until the text stops changing, so cleaning already
clean text is a no-op.
"""
from dataclasses import replace
from typing import Callable, List, Optional

from quiz_import.config import DEFAULT_CONFIG, ParserConfig
from quiz_import.models import Question
from quiz_import.regexes import (
    OPTION_LABEL_PREFIX_RE,
    QUESTION_NUMBER_PREFIX_RE,
    marker_prefix_re,
)


def _until_stable(text: str, steps: List[Callable[[str], str]]) -> str:
    while True:
        before = text
        for step in steps:
            text = step(text)
        if text == before:
            return text


def clean_question_text(text: Optional[str]) -> str:
    return _until_stable(
        text or "",
        [
            lambda s: QUESTION_NUMBER_PREFIX_RE.sub("", s, count=1),
            str.strip,
        ],
    )


def clean_option_text(text: Optional[str], config: ParserConfig = DEFAULT_CONFIG) -> str:
    marker_re = marker_prefix_re(config.correct_markers)
    return _until_stable(
        text or "",
        [
            lambda s: OPTION_LABEL_PREFIX_RE.sub("", s, count=1),
            lambda s: marker_re.sub("", s, count=1),
            str.strip,
        ],
    )


def normalize_question(question: Question, config: ParserConfig = DEFAULT_CONFIG) -> Question:
    return replace(
        question,
        text=clean_question_text(question.text),
        options=tuple(
            replace(opt, text=clean_option_text(opt.text, config))
            for opt in question.options
        ),
    )
