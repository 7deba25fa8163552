"""
Working-list operations for the review screen.

Every function returns a new list and leaves its input untouched. Questions
are addressed by ``uid``, which survives renumbering; ``number`` is always the
1-based position in the returned list.
"""
import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Union

from quiz_import.errors import ValidationError
from quiz_import.models import Option, ParsedResult, Question, new_uid

logger = logging.getLogger(__name__)


def renumber(questions: Iterable[Question]) -> List[Question]:
    out = []
    for number, q in enumerate(questions, start=1):
        if q.number != number:
            q = replace(q, number=number, warnings=tuple(w.for_number(number) for w in q.warnings))
        out.append(q)
    return out


def merge(
    existing: Sequence[Question],
    incoming: Union[ParsedResult, Sequence[Question]],
) -> List[Question]:
    """Append a new batch after the existing questions and renumber 1..N."""
    if isinstance(incoming, ParsedResult):
        incoming = incoming.questions

    seen = {q.uid for q in existing}
    appended = []
    for q in incoming:
        if q.uid in seen:
            q = replace(q, uid=new_uid())
        seen.add(q.uid)
        appended.append(q)

    merged = renumber(list(existing) + appended)
    logger.info("merged %d new questions after %d existing", len(appended), len(existing))
    return merged


def merge_result(current: Optional[ParsedResult], parsed: ParsedResult) -> ParsedResult:
    """Fold an upload into the session quiz; the first title found sticks."""
    if current is None:
        return ParsedResult(questions=renumber(parsed.questions), title=parsed.title)
    return ParsedResult(
        questions=merge(current.questions, parsed),
        title=current.title or parsed.title,
    )


def find_index(questions: Sequence[Question], uid: str) -> int:
    for i, q in enumerate(questions):
        if q.uid == uid:
            return i
    raise KeyError(uid)


def delete_at(questions: Sequence[Question], index: int) -> List[Question]:
    if not 0 <= index < len(questions):
        raise IndexError(f"no question at position {index}")
    return renumber(q for i, q in enumerate(questions) if i != index)


def delete_question(questions: Sequence[Question], uid: str) -> List[Question]:
    return delete_at(questions, find_index(questions, uid))


def _replace_one(questions: Sequence[Question], uid: str, **changes) -> List[Question]:
    index = find_index(questions, uid)
    out = list(questions)
    out[index] = replace(out[index], **changes)
    return out


def _check_option_index(question: Question, option_index: int) -> None:
    if not 0 <= option_index < len(question.options):
        raise IndexError(f"question {question.number} has no option {option_index}")


def update_question_text(questions: Sequence[Question], uid: str, text: str) -> List[Question]:
    return _replace_one(questions, uid, text=text)


def update_option_text(
    questions: Sequence[Question], uid: str, option_index: int, text: str
) -> List[Question]:
    question = questions[find_index(questions, uid)]
    _check_option_index(question, option_index)
    options = tuple(
        replace(opt, text=text) if i == option_index else opt
        for i, opt in enumerate(question.options)
    )
    return _replace_one(questions, uid, options=options)


def set_correct_option(questions: Sequence[Question], uid: str, option_index: int) -> List[Question]:
    """Mark one option correct and the rest wrong; the author's pick settles any import warning."""
    question = questions[find_index(questions, uid)]
    _check_option_index(question, option_index)
    options = tuple(
        Option(text=opt.text, is_correct=(i == option_index))
        for i, opt in enumerate(question.options)
    )
    return _replace_one(questions, uid, options=options, warnings=())


def validate_new_question(text: str, options: Sequence[Option]) -> None:
    if not text or not text.strip():
        raise ValidationError("question text is empty")
    if not options:
        raise ValidationError("question has no options")
    if any(not opt.text or not opt.text.strip() for opt in options):
        raise ValidationError("every option needs text")
    marked = sum(1 for opt in options if opt.is_correct)
    if marked != 1:
        raise ValidationError(f"exactly one option must be correct, got {marked}")


def add_question(
    questions: Sequence[Question], text: str, options: Sequence[Option]
) -> List[Question]:
    """Append a hand-written question at the end of the list."""
    validate_new_question(text, options)
    question = Question(
        number=len(questions) + 1,
        text=text.strip(),
        options=tuple(Option(opt.text.strip(), opt.is_correct) for opt in options),
    )
    return merge(questions, [question])
