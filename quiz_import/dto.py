import json
import logging
from typing import Any, Dict, List, Mapping, Sequence

from quiz_import.errors import AmbiguousCorrectAnswerError, ValidationError
from quiz_import.models import Option, Question, QuestionDTO, TestForm

logger = logging.getLogger(__name__)


# ---------- QUESTION -> WIRE ----------

def to_dto(question: Question, order: int) -> QuestionDTO:
    """
    Wire record for one finalized question.

    Never guesses: raises ValidationError unless exactly one option is marked
    correct.
    """
    correct = question.correct_indexes
    if not correct:
        raise ValidationError(f"question {question.number} has no correct answer")
    if len(correct) > 1:
        raise ValidationError(
            f"question {question.number} has {len(correct)} correct answers, pick one"
        )
    return QuestionDTO(
        question=question.text,
        options=tuple(opt.text for opt in question.options),
        correct_answer=correct[0],
        order=order,
    )


def to_dtos(questions: Sequence[Question]) -> List[QuestionDTO]:
    return [to_dto(q, order) for order, q in enumerate(questions)]


def unresolved_questions(questions: Sequence[Question]) -> List[Question]:
    """Questions that would block saving: not exactly one correct option."""
    return [q for q in questions if not q.has_single_correct]


def ensure_ready_to_save(questions: Sequence[Question]) -> None:
    pending = unresolved_questions(questions)
    if pending:
        numbers = ", ".join(str(q.number) for q in pending)
        raise ValidationError(f"pick a single correct answer for question(s) {numbers}")


def build_test_payload(form: TestForm, questions: Sequence[Question]) -> Dict[str, Any]:
    """Body for the test create/update endpoint."""
    if not form.title or not form.title.strip():
        raise ValidationError("test title is required")
    ensure_ready_to_save(questions)

    payload = {
        "title": form.title.strip(),
        "courseId": form.course_id,
        "description": form.description,
        "duration": form.duration,
        "passingScore": form.passing_score,
        "isActive": form.is_active,
        "questions": [dto.to_dict() for dto in to_dtos(questions)],
    }
    logger.info("built payload for %r with %d questions", payload["title"], len(questions))
    return payload


# ---------- STORED RECORD -> QUESTION ----------

def from_record(record: Mapping[str, Any], number: int) -> Question:
    """
    Rebuild an editable question from a stored test question.

    The API returns ``options`` as a JSON-encoded list and ``correctAnswer``
    sometimes as a string.
    """
    raw_options = record.get("options") or []
    if isinstance(raw_options, str):
        try:
            raw_options = json.loads(raw_options)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"question {number}: options are not valid JSON") from exc
    if not isinstance(raw_options, list):
        raise ValidationError(f"question {number}: options must be a list")

    try:
        correct = int(record.get("correctAnswer"))
    except (TypeError, ValueError):
        correct = -1

    options = tuple(
        Option(text=str(text), is_correct=(i == correct)) for i, text in enumerate(raw_options)
    )
    warnings = ()
    if not 0 <= correct < len(options):
        logger.warning("stored question %d has correctAnswer=%r out of range", number, record.get("correctAnswer"))
        warnings = (AmbiguousCorrectAnswerError(number, AmbiguousCorrectAnswerError.MISSING),)

    return Question(
        number=number,
        text=str(record.get("question") or ""),
        options=options,
        warnings=warnings,
    )


def _order_key(pair):
    index, record = pair
    order = record.get("order")
    return (order if isinstance(order, int) else index, index)


def questions_from_records(records: Sequence[Mapping[str, Any]]) -> List[Question]:
    ordered = sorted(enumerate(records), key=_order_key)
    return [from_record(record, number) for number, (_, record) in enumerate(ordered, start=1)]
