import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from quiz_import.errors import AmbiguousCorrectAnswerError


def new_uid() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Option:
    text: str
    is_correct: bool = False


@dataclass(frozen=True)
class Question:
    number: int               # 1-based position in the current list
    text: str
    options: Tuple[Option, ...] = ()
    warnings: Tuple[AmbiguousCorrectAnswerError, ...] = ()
    uid: str = field(default_factory=new_uid)

    def __post_init__(self):
        # accept lists from callers, store tuples
        object.__setattr__(self, "options", tuple(self.options))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    @property
    def correct_indexes(self) -> List[int]:
        return [i for i, opt in enumerate(self.options) if opt.is_correct]

    @property
    def correct_index(self) -> Optional[int]:
        """Index of the correct option, or None unless exactly one is marked."""
        idx = self.correct_indexes
        return idx[0] if len(idx) == 1 else None

    @property
    def has_single_correct(self) -> bool:
        return self.correct_index is not None


@dataclass
class ParsedResult:
    questions: List[Question] = field(default_factory=list)
    title: Optional[str] = None

    @property
    def warnings(self) -> List[AmbiguousCorrectAnswerError]:
        return [w for q in self.questions for w in q.warnings]

    def __len__(self) -> int:
        return len(self.questions)


@dataclass(frozen=True)
class RawBlock:
    raw_number: int           # as written in the document, not authoritative
    marker_line: str
    raw_lines: Tuple[str, ...] = ()


@dataclass(frozen=True)
class QuestionDTO:
    question: str
    options: Tuple[str, ...]
    correct_answer: int       # 0-based index into options
    order: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "order": self.order,
        }


@dataclass
class TestForm:
    __test__ = False          # keep pytest from collecting it

    title: str = ""
    course_id: Optional[int] = None
    description: str = ""
    duration: Optional[int] = None        # minutes
    passing_score: Optional[int] = None   # percent
    is_active: bool = True
