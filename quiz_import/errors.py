from typing import Optional


class QuizImportError(Exception):
    """Base class for everything the import engine raises or reports."""


class FormatError(QuizImportError):
    """The upload is not a readable docx package."""


class NoQuestionsFoundError(QuizImportError):
    """The text contained no numbered question lines."""


class ValidationError(QuizImportError):
    """A question (or test) is not in a state that can be saved."""


class AmbiguousCorrectAnswerError(QuizImportError):
    """
    Attached to a question whose correct answer could not be decided.

    Not raised by the parser; instances ride on ``Question.warnings`` so the
    author can fix the question instead of losing the whole upload.
    """

    MISSING = "missing"
    MULTIPLE = "multiple"

    def __init__(self, number: Optional[int], reason: str, marked: int = 0):
        self.number = number
        self.reason = reason
        self.marked = marked
        super().__init__(self._describe())

    def _describe(self) -> str:
        where = f"question {self.number}" if self.number is not None else "question"
        if self.reason == self.MULTIPLE:
            return f"{where}: {self.marked} options marked correct, kept the first one"
        return f"{where}: missing correct answer"

    def __eq__(self, other):
        if not isinstance(other, AmbiguousCorrectAnswerError):
            return NotImplemented
        return (self.number, self.reason, self.marked) == (other.number, other.reason, other.marked)

    def __hash__(self):
        return hash((self.number, self.reason, self.marked))

    def for_number(self, number: Optional[int]) -> "AmbiguousCorrectAnswerError":
        return AmbiguousCorrectAnswerError(number, self.reason, self.marked)
