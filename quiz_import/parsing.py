import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from quiz_import.config import DEFAULT_CONFIG, ParserConfig
from quiz_import.docx_text import extract_text, extract_text_async
from quiz_import.errors import AmbiguousCorrectAnswerError, NoQuestionsFoundError
from quiz_import.models import Option, ParsedResult, Question, RawBlock
from quiz_import.normalize import normalize_question
from quiz_import.regexes import QUESTION_MARKER_RE, body_marker_re, option_line_re

logger = logging.getLogger(__name__)


# ---------- LINE CLASSIFIER ----------

class LineKind(str, Enum):
    MARKER = "marker"                # "3. Which of..."
    OPTION = "option"                # "b) Paris", "+b) Paris", "b) + Paris"
    CONTINUATION = "continuation"    # anything else with text on it
    BLANK = "blank"


@dataclass(frozen=True)
class ClassifiedLine:
    kind: LineKind
    text: str
    number: Optional[int] = None     # MARKER only
    is_marked: bool = False          # OPTION only


def classify_line(line: str, config: ParserConfig = DEFAULT_CONFIG) -> ClassifiedLine:
    """
    Decide what a single line of document text is.

    Question markers win over options, so "1. foo" always starts a question
    and numeric option labels have to be written as "1)".
    """
    line = line.rstrip("\r\n")
    if not line.strip():
        return ClassifiedLine(LineKind.BLANK, line)

    m = QUESTION_MARKER_RE.match(line)
    if m:
        return ClassifiedLine(LineKind.MARKER, line.strip(), number=int(m.group(1)))

    m = option_line_re(config.correct_markers).match(line)
    if m:
        marked = bool(m.group("pre")) or bool(
            body_marker_re(config.correct_markers).match(m.group("body"))
        )
        return ClassifiedLine(LineKind.OPTION, line.strip(), is_marked=marked)

    return ClassifiedLine(LineKind.CONTINUATION, line.strip())


# ---------- SEGMENTER ----------

def split_preamble(text: str) -> Tuple[List[str], List[RawBlock]]:
    """Lines before the first question, and the question blocks after it."""
    preamble: List[str] = []
    blocks: List[RawBlock] = []
    current: Optional[ClassifiedLine] = None
    current_lines: List[str] = []

    def _flush():
        if current is not None:
            blocks.append(RawBlock(current.number, current.text, tuple(current_lines)))

    for line in (text or "").splitlines():
        classified = classify_line(line)
        if classified.kind is LineKind.MARKER:
            _flush()
            current = classified
            current_lines = []
        elif current is None:
            if classified.kind is not LineKind.BLANK:
                preamble.append(classified.text)
        else:
            current_lines.append(line)

    _flush()
    return preamble, blocks


def segment_questions(text: str) -> List[RawBlock]:
    """
    Split plain text into raw question blocks.

    A line starting with "<integer>. " opens a block; every following line
    belongs to it until the next such line. Raw numbers are kept as written,
    duplicates included.
    """
    return split_preamble(text)[1]


# ---------- OPTION PARSER ----------

@dataclass
class OptionParse:
    prompt_lines: List[str] = field(default_factory=list)
    options: List[Option] = field(default_factory=list)
    marked: int = 0           # how many options carried a correctness marker
    ignored: List[str] = field(default_factory=list)

    def warning(self, number: Optional[int]) -> Optional[AmbiguousCorrectAnswerError]:
        if self.marked == 0:
            return AmbiguousCorrectAnswerError(number, AmbiguousCorrectAnswerError.MISSING)
        if self.marked > 1:
            return AmbiguousCorrectAnswerError(
                number, AmbiguousCorrectAnswerError.MULTIPLE, marked=self.marked
            )
        return None


def parse_options(lines: Sequence[str], config: ParserConfig = DEFAULT_CONFIG) -> OptionParse:
    """
    Read the lines of one block (marker line excluded).

    Text before the first option extends the prompt; text after it is
    ignored. The first marked option is the correct one; option text is left
    raw for the normalizer.
    """
    result = OptionParse()
    in_options = False

    for line in lines:
        classified = classify_line(line, config)
        if classified.kind is LineKind.BLANK:
            continue

        if classified.kind is LineKind.OPTION:
            in_options = True
            is_correct = classified.is_marked and result.marked == 0
            if classified.is_marked:
                result.marked += 1
            result.options.append(Option(text=classified.text, is_correct=is_correct))
        elif not in_options:
            result.prompt_lines.append(classified.text)
        else:
            logger.debug("ignoring line after options: %r", classified.text)
            result.ignored.append(classified.text)

    return result


# ---------- PIPELINE ----------

def build_question(block: RawBlock, number: int, config: ParserConfig = DEFAULT_CONFIG) -> Question:
    parsed = parse_options(block.raw_lines, config)
    warning = parsed.warning(number)
    if warning is not None:
        logger.warning("%s", warning)

    question = Question(
        number=number,
        text="\n".join([block.marker_line] + parsed.prompt_lines),
        options=parsed.options,
        warnings=(warning,) if warning is not None else (),
    )
    return normalize_question(question, config)


def parse_questions(text: str, config: ParserConfig = DEFAULT_CONFIG) -> ParsedResult:
    """
    Turn document text into questions, best effort.

    Raises NoQuestionsFoundError when no question markers are present.
    Questions with zero or several marked answers are kept and flagged.
    """
    preamble, blocks = split_preamble(text)
    if not blocks:
        raise NoQuestionsFoundError("no numbered questions found in document")

    questions = [build_question(block, i, config) for i, block in enumerate(blocks, start=1)]
    result = ParsedResult(questions=questions, title=preamble[0] if preamble else None)

    logger.info(
        "parsed %d questions (%d flagged), title=%r",
        len(result.questions), len({w.number for w in result.warnings}), result.title,
    )
    return result


def import_docx(data: bytes, config: ParserConfig = DEFAULT_CONFIG) -> ParsedResult:
    return parse_questions(extract_text(data), config)


async def import_docx_async(data: bytes, config: ParserConfig = DEFAULT_CONFIG) -> ParsedResult:
    text = await extract_text_async(data)
    return parse_questions(text, config)
