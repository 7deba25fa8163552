from dataclasses import dataclass
from typing import Tuple


# ---------- DEFAULTS ----------

# Characters an author puts in front of the right answer.
# "–" is the en dash Word substitutes for "-" when autocorrect is on.
DEFAULT_CORRECT_MARKERS: Tuple[str, ...] = ("+", "*", "-", "–")

# Option labels recognised at the start of an option line: A-D, a-d or a digit.
OPTION_LABELS = "A-Da-d0-9"

# Part of the docx package that holds the body text.
DOCUMENT_PART = "word/document.xml"


@dataclass(frozen=True)
class ParserConfig:
    correct_markers: Tuple[str, ...] = DEFAULT_CORRECT_MARKERS

    def __post_init__(self):
        markers = tuple(m for m in self.correct_markers if m)
        if not markers:
            raise ValueError("ParserConfig needs at least one correctness marker")
        if any(len(m) != 1 for m in markers):
            raise ValueError(f"correctness markers must be single characters: {markers!r}")
        object.__setattr__(self, "correct_markers", markers)


DEFAULT_CONFIG = ParserConfig()
