import io

import docx
import pytest


def make_docx(paragraphs) -> bytes:
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


SCENARIO_A = (
    "1. Capital of France?\n"
    "a) Berlin\n"
    "+b) Paris\n"
    "c) Madrid\n"
    "d) Rome\n"
    "2. 2+2=?\n"
    "a) 3\n"
    "*b) 4\n"
    "c) 5\n"
    "d) 6"
)


@pytest.fixture
def scenario_a_text() -> str:
    return SCENARIO_A


@pytest.fixture
def quiz_docx() -> bytes:
    return make_docx(["Geography quiz", ""] + SCENARIO_A.splitlines())
