import asyncio
import io
import logging
import zipfile
from typing import Iterator

import mammoth
from bs4 import BeautifulSoup, Tag

from quiz_import.config import DOCUMENT_PART
from quiz_import.errors import FormatError

logger = logging.getLogger(__name__)

# top-level body elements that carry paragraph text; tables are left out
PARAGRAPH_TAGS = {"p", "h1", "h2", "h3", "h4", "h5", "h6"}
LIST_TAGS = {"ul", "ol"}


def _check_package(data: bytes) -> None:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            names = set(zf.namelist())
    except zipfile.BadZipFile as exc:
        raise FormatError("upload is not a docx file (not a zip archive)") from exc
    if DOCUMENT_PART not in names:
        raise FormatError(f"docx package has no {DOCUMENT_PART}")


def _list_items(element: Tag) -> Iterator[Tag]:
    for li in element.find_all("li"):
        # nested lists are visited on their own
        for nested in li.find_all(list(LIST_TAGS)):
            nested.extract()
        yield li


def _body_paragraphs(html: str) -> Iterator[str]:
    soup = BeautifulSoup(html, "html.parser")
    for br in soup.find_all("br"):
        br.replace_with("\n")

    for element in soup.find_all(recursive=False):
        if element.name in PARAGRAPH_TAGS:
            yield element.get_text()
        elif element.name in LIST_TAGS:
            for li in _list_items(element):
                yield li.get_text()
        else:
            logger.debug("skipping <%s> block", element.name)


def extract_text(data: bytes) -> str:
    """
    Plain text of a docx file, one line per paragraph, in document order.

    Soft line breaks inside a paragraph become line breaks too. Formatting,
    images and tables are dropped. Raises FormatError when the bytes are not
    a readable docx package.
    """
    if not data:
        raise FormatError("upload is empty")
    _check_package(data)

    try:
        result = mammoth.convert_to_html(io.BytesIO(data))
    except Exception as exc:
        raise FormatError(f"could not read docx: {exc}") from exc

    for message in result.messages:
        logger.debug("mammoth: %s", message)

    lines = [
        line.rstrip()
        for paragraph in _body_paragraphs(result.value)
        for line in paragraph.splitlines()
    ]
    text = "\n".join(line for line in lines if line.strip())
    logger.info("extracted %d lines from docx (%d bytes)", text.count("\n") + 1 if text else 0, len(data))
    return text


async def extract_text_async(data: bytes) -> str:
    """extract_text on a worker thread; cancel the awaiting task to abandon it."""
    return await asyncio.to_thread(extract_text, data)
