"""Derive chapter titles and bodies from chapter markup."""

from __future__ import annotations

import re
import warnings
from typing import Any

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from .types import ParagraphList

PARAGRAPH_SEPARATOR = "\n\n"
HEADING_TAGS = ["h1", "h2", "h3"]

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")

# Entity codes resolved after tag removal, applied in this order.
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)


def clean_html_text(raw: str) -> str:
    """Strip markup and entity codes from an HTML fragment.

    Args:
        raw: Inner markup of a heading or paragraph element.

    Returns:
        Plain text with whitespace runs collapsed to single spaces.
    """

    text = _TAG_RE.sub("", raw)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return _WHITESPACE_RE.sub(" ", text).strip()


def _parse(xhtml: str) -> BeautifulSoup:
    # Escaping "&" keeps entity codes as literal text for clean_html_text.
    escaped = xhtml.replace("&", "&amp;")

    # Chapter documents are XHTML read with the lenient HTML parser, which
    # lowercases tag names so lookups are case-insensitive.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        return BeautifulSoup(escaped, "html.parser")


def _inner_text(tag: Any) -> str:  # noqa: ANN401
    """Return the cleaned text of the markup inside ``tag``."""

    # Without a formatter the text is written back exactly as parsed.
    return clean_html_text(tag.decode_contents(formatter=None))


def _first_heading(soup: BeautifulSoup) -> str | None:
    heading = soup.find(HEADING_TAGS)
    if heading is None:
        return None
    return _inner_text(heading)


def _paragraphs(soup: BeautifulSoup) -> ParagraphList:
    paragraphs: ParagraphList = []
    for tag in soup.find_all("p"):
        # Nested paragraphs are already part of the enclosing one.
        if tag.find_parent("p") is not None:
            continue

        text = _inner_text(tag)
        if text:
            paragraphs.append(text)

    return paragraphs


def chapter_title(xhtml: str) -> str | None:
    """Return the text of the first level 1-3 heading.

    Args:
        xhtml: Chapter document markup.

    Returns:
        Cleaned heading text, or ``None`` when the document has no heading.
    """

    return _first_heading(_parse(xhtml))


def chapter_paragraphs(xhtml: str) -> ParagraphList:
    """Return the cleaned text of every non-empty paragraph.

    Args:
        xhtml: Chapter document markup.

    Returns:
        Paragraph texts in document order.
    """

    return _paragraphs(_parse(xhtml))


def chapter_body(xhtml: str) -> str:
    """Join the chapter paragraphs with blank-line separators."""

    return PARAGRAPH_SEPARATOR.join(chapter_paragraphs(xhtml))


def parse_chapter_markup(xhtml: str) -> tuple[str | None, str]:
    """Return the heading text and joined body of a chapter document.

    The document is parsed once; see ``chapter_title`` and ``chapter_body``
    for the individual rules.
    """

    soup = _parse(xhtml)
    return _first_heading(soup), PARAGRAPH_SEPARATOR.join(_paragraphs(soup))


def fallback_title(index: int) -> str:
    """Return the ordinal label used for a chapter without a heading.

    Args:
        index: Zero-based position of the entry among matched entries.
    """

    return f"第 {index + 1} 章"
