"""Split chapter text into paragraph-aligned pages."""

from __future__ import annotations

import logging

from epubpages.config import DEFAULT_PAGE_BUDGET

from .markup import PARAGRAPH_SEPARATOR
from .page import Page
from .types import ChapterList, PageList, ParagraphList

logger = logging.getLogger(__name__)


def split_paragraphs(body: str) -> ParagraphList:
    """Return the non-empty, stripped paragraphs of a chapter body."""

    pieces = (piece.strip() for piece in body.split(PARAGRAPH_SEPARATOR))
    return [piece for piece in pieces if piece]


def paginate(
    chapters: ChapterList, budget: int = DEFAULT_PAGE_BUDGET
) -> PageList:
    """Pack chapter paragraphs into pages of at most ``budget`` characters.

    Paragraphs are never split. A paragraph longer than the budget gets a
    page of its own. Page ids run across chapters; a page never mixes text
    from two chapters.

    Args:
        chapters: Chapters in reading order.
        budget: Maximum page length in characters.

    Returns:
        Pages in reading order.

    Throws:
        ValueError: If ``budget`` is not a positive integer.
    """

    if isinstance(budget, bool) or not isinstance(budget, int) or budget < 1:
        raise ValueError(f"Page budget must be a positive integer: {budget!r}")

    pages: PageList = []

    for chapter in chapters:
        chunk = ""
        for paragraph in split_paragraphs(chapter.body):
            separator = PARAGRAPH_SEPARATOR if chunk else ""
            candidate = chunk + separator + paragraph
            if len(candidate) <= budget:
                chunk = candidate
                continue

            if chunk:
                pages.append(
                    Page(id=len(pages), chapter_title=chapter.title, body=chunk)
                )
            chunk = paragraph

        if chunk:
            pages.append(
                Page(id=len(pages), chapter_title=chapter.title, body=chunk)
            )

    if not pages and chapters:
        logger.warning("No paragraphs to paginate; using whole chapters")
        pages = [
            Page(id=index, chapter_title=chapter.title, body=chapter.body)
            for index, chapter in enumerate(chapters)
        ]

    logger.debug(f"Built {len(pages)} pages from {len(chapters)} chapters")
    return pages
