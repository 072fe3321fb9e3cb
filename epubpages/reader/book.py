"""Chapters and pages produced from a single archive load."""

from __future__ import annotations

from attrs import field, frozen

from .types import ChapterList, JSONDict, PageList


@frozen(slots=True)
class Book:
    """Chapters and pages produced from a single archive load.

    Attributes:
        chapters: Retained chapters in archive order.
        pages: Pages built from ``chapters``.
    """

    chapters: ChapterList = field(factory=list, repr=False)
    pages: PageList = field(factory=list, repr=False)

    def to_dict(self) -> JSONDict:
        """Return chapters and pages as lists of plain dictionaries."""

        return {
            "chapters": [chapter.to_dict() for chapter in self.chapters],
            "pages": [page.to_dict() for page in self.pages],
        }
