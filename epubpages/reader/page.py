"""A paragraph-aligned chunk of chapter text used for display."""

from __future__ import annotations

from attrs import asdict, frozen

from .types import JSONDict


@frozen(slots=True)
class Page:
    """A paragraph-aligned chunk of chapter text used for display.

    Attributes:
        id: Zero-based position across all pages of the book.
        chapter_title: Title of the chapter the text comes from.
        body: One or more whole paragraphs separated by blank lines.
    """

    id: int
    chapter_title: str
    body: str

    def to_dict(self) -> JSONDict:
        """Return the page as a plain dictionary."""

        return asdict(self)
