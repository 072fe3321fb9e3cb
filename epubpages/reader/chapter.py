"""One readable section extracted from the book archive."""

from __future__ import annotations

from attrs import asdict, frozen

from .types import JSONDict


@frozen(slots=True)
class Chapter:
    """One readable section extracted from the book archive.

    Attributes:
        id: Zero-based position among the retained chapters.
        title: Text of the first heading, or a generated ordinal label.
        body: Cleaned paragraph texts separated by blank lines.
    """

    id: int
    title: str
    body: str

    def to_dict(self) -> JSONDict:
        """Return the chapter as a plain dictionary."""

        return asdict(self)
