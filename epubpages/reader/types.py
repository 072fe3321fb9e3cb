"""Common type aliases for reader structures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .chapter import Chapter  # noqa: F401
    from .page import Page  # noqa: F401


ChapterList = list["Chapter"]
PageList = list["Page"]
ParagraphList = list[str]
JSONDict = dict[str, Any]
