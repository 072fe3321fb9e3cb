"""Reader package turning EPUB archives into chapters and pages."""

from .book import Book
from .chapter import Chapter
from .errors import (
    ArchiveOpenFailed,
    EpubReaderError,
    NoReadableContent,
    ResourceNotFound,
)
from .extract import (
    extract_chapters,
    extract_chapters_from_bytes,
    load_book,
    locate_resource,
    open_archive,
)
from .markup import clean_html_text
from .page import Page
from .paginate import paginate, split_paragraphs

__all__ = [
    "ArchiveOpenFailed",
    "Book",
    "Chapter",
    "EpubReaderError",
    "NoReadableContent",
    "Page",
    "ResourceNotFound",
    "clean_html_text",
    "extract_chapters",
    "extract_chapters_from_bytes",
    "load_book",
    "locate_resource",
    "open_archive",
    "paginate",
    "split_paragraphs",
]
