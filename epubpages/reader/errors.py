"""Errors raised while loading chapters from an archive."""

from __future__ import annotations


class EpubReaderError(Exception):
    """Base class for terminal failures of a book load."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ResourceNotFound(EpubReaderError):
    """The named archive is not present in the bundle directory."""


class ArchiveOpenFailed(EpubReaderError):
    """The archive bytes could not be opened as a zip container."""


class NoReadableContent(EpubReaderError):
    """No chapter with paragraph text survived extraction."""
