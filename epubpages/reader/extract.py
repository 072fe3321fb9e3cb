"""Extract chapters from a zip-format book archive."""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from pathlib import Path
from typing import Optional, Union

from epubpages.config import ReaderConfig

from .book import Book
from .chapter import Chapter
from .errors import ArchiveOpenFailed, NoReadableContent, ResourceNotFound
from .markup import fallback_title, parse_chapter_markup
from .paginate import paginate
from .types import ChapterList

logger = logging.getLogger(__name__)

ArchiveSource = Union[str, Path, bytes, bytearray]


def locate_resource(name: str, extension: str, bundle_dir: Path) -> Path:
    """Resolve a named book resource inside the bundle directory.

    Args:
        name: Base name of the resource, e.g. ``"金剛經"``.
        extension: File extension without the leading dot.
        bundle_dir: Directory holding the bundled resources.

    Returns:
        Path of the existing resource file.

    Throws:
        ResourceNotFound: If no such file exists in ``bundle_dir``.
    """

    path = Path(bundle_dir) / f"{name}.{extension}"
    if not path.is_file():
        raise ResourceNotFound(
            f"Resource {name}.{extension} not found in {bundle_dir}"
        )
    return path


def open_archive(source: ArchiveSource) -> zipfile.ZipFile:
    """Open a zip archive for reading.

    Args:
        source: Path of the archive file or its raw bytes.

    Returns:
        The opened archive; the caller is responsible for closing it.

    Throws:
        ArchiveOpenFailed: If the source is not a readable zip archive.
    """

    try:
        if isinstance(source, (bytes, bytearray)):
            return zipfile.ZipFile(io.BytesIO(bytes(source)))
        return zipfile.ZipFile(source)
    except (zipfile.BadZipFile, OSError, ValueError) as exc:
        raise ArchiveOpenFailed(
            f"Unable to open EPUB archive: {exc}"
        ) from exc


def chapter_entries(
    archive: zipfile.ZipFile, prefix: str, suffix: str
) -> list[str]:
    """Return chapter entry names sorted in plain lexicographic order.

    Args:
        archive: Archive opened for reading.
        prefix: Required start of the entry path.
        suffix: Required end of the entry path.
    """

    names = [
        info.filename
        for info in archive.infolist()
        if not info.is_dir()
        and info.filename.startswith(prefix)
        and info.filename.endswith(suffix)
    ]
    return sorted(names)


def _read_entry_text(archive: zipfile.ZipFile, name: str) -> str:
    """Read an entry as UTF-8 text, returning ``""`` when it is not."""

    try:
        return archive.read(name).decode("utf-8")
    except UnicodeDecodeError as exc:
        logger.warning(f"{name}: not valid UTF-8 ({exc.reason}); skipping.")
        return ""


def extract_chapters(
    archive: zipfile.ZipFile, config: Optional[ReaderConfig] = None
) -> ChapterList:
    """Extract the readable chapters of an archive.

    Chapter documents are selected by path prefix and suffix and sorted by
    path. Entries without paragraph text are dropped; the remaining ones
    receive consecutive ids.

    Args:
        archive: Archive opened for reading.
        config: Discovery settings, defaults when omitted.

    Returns:
        Non-empty list of chapters in path order.

    Throws:
        ArchiveOpenFailed: If an entry cannot be read from the archive.
        NoReadableContent: If no chapter with paragraph text was found.
    """

    config = config or ReaderConfig()
    names = chapter_entries(
        archive, config.chapter_prefix, config.chapter_suffix
    )
    logger.debug(f"Found {len(names)} chapter entries")

    chapters: ChapterList = []
    for index, name in enumerate(names):
        try:
            xhtml = _read_entry_text(archive, name)
        except (
            zipfile.BadZipFile,
            zlib.error,
            NotImplementedError,
            OSError,
            RuntimeError,
        ) as exc:
            raise ArchiveOpenFailed(f"Unable to read {name}: {exc}") from exc

        title, body = parse_chapter_markup(xhtml)
        if not body:
            logger.debug(f"{name}: no paragraph text; skipping.")
            continue

        # The fallback label counts every matched entry, kept or not.
        if title is None:
            title = fallback_title(index)
        chapters.append(Chapter(id=len(chapters), title=title, body=body))

    if not chapters:
        raise NoReadableContent("No readable content found in EPUB chapters")

    logger.debug(f"Kept {len(chapters)} of {len(names)} chapters")
    return chapters


def extract_chapters_from_bytes(
    data: bytes, config: Optional[ReaderConfig] = None
) -> ChapterList:
    """Open archive bytes and extract their chapters."""

    with open_archive(data) as archive:
        return extract_chapters(archive, config)


def load_book(
    name: str,
    extension: str = "epub",
    bundle_dir: Optional[Path] = None,
    config: Optional[ReaderConfig] = None,
) -> Book:
    """Load a bundled book and paginate it.

    Args:
        name: Base name of the book resource.
        extension: File extension of the book resource.
        bundle_dir: Directory holding the resource; defaults to
            ``config.bundle_dir``.
        config: Reader settings, defaults when omitted.

    Returns:
        ``Book`` with the extracted chapters and their pages.
    """

    config = config or ReaderConfig()
    path = locate_resource(name, extension, bundle_dir or config.bundle_dir)
    logger.info(f"Loading {path}")

    with open_archive(path) as archive:
        chapters = extract_chapters(archive, config)

    pages = paginate(chapters, config.page_budget)
    return Book(chapters=chapters, pages=pages)
