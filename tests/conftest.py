"""Shared fixtures for building EPUB archives in memory."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Callable, Dict, Union

import pytest

EntryMap = Dict[str, Union[str, bytes]]
EpubFactory = Callable[[EntryMap], bytes]

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf"
              media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""


def chapter_xhtml(body: str, title: str | None = None) -> str:
    """Return a minimal XHTML chapter document."""

    heading = f"<h1>{title}</h1>" if title is not None else ""
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<html xmlns="http://www.w3.org/1999/xhtml">\n'
        "<head><title>ignored</title></head>\n"
        f"<body>{heading}{body}</body>\n"
        "</html>\n"
    )


@pytest.fixture
def make_epub() -> EpubFactory:
    """Return a factory building EPUB bytes from a name-to-content map."""

    def factory(entries: EntryMap) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
            archive.writestr("mimetype", "application/epub+zip")
            archive.writestr("META-INF/container.xml", CONTAINER_XML)
            for name, content in entries.items():
                archive.writestr(name, content)
        return buffer.getvalue()

    return factory


@pytest.fixture
def sutra_bundle(tmp_path: Path, make_epub: EpubFactory) -> Path:
    """Write a small three-chapter book named ``金剛經.epub``."""

    data = make_epub(
        {
            "OEBPS/chap01.xhtml": chapter_xhtml("<p>金剛經</p>"),
            "OEBPS/chap02.xhtml": chapter_xhtml(
                "<p>First paragraph.</p><p>Second paragraph.</p>",
                title="法會因由分",
            ),
            "OEBPS/chap03.xhtml": chapter_xhtml("<p></p>", title="Empty"),
        }
    )
    (tmp_path / "金剛經.epub").write_bytes(data)
    return tmp_path


@pytest.fixture
def make_chapter() -> Callable[..., str]:
    """Return the chapter document builder."""

    return chapter_xhtml
