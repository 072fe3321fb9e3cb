"""Tests for splitting chapters into pages."""

from __future__ import annotations

import logging

import pytest

from epubpages.reader import Chapter, Page, paginate, split_paragraphs


def _chapter(
    body: str, title: str = "Chapter", chapter_id: int = 0
) -> Chapter:
    return Chapter(id=chapter_id, title=title, body=body)


def test_short_paragraphs_share_a_page() -> None:
    chapter = _chapter("A short para.\n\nAnother short para.")

    assert paginate([chapter], 700) == [
        Page(
            id=0,
            chapter_title="Chapter",
            body="A short para.\n\nAnother short para.",
        )
    ]


def test_paragraphs_that_do_not_fit_start_new_pages() -> None:
    paragraphs = ["a" * 400, "b" * 400, "c" * 400]
    chapter = _chapter("\n\n".join(paragraphs))

    pages = paginate([chapter], 700)

    assert [page.body for page in pages] == paragraphs
    assert [page.id for page in pages] == [0, 1, 2]


def test_pages_fill_up_to_the_budget() -> None:
    paragraphs = ["a" * 300, "b" * 300, "c" * 300]
    chapter = _chapter("\n\n".join(paragraphs))

    pages = paginate([chapter], 700)

    assert [page.body for page in pages] == [
        paragraphs[0] + "\n\n" + paragraphs[1],
        paragraphs[2],
    ]


def test_exact_budget_is_accepted() -> None:
    pages = paginate([_chapter("aaaa\n\nbbbb")], 10)
    assert [page.body for page in pages] == ["aaaa\n\nbbbb"]


def test_oversized_paragraph_is_not_split() -> None:
    big = "x" * 1000
    pages = paginate([_chapter(f"a\n\n{big}\n\nb")], 700)

    assert [page.body for page in pages] == ["a", big, "b"]


def test_page_ids_continue_across_chapters() -> None:
    chapters = [
        _chapter("one\n\ntwo", title="First", chapter_id=0),
        _chapter("three", title="Second", chapter_id=1),
    ]

    pages = paginate(chapters, 5)

    assert [(page.id, page.chapter_title, page.body) for page in pages] == [
        (0, "First", "one"),
        (1, "First", "two"),
        (2, "Second", "three"),
    ]


def test_chunk_resets_between_chapters() -> None:
    chapters = [
        _chapter("a", title="First", chapter_id=0),
        _chapter("b", title="Second", chapter_id=1),
    ]

    pages = paginate(chapters, 700)

    assert [page.body for page in pages] == ["a", "b"]


def test_pages_reconstruct_chapter_paragraphs() -> None:
    body = "\n\n".join(
        f"Paragraph {n}:" + "z" * (n * 37) for n in range(20)
    )
    chapter = _chapter(body)

    pages = paginate([chapter], 300)

    assert "\n\n".join(page.body for page in pages) == body
    for page in pages:
        parts = page.body.split("\n\n")
        assert len(page.body) <= 300 or len(parts) == 1


def test_whitespace_around_paragraphs_is_trimmed() -> None:
    pages = paginate([_chapter("  one  \n\n\n\n  two\n")], 700)
    assert [page.body for page in pages] == ["one\n\ntwo"]


def test_fallback_when_no_paragraphs(caplog: pytest.LogCaptureFixture) -> None:
    chapters = [
        _chapter("\n\n  \n\n", title="Blank", chapter_id=0),
        _chapter("", title="Empty", chapter_id=1),
    ]

    with caplog.at_level(logging.WARNING):
        pages = paginate(chapters)

    assert pages == [
        Page(id=0, chapter_title="Blank", body="\n\n  \n\n"),
        Page(id=1, chapter_title="Empty", body=""),
    ]
    assert "whole chapters" in caplog.text


def test_no_chapters_give_no_pages() -> None:
    assert paginate([]) == []


@pytest.mark.parametrize("budget", [0, -5, 1.5, True])
def test_invalid_budget(budget: object) -> None:
    with pytest.raises(ValueError):
        paginate([_chapter("text")], budget)  # type: ignore[arg-type]


def test_split_paragraphs() -> None:
    assert split_paragraphs("a\n\n b \n\n\n\nc\nd") == ["a", "b", "c\nd"]
    assert split_paragraphs("") == []
