from typing import List

from .config import BOOK_AUTHOR, BOOK_TITLE, EPUB_PAGE_BREAK, MAIN_SITE, PDF_PAGE_BREAK
from .models import Arc, Chapter


def page_break(pdf: bool) -> str:
    return PDF_PAGE_BREAK if pdf else EPUB_PAGE_BREAK


def _chapter_annotations(chapter: Chapter, with_tags: bool, with_date: bool, with_link: bool) -> str:
    # Two trailing spaces make Markdown hard line breaks
    parts = []
    if with_tags:
        parts.append("**Tags:** " + ", ".join(chapter.tags) + "  ")
    if with_date:
        parts.append("**Date:** " + chapter.date_posted + "  ")
    if with_link:
        parts.append("**Link:** " + chapter.url + "  ")
    return "".join(parts)


def build_document(
    arcs: List[Arc],
    pdf: bool = False,
    with_tags: bool = False,
    with_date: bool = False,
    with_link: bool = False,
) -> str:
    """Serialize the populated arcs into one Markdown document, in skeleton order."""
    brk = page_break(pdf)
    out = [f"# {BOOK_TITLE}\n\n", f"By {BOOK_AUTHOR}\n\n", f"Website: {MAIN_SITE}"]

    for arc in arcs:
        out.append(brk + arc.title)
        for chapter in arc.chapters:
            out.append("\n\n")
            out.append(f"## {chapter.title}\n\n")
            out.append(_chapter_annotations(chapter, with_tags, with_date, with_link))
            out.append("\n\n")
            if not chapter.available:
                out.append(f"*This chapter could not be retrieved ({chapter.error}).*\n\n")
                continue
            for paragraph in chapter.paragraphs:
                out.append(paragraph + "\n\n")

    return "".join(out)


def write_document(text: str, path: str) -> None:
    """Write the flat document; refuses to overwrite an existing file."""
    with open(path, "x", encoding="utf-8") as f:
        f.write(text)
