from dataclasses import dataclass
from typing import List

from bs4 import BeautifulSoup

from .config import (
    CHAPTER_DATE_SELECTOR,
    CHAPTER_PARAGRAPH_SELECTOR,
    CHAPTER_TAG_SELECTOR,
    CHAPTER_TITLE_SELECTOR,
)
from .formatter import classify_paragraph, format_paragraph


@dataclass
class ParsedChapter:
    title: str
    tags: List[str]
    date_posted: str
    paragraphs: List[str]


def parse_chapter_page(html: str, fallback_title: str) -> ParsedChapter:
    """Pull title, tags, date and story paragraphs out of one chapter page.

    Missing pieces fall back to the placeholder title or empty values.
    Paragraphs holding a link are the previous/next navigation and are skipped.
    """
    soup = BeautifulSoup(html, "html.parser")

    title = fallback_title
    heading = soup.select_one(CHAPTER_TITLE_SELECTOR)
    if heading:
        title = heading.get_text(strip=True) or fallback_title

    tags = [a.get_text(strip=True) for a in soup.select(CHAPTER_TAG_SELECTOR)]

    date_tag = soup.select_one(CHAPTER_DATE_SELECTOR)
    date_posted = date_tag.get_text(strip=True) if date_tag else ""

    paragraphs: List[str] = []
    for p in soup.select(CHAPTER_PARAGRAPH_SELECTOR):
        if p.find("a"):
            continue
        paragraphs.append(format_paragraph(classify_paragraph(p)))

    return ParsedChapter(title=title, tags=tags, date_posted=date_posted, paragraphs=paragraphs)
