from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Chapter:
    title: str
    url: str
    tags: List[str] = field(default_factory=list)
    paragraphs: List[str] = field(default_factory=list)
    date_posted: str = ""
    retries: int = 0
    # Set when the chapter could not be retrieved
    error: Optional[str] = None

    @classmethod
    def placeholder(cls, title: str, url: str) -> "Chapter":
        return cls(title=title, url=url)

    @property
    def available(self) -> bool:
        return self.error is None


@dataclass
class Arc:
    identifier: str
    title: str
    chapters: List[Chapter] = field(default_factory=list)


@dataclass(frozen=True)
class ChapterSlot:
    """Exclusive handle on one position of the skeleton, given to exactly one fetch task."""

    arc_index: int
    chapter_index: int
    title: str
    url: str


@dataclass(frozen=True)
class ChapterCorrection:
    """A chapter missing from the site's listing, spliced in at ``index`` of its arc."""

    title: str
    url: str
    index: int
