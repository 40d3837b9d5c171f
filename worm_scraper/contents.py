from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Tuple

from bs4 import BeautifulSoup, Tag

from .config import (
    ARC_MARKER,
    ARC_NUMBER_RE,
    ARC_PREFIX_WIDTH,
    CHAPTER_ANCHOR_SELECTOR,
    CONTENTS_SELECTOR,
    EPILOGUE_IDENTIFIER,
    EPILOGUE_MARKER,
    KNOWN_CORRECTIONS,
)
from .models import Arc, Chapter, ChapterCorrection
from .utils import clean_anchor_text


@dataclass
class Skeleton:
    arcs: List[Arc]
    # Chapters whose title matched no arc, in discovery order
    dropped: List[Chapter] = field(default_factory=list)

    @property
    def chapter_count(self) -> int:
        return sum(len(arc.chapters) for arc in self.arcs)


def parse_arcs(text: str) -> List[Arc]:
    arcs: List[Arc] = []
    for line in text.split("\n"):
        line = line.strip()
        if line.startswith(ARC_MARKER):
            m = ARC_NUMBER_RE.search(line)
            arcs.append(Arc(identifier=m.group(0) if m else "", title=line))
        elif line.startswith(EPILOGUE_MARKER):
            arcs.append(Arc(identifier=EPILOGUE_IDENTIFIER, title=line))
    return arcs


def collect_chapter_anchors(soup: BeautifulSoup) -> List[Tuple[str, str]]:
    anchors: List[Tuple[str, str]] = []
    for link in soup.select(CHAPTER_ANCHOR_SELECTOR):
        text = clean_anchor_text(link.get_text())
        if not text:
            continue
        anchors.append((text, link.get("href", "")))
    return anchors


def arc_prefix(title: str) -> str:
    return title[:ARC_PREFIX_WIDTH].replace(".", "")


def which_arc(title: str, arcs: Iterable[Arc]) -> Arc:
    prefix = arc_prefix(title)
    for arc in arcs:
        if prefix == arc.identifier:
            return arc
    raise LookupError(f"chapter '{title}' did not match any Arcs")


def classify_chapters(
    arcs: List[Arc],
    anchors: Iterable[Tuple[str, str]],
    log_fn: Callable[[str], None],
) -> List[Chapter]:
    """Append a placeholder per anchor to its arc; return the ones that fit nowhere."""
    dropped: List[Chapter] = []
    for title, href in anchors:
        chapter = Chapter.placeholder(title, href)
        try:
            arc = which_arc(title, arcs)
        except LookupError as exc:
            log_fn(f"Warning: {exc}; skipping {href or 'chapter'}")
            dropped.append(chapter)
            continue
        arc.chapters.append(chapter)
    return dropped


def apply_corrections(
    arcs: List[Arc],
    corrections: Iterable[ChapterCorrection],
    log_fn: Callable[[str], None],
) -> None:
    for correction in corrections:
        try:
            arc = which_arc(correction.title, arcs)
        except LookupError as exc:
            log_fn(f"Warning: cannot apply correction for {correction.title}: {exc}")
            continue
        arc.chapters.insert(correction.index, Chapter.placeholder(correction.title, correction.url))


def build_skeleton(
    html: str,
    log_fn: Callable[[str], None],
    corrections: Iterable[ChapterCorrection] = KNOWN_CORRECTIONS,
) -> Skeleton:
    soup = BeautifulSoup(html, "html.parser")
    content_node = soup.select_one(CONTENTS_SELECTOR)
    contents_text = content_node.get_text() if isinstance(content_node, Tag) else ""

    arcs = parse_arcs(contents_text)
    dropped = classify_chapters(arcs, collect_chapter_anchors(soup), log_fn)
    apply_corrections(arcs, corrections, log_fn)

    skeleton = Skeleton(arcs=arcs, dropped=dropped)
    log_fn(f"Found {len(arcs)} arcs and {skeleton.chapter_count} chapters.")
    if dropped:
        log_fn(f"Warning: {len(dropped)} chapter links matched no arc and were left out.")
    return skeleton
