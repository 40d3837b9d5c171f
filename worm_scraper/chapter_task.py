import time
from dataclasses import dataclass
from typing import Callable

import requests

from .chapter_parser import parse_chapter_page
from .config import DEFAULT_RETRY_DELAY, MAX_RETRIES
from .models import Chapter, ChapterSlot
from .utils import ensure_scheme


class RetryExhaustedError(RuntimeError):
    def __init__(self, slot: ChapterSlot, retries: int, cause: BaseException):
        super().__init__(f"Chapter url '{slot.url}' has timed out too many times ({retries} retries): {cause}")
        self.slot = slot
        self.retries = retries
        self.cause = cause


@dataclass
class ChapterResult:
    slot: ChapterSlot
    chapter: Chapter


def fetch_chapter(
    slot: ChapterSlot,
    fetch_fn: Callable[[str], str],
    max_retries: int = MAX_RETRIES,
    retry_delay: float = DEFAULT_RETRY_DELAY,
    debug_fn: Callable[[str], None] = lambda _msg: None,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> ChapterResult:
    """Fetch and parse the chapter behind ``slot``, retrying transient failures.

    The returned chapter is a fresh record; the skeleton entry for the slot
    is never touched here. Once the retry counter goes past ``max_retries``
    a RetryExhaustedError is raised.
    """
    url = ensure_scheme(slot.url)
    retries = 0
    while True:
        try:
            html = fetch_fn(url)
            parsed = parse_chapter_page(html, slot.title)
        except (requests.RequestException, ValueError) as exc:
            retries += 1
            if retries > max_retries:
                raise RetryExhaustedError(slot, retries, exc) from exc
            debug_fn(f"Retrying {url} (attempt {retries + 1}): {exc}")
            if retry_delay:
                sleep_fn(retry_delay * retries)
            continue

        chapter = Chapter(
            title=parsed.title,
            url=url,
            tags=parsed.tags,
            paragraphs=parsed.paragraphs,
            date_posted=parsed.date_posted,
            retries=retries,
        )
        return ChapterResult(slot=slot, chapter=chapter)
