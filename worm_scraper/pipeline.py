from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

import requests

from .barrier import CompletionBarrier
from .chapter_task import RetryExhaustedError, fetch_chapter
from .config import DEFAULT_RETRY_DELAY, KNOWN_CORRECTIONS, MAX_RETRIES, TABLE_OF_CONTENTS
from .contents import Skeleton, build_skeleton
from .http_client import build_session, fetch_html
from .models import Arc, Chapter, ChapterCorrection, ChapterSlot


@dataclass
class HarvestResult:
    arcs: List[Arc]
    dropped: List[Chapter] = field(default_factory=list)
    failed: List[RetryExhaustedError] = field(default_factory=list)


def allocate_slots(arcs: List[Arc]) -> List[ChapterSlot]:
    return [
        ChapterSlot(arc_index=a, chapter_index=c, title=chapter.title, url=chapter.url)
        for a, arc in enumerate(arcs)
        for c, chapter in enumerate(arc.chapters)
    ]


def unavailable_chapter(error: RetryExhaustedError) -> Chapter:
    return Chapter(
        title=error.slot.title,
        url=error.slot.url,
        retries=error.retries,
        error=str(error.cause) or type(error.cause).__name__,
    )


def fetch_all_chapters(
    skeleton: Skeleton,
    fetch_fn: Callable[[str], str],
    progress_fn: Callable[[float, str], None],
    log_fn: Callable[[str], None],
    fail_fast: bool = False,
    max_retries: int = MAX_RETRIES,
    retry_delay: float = DEFAULT_RETRY_DELAY,
    debug_fn: Callable[[str], None] = lambda _msg: None,
) -> List[RetryExhaustedError]:
    """Fetch every chapter of the skeleton concurrently, one thread per chapter.

    Each task owns a single slot and hands back a new Chapter; results are
    written into the skeleton here, on the main thread, so the final order
    is the skeleton's order whatever order the tasks finish in.
    """
    slots = allocate_slots(skeleton.arcs)
    barrier = CompletionBarrier(len(slots), progress_fn)
    failures: List[RetryExhaustedError] = []
    if not slots:
        return failures

    log_fn(f"Starting to parse {len(slots)} chapters")
    executor = ThreadPoolExecutor(max_workers=len(slots), thread_name_prefix="chapter")
    try:
        future_map: Dict[Future, str] = {
            executor.submit(fetch_chapter, slot, fetch_fn, max_retries, retry_delay, debug_fn): slot.title
            for slot in slots
        }
        for future in barrier.drain(future_map):
            try:
                result = future.result()
            except RetryExhaustedError as exc:
                if fail_fast:
                    raise
                log_fn(f"Warning: {exc}")
                failures.append(exc)
                slot = exc.slot
                skeleton.arcs[slot.arc_index].chapters[slot.chapter_index] = unavailable_chapter(exc)
                continue
            slot = result.slot
            skeleton.arcs[slot.arc_index].chapters[slot.chapter_index] = result.chapter
    finally:
        # On a fatal error queued tasks are cancelled and running ones are not waited
        # for here; interpreter exit still joins the worker threads
        executor.shutdown(wait=barrier.done, cancel_futures=True)

    return failures


def run_harvest(
    log_fn: Callable[[str], None],
    progress_fn: Callable[[float, str], None],
    session: Optional[requests.Session] = None,
    contents_url: str = TABLE_OF_CONTENTS,
    corrections: Iterable[ChapterCorrection] = KNOWN_CORRECTIONS,
    fail_fast: bool = False,
    retry_delay: float = DEFAULT_RETRY_DELAY,
    debug_fn: Callable[[str], None] = lambda _msg: None,
) -> HarvestResult:
    """Build the skeleton from the contents page and fill in every chapter.

    A session passed in is left open; one built here is closed before returning.
    """
    own_session = session is None
    if session is None:
        session = build_session()
    try:
        log_fn("Gathering links from table of contents...")
        try:
            html = fetch_html(session, contents_url, log_fn)
        except requests.RequestException as exc:
            raise RuntimeError(f"Failed to get the table of contents! {exc}") from exc

        skeleton = build_skeleton(html, log_fn, corrections)
        if not skeleton.arcs:
            raise RuntimeError("No arcs found on the table of contents page.")

        if own_session and skeleton.chapter_count > 10:
            # One pooled connection per chapter thread
            session.close()
            session = build_session(pool_size=skeleton.chapter_count)

        chapter_session = session
        failures = fetch_all_chapters(
            skeleton,
            lambda url: fetch_html(chapter_session, url, debug_fn),
            progress_fn,
            log_fn,
            fail_fast=fail_fast,
            retry_delay=retry_delay,
            debug_fn=debug_fn,
        )
    finally:
        if own_session:
            session.close()

    if failures:
        log_fn(f"Warning: {len(failures)} of {skeleton.chapter_count} chapters could not be retrieved.")
    else:
        log_fn(f"Chapters scraped successfully: {skeleton.chapter_count}/{skeleton.chapter_count}.")

    return HarvestResult(arcs=skeleton.arcs, dropped=skeleton.dropped, failed=failures)
