import argparse
import sys
from datetime import datetime
from typing import List, Optional

from .assembler import build_document, write_document
from .config import OUTPUT_MARKDOWN
from .conversion import finalize_output
from .pipeline import run_harvest
from .utils import output_exists


def cli_main(argv: Optional[List[str]] = None) -> int:
    """
    Scrape Worm and turn it into an ebook.

    Examples:
      worm-scraper --with-tags --with-date
      worm-scraper --pdf
    """
    parser = argparse.ArgumentParser(
        prog="worm-scraper",
        description="A tool to let you get an updated EPUB copy of the serial web novel Worm, by Wildbow",
    )
    parser.add_argument("--pdf", action="store_true", help="Save the book as a PDF instead of an EPUB, if possible")
    parser.add_argument("--with-link", action="store_true", help="Include a link to the chapter online")
    parser.add_argument("--with-tags", action="store_true", help="Include the tags each chapter was posted under")
    parser.add_argument("--with-date", action="store_true", help="Include the date each chapter was posted")
    args = parser.parse_args(argv)

    def log_fn(msg: str) -> None:
        ts = datetime.now().strftime("%H:%M:%S")
        print(f"[{ts}] {msg}")

    def progress_fn(value: float, text: str) -> None:
        pct = int(value * 100)
        print(f"[{pct:3d}%] {text}")

    md_path = OUTPUT_MARKDOWN
    if output_exists(md_path):
        log_fn(f"Error: {md_path} already exists; move it out of the way first.")
        return 1

    log_fn("Starting to scrape Worm")
    try:
        result = run_harvest(log_fn, progress_fn)

        log_fn("Saving results to file...")
        document = build_document(
            result.arcs,
            pdf=args.pdf,
            with_tags=args.with_tags,
            with_date=args.with_date,
            with_link=args.with_link,
        )
        write_document(document, md_path)
        log_fn(f"Markdown written to {md_path}")
    except Exception as exc:
        log_fn(f"Error: {exc}")
        return 1

    finalize_output(md_path, args.pdf, log_fn=log_fn)
    return 0


def main() -> None:
    sys.exit(cli_main())
