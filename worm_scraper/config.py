import re

from .models import ChapterCorrection

MAIN_SITE = "https://parahumans.wordpress.com/"
TABLE_OF_CONTENTS = "https://parahumans.wordpress.com/table-of-contents/"

BOOK_TITLE = "Worm"
BOOK_AUTHOR = "Wildbow"

USER_AGENT = "WormScraper/1.0 (+https://parahumans.wordpress.com/)"
REQUEST_TIMEOUT = 20

# A chapter is abandoned once its retry counter goes past this bound
MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 0.5  # seconds, multiplied by the attempt number

# WordPress theme selectors
CONTENTS_SELECTOR = ".entry-content"
CHAPTER_ANCHOR_SELECTOR = ".entry-content a:not([class*=share-icon])"
CHAPTER_TITLE_SELECTOR = "h1.entry-title"
CHAPTER_TAG_SELECTOR = ".entry-meta a[rel=tag]"
CHAPTER_DATE_SELECTOR = "time.entry-date"
CHAPTER_PARAGRAPH_SELECTOR = ".entry-content > p"

ARC_MARKER = "Arc"
EPILOGUE_MARKER = "Epilogue"
EPILOGUE_IDENTIFIER = "E"
ARC_NUMBER_RE = re.compile(r"[0-9]+")

# Number of leading title characters compared against an arc identifier ("1.", "10", "E.")
ARC_PREFIX_WIDTH = 2

INDENT_PADDING = "30px"
INDENT_PREFIX = "    "
SEPARATOR_MARKER = "----------"

EMPHASIS_TAGS = ("<em>", "</em>", "<i>", "</i>")
BOLD_TAGS = ("<strong>", "</strong>", "<b>", "</b>")
DOUBLE_SPACE_RE = re.compile(r"\. {2,}")

OUTPUT_MARKDOWN = "Worm.md"
OUTPUT_EPUB = "Worm.epub"
OUTPUT_PDF = "Worm.pdf"

EPUB_PAGE_BREAK = "\n\n"
PDF_PAGE_BREAK = '\n\n<div style="page-break-after: always;"></div>\n\n'

PANDOC_BINARY = "pandoc"
PANDOC_INSTALL_HINT = (
    "Conversion failed! Make sure you've installed Pandoc "
    "(https://pandoc.org/installing.html) if you want to convert the generated "
    "Markdown file to an ebook compatible format. In the meantime, we've left "
    "you the Markdown file."
)

# Chapters the site's own table of contents leaves out
KNOWN_CORRECTIONS = (
    ChapterCorrection(
        title="E.2",
        url="https://parahumans.wordpress.com/2013/11/05/teneral-e-2/",
        index=1,
    ),
)
