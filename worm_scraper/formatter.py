from bs4 import Tag

from .config import (
    BOLD_TAGS,
    DOUBLE_SPACE_RE,
    EMPHASIS_TAGS,
    INDENT_PADDING,
    INDENT_PREFIX,
    SEPARATOR_MARKER,
)
from .utils import parse_style


def format_paragraph(text: str) -> str:
    """Turn the inline markup of a chapter paragraph into Markdown.

    Only emphasis and bold tags are rewritten; anything else is left as is
    and handed to Pandoc verbatim. Applying this twice gives the same
    result as applying it once.
    """
    # Newlines go first so a tag split across lines is rewritten in this pass
    text = text.replace("\n", "")
    for tag in EMPHASIS_TAGS:
        text = text.replace(tag, "*")
    for tag in BOLD_TAGS:
        text = text.replace(tag, "**")
    return DOUBLE_SPACE_RE.sub(". ", text)


def classify_paragraph(paragraph: Tag) -> str:
    """Return the unformatted source text for one content paragraph."""
    style = parse_style(paragraph.get("style", ""))
    if style.get("padding-left") == INDENT_PADDING:
        return INDENT_PREFIX + paragraph.decode_contents()
    if style.get("text-align") == "center":
        return SEPARATOR_MARKER
    return paragraph.decode_contents()
