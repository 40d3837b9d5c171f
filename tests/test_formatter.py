import os
import sys
import unittest
from bs4 import BeautifulSoup

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from worm_scraper.config import SEPARATOR_MARKER
from worm_scraper.formatter import classify_paragraph, format_paragraph
from worm_scraper.utils import ensure_scheme, parse_style


def _p(html: str):
    return BeautifulSoup(html, "html.parser").p


class FormatParagraphTests(unittest.TestCase):
    def test_emphasis_becomes_single_asterisk(self) -> None:
        self.assertEqual(format_paragraph("a <em>b</em> <i>c</i>"), "a *b* *c*")

    def test_bold_becomes_double_asterisk(self) -> None:
        self.assertEqual(format_paragraph("<strong>a</strong> <b>b</b>"), "**a** **b**")

    def test_newlines_removed(self) -> None:
        self.assertEqual(format_paragraph("one\ntwo\n"), "onetwo")

    def test_double_space_after_period_collapsed(self) -> None:
        self.assertEqual(format_paragraph("End.  Start.   Again."), "End. Start. Again.")

    def test_unknown_tags_pass_through(self) -> None:
        self.assertEqual(format_paragraph('a<br/>b <span class="x">c</span>'), 'a<br/>b <span class="x">c</span>')

    def test_idempotent(self) -> None:
        samples = [
            "Plain text.",
            "<em>Quiet</em>.  <strong>Loud</strong>.\n",
            "Three.   Spaces.    Four.",
            "    <i>indented</i> block",
            SEPARATOR_MARKER,
            "a <e\nm>b",
            "<str\nong>z</str\nong>",
            "End.\n  Next.",
        ]
        for sample in samples:
            once = format_paragraph(sample)
            self.assertEqual(format_paragraph(once), once, sample)

    def test_tag_split_by_newline_is_rewritten(self) -> None:
        self.assertEqual(format_paragraph("a <e\nm>b</e\nm>"), "a *b*")
        self.assertEqual(format_paragraph("<str\nong>z</strong>"), "**z**")


class ClassifyParagraphTests(unittest.TestCase):
    def test_indented_block(self) -> None:
        p = _p('<p style="padding-left: 30px;">Quoted <strong>text</strong></p>')
        self.assertEqual(classify_paragraph(p), "    Quoted <strong>text</strong>")

    def test_other_padding_is_normal(self) -> None:
        p = _p('<p style="padding-left: 60px;">Deeper</p>')
        self.assertEqual(classify_paragraph(p), "Deeper")

    def test_centered_paragraph_is_separator(self) -> None:
        p = _p('<p style="text-align:center">■ <em>break</em> ■</p>')
        self.assertEqual(classify_paragraph(p), SEPARATOR_MARKER)

    def test_normal_paragraph_keeps_inner_markup(self) -> None:
        p = _p("<p>Hello <em>there</em></p>")
        self.assertEqual(classify_paragraph(p), "Hello <em>there</em>")


class UtilsTests(unittest.TestCase):
    def test_ensure_scheme(self) -> None:
        self.assertEqual(ensure_scheme("parahumans.wordpress.com/x/"), "https://parahumans.wordpress.com/x/")
        self.assertEqual(ensure_scheme("//parahumans.wordpress.com/x/"), "https://parahumans.wordpress.com/x/")
        self.assertEqual(ensure_scheme("http://example.com/"), "http://example.com/")

    def test_parse_style(self) -> None:
        self.assertEqual(
            parse_style("Padding-Left: 30px; text-align : CENTER;"),
            {"padding-left": "30px", "text-align": "center"},
        )
        self.assertEqual(parse_style(""), {})


if __name__ == "__main__":
    unittest.main()
