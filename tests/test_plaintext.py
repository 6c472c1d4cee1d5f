from __future__ import annotations

import unittest

from sanehtml import clean_html, convert_to_plain_text


class TestConvertToPlainText(unittest.TestCase):
    def test_paragraphs_become_blank_lines(self) -> None:
        assert convert_to_plain_text("<p>a</p><p>b</p>") == "a\n\nb"

    def test_lists_become_bullets(self) -> None:
        html = "<ul><li>one</li><li>two</li></ul>"
        assert convert_to_plain_text(html) == "* one\n * two"

    def test_line_breaks_and_small_headings(self) -> None:
        assert convert_to_plain_text("a<br>b") == "a\nb"
        assert convert_to_plain_text("<h4>T</h4><p>x</p>") == "T\nx"

    def test_remaining_tags_are_stripped(self) -> None:
        html = '<p><strong>bold</strong> and <a href="http://example.com">link</a></p>'
        assert convert_to_plain_text(html) == "bold and link"

    def test_entities_are_decoded(self) -> None:
        assert convert_to_plain_text("<p>1 &lt; 2 &amp; &quot;3&quot;</p>") == '1 < 2 & "3"'

    def test_strip_urls(self) -> None:
        html = "<p>Visit http://example.com today</p>"
        assert convert_to_plain_text(html) == "Visit http://example.com today"
        assert convert_to_plain_text(html, strip_urls=True) == "Visit today"
        assert convert_to_plain_text("<p>see www.example.com/x and more</p>", strip_urls=True) == "see and more"
        assert convert_to_plain_text("<p>HTTPS://WWW.EXAMPLE.COM</p>", strip_urls=True) == ""

    def test_html_format(self) -> None:
        html = "<p>a &amp; b</p><p>c</p>"
        assert convert_to_plain_text(html, html_format=True) == "<p>a &amp; b<br><br>c</p>"

    def test_cleaned_input(self) -> None:
        cleaned = clean_html("<div><h4>Title</h4><script>x()</script><p>Body <span>text</span></p></div>", "basic")
        assert cleaned == "<h4>Title</h4><p>Body text</p>"
        assert convert_to_plain_text(cleaned) == "Title\nBody text"


if __name__ == "__main__":
    unittest.main()
