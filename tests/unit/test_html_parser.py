"""Tests for chapter page heuristics: content selection, title resolution and cleanup."""

import pytest

from writebook2md.parser import (
    ContentSelector,
    MarkupCleaner,
    clean,
    parse_document,
    resolve_chapter_title,
    select_main_content,
)
from writebook2md.parser.html import css_strategy, heading_text, strip_anchor_mark
from writebook2md.utils.exceptions import ParsingError


BOOK_TITLE = "My Test Book"


class TestParseDocument:
    """Tests for parse_document."""

    def test_parses_html(self):
        """Test that markup is parsed."""
        document = parse_document(b"<html><body><p>Hi</p></body></html>")
        assert document.p.get_text() == "Hi"

    @pytest.mark.parametrize("markup", ["", "   ", b""])
    def test_empty_document(self, markup):
        """Test that empty bodies are rejected."""
        with pytest.raises(ParsingError):
            parse_document(markup)


class TestAnchorMark:
    """Tests for trailing '#' handling."""

    def test_strip_anchor_mark(self):
        """Test that a trailing marker is removed."""
        assert strip_anchor_mark("  Introduction # ") == "Introduction"

    def test_inner_hash_kept(self):
        """Test that a '#' inside the text survives."""
        assert strip_anchor_mark("C# Basics") == "C# Basics"

    def test_heading_text(self):
        """Test heading text with a permalink anchor."""
        document = parse_document('<h1>Setup <a href="#setup">#</a></h1>')
        assert heading_text(document.h1) == "Setup"


class TestContentSelector:
    """Tests for main content selection."""

    def test_article_wins(self):
        """Test that an article is preferred over main and larger divs."""
        document = parse_document(
            "<main><p>Main</p></main><article><p>Article</p></article>"
            f"<div>{'x' * 500}</div>"
        )
        assert select_main_content(document).name == "article"

    def test_selector_chain_order(self):
        """Test that .prose beats .content which beats main."""
        document = parse_document(
            '<main><div class="content">C</div><div class="prose">P</div></main>'
        )
        assert select_main_content(document).get_text() == "P"

    def test_data_controller_content(self):
        """Test the data-controller content marker."""
        document = parse_document(
            '<main><div data-controller="toc content">Body</div></main>'
        )
        assert select_main_content(document).get("data-controller") == "toc content"

    def test_largest_div_fallback(self):
        """Test that the div with the most text is used without a known container."""
        document = parse_document(
            "<div>short</div><div>a much longer paragraph of chapter text</div>"
        )
        assert "longer paragraph" in select_main_content(document).get_text()

    def test_body_fallback(self):
        """Test that the body is used when nothing else matches."""
        document = parse_document("<html><body><p>Only a paragraph</p></body></html>")
        assert select_main_content(document).name == "body"

    def test_custom_strategy(self):
        """Test that a strategy can be inserted ahead of the defaults."""
        document = parse_document('<article>A</article><section id="chapter">S</section>')
        selector = ContentSelector()
        selector.strategies.insert(0, css_strategy("#chapter"))
        assert selector.select(document).get_text() == "S"

    def test_document_fallback(self):
        """Test that an empty strategy list falls back to the document."""
        document = parse_document("<p>x</p>")
        assert ContentSelector(strategies=[]).select(document) is document


class TestTitleResolver:
    """Tests for chapter title resolution."""

    def test_first_h1(self, chapter_page_html):
        """Test the plain case."""
        document = parse_document(chapter_page_html("Getting Started", "Body"))
        assert resolve_chapter_title(document, BOOK_TITLE, "Fallback") == "Getting Started"

    def test_skips_book_title_heading(self, chapter_page_with_book_title_h1):
        """Test that the styled book-title heading before the article is skipped."""
        document = parse_document(chapter_page_with_book_title_h1)
        assert resolve_chapter_title(document, BOOK_TITLE, "Fallback") == "Introduction"

    def test_skips_heading_equal_to_book_title(self):
        """Test that an unstyled heading with the book title is skipped."""
        document = parse_document(f"<h1>{BOOK_TITLE}</h1><h1>Real Title</h1>")
        assert resolve_chapter_title(document, BOOK_TITLE, "Fallback") == "Real Title"

    def test_skips_empty_and_anchor_only_headings(self):
        """Test that headings without text are skipped."""
        document = parse_document('<h1> </h1><h1><a href="#x">#</a></h1><h1>Found</h1>')
        assert resolve_chapter_title(document, BOOK_TITLE, "Fallback") == "Found"

    def test_strips_permalink_marker(self, chapter_page_with_anchor_links):
        """Test that the title does not keep the '#' marker."""
        document = parse_document(chapter_page_with_anchor_links)
        assert resolve_chapter_title(document, BOOK_TITLE, "Fallback") == "Introduction"

    def test_fallback(self):
        """Test the fallback when only book chrome is present."""
        document = parse_document(
            f'<h1 class="txt-large--responsive">{BOOK_TITLE}</h1><h2>Not top level</h2>'
        )
        assert resolve_chapter_title(document, BOOK_TITLE, "Advanced Topics") == "Advanced Topics"


class TestMarkupCleaner:
    """Tests for content cleanup."""

    def test_removes_navigation(self):
        """Test that navigation chrome is removed."""
        document = parse_document(
            "<article><nav>Prev</nav><div class='sidebar'>Side</div>"
            "<div data-controller='navigation'>Nav</div><p>Keep</p></article>"
        )
        content = clean(document.article, BOOK_TITLE)
        assert content.get_text() == "Keep"

    def test_nested_noise(self):
        """Test that noise nested in noise is handled."""
        document = parse_document(
            "<article><nav><div class='navigation'>x</div></nav><p>Keep</p></article>"
        )
        assert clean(document.article, BOOK_TITLE).get_text() == "Keep"

    def test_removes_scripts(self):
        """Test that script and style elements are dropped."""
        document = parse_document(
            "<article><script>alert(1)</script><style>p{}</style><p>Keep</p></article>"
        )
        assert clean(document.article, BOOK_TITLE).get_text() == "Keep"

    def test_removes_book_chrome_headings(self):
        """Test that book-title and empty h1 elements are removed."""
        document = parse_document(
            f'<article><h1 class="txt-large--responsive">Styled</h1><h1>{BOOK_TITLE}</h1>'
            "<h1></h1><h1>Chapter</h1></article>"
        )
        content = clean(document.article, BOOK_TITLE)
        assert [h.get_text() for h in content.find_all("h1")] == ["Chapter"]

    def test_removes_permalink_anchors(self, chapter_page_with_anchor_links):
        """Test that '#' anchors are removed but headings stay."""
        document = parse_document(chapter_page_with_anchor_links)
        content = clean(document.article, BOOK_TITLE)
        assert content.select("a[href^='#']") == []
        assert content.h2.get_text().strip() == "Section One"

    def test_keeps_real_fragment_links(self):
        """Test that in-page links with real text survive."""
        document = parse_document('<article><a href="#setup">see setup</a></article>')
        content = clean(document.article, BOOK_TITLE)
        assert content.a["href"] == "#setup"

    def test_custom_noise_selectors(self):
        """Test a cleaner with its own noise list."""
        document = parse_document("<article><aside>Ad</aside><p>Keep</p></article>")
        content = MarkupCleaner(noise_selectors=["aside"]).clean(document.article, BOOK_TITLE)
        assert content.get_text() == "Keep"
