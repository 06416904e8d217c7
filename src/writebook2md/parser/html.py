"""HTML heuristics for Writebook chapter pages."""

import re
from collections.abc import Callable, Sequence

from bs4 import BeautifulSoup, Tag

from ..utils.exceptions import ParsingError


# Style class Writebook puts on the book-title heading of every page
BOOK_TITLE_CLASS = "txt-large--responsive"

# Main content candidates, most specific first
CONTENT_SELECTORS = (
    "article",
    "main article",
    "[data-controller*='content']",
    ".prose",
    ".content",
    "main",
)

# Navigation chrome and other markup that never belongs in a chapter
NOISE_SELECTORS = (
    "nav",
    ".sidebar",
    ".navigation",
    "[data-controller='navigation']",
    "script",
    "style",
    "noscript",
)

_TRAILING_ANCHOR_MARK = re.compile(r"\s*#\s*$")

ContentStrategy = Callable[[BeautifulSoup], Tag | None]
HeadingRule = Callable[[Tag, str, str], bool]


def parse_document(markup: str | bytes) -> BeautifulSoup:
    """Parse an HTML page with lxml.

    Args:
        markup: Page body as returned by the fetch capability

    Returns:
        Parsed document

    Raises:
        ParsingError: If the body is empty or yields no elements
    """
    if not markup or not markup.strip():
        raise ParsingError("Empty HTML document")

    soup = BeautifulSoup(markup, "lxml")
    if soup.find(True) is None:
        raise ParsingError("HTML document contains no elements")
    return soup


def strip_anchor_mark(text: str) -> str:
    """Strip whitespace and a trailing ``#`` permalink marker."""
    return _TRAILING_ANCHOR_MARK.sub("", text.strip())


def heading_text(heading: Tag) -> str:
    """Full text of a heading with the permalink marker removed."""
    return strip_anchor_mark(heading.get_text())


def has_book_title_class(tag: Tag) -> bool:
    """Check if an element carries the book-title style class."""
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return BOOK_TITLE_CLASS in classes


# Content selection strategies


def css_strategy(selector: str) -> ContentStrategy:
    """Strategy returning the first element matching a CSS selector."""

    def _select(document: BeautifulSoup) -> Tag | None:
        return document.select_one(selector)

    _select.__name__ = f"css({selector})"
    return _select


def largest_div(document: BeautifulSoup) -> Tag | None:
    """The ``div`` with the most text anywhere in the document."""
    return max(document.find_all("div"), key=lambda div: len(div.get_text()), default=None)


def document_body(document: BeautifulSoup) -> Tag | None:
    return document.body


def default_content_strategies() -> list[ContentStrategy]:
    return [*(css_strategy(selector) for selector in CONTENT_SELECTORS), largest_div, document_body]


class ContentSelector:
    """Picks the main content element of a chapter page.

    Strategies are tried in order and the first one returning an element
    wins. New site variants are supported by inserting a strategy, e.g.::

        selector = ContentSelector()
        selector.strategies.insert(0, css_strategy("#chapter-body"))
    """

    def __init__(self, strategies: Sequence[ContentStrategy] | None = None):
        self.strategies = (
            list(strategies) if strategies is not None else default_content_strategies()
        )

    def select(self, document: BeautifulSoup) -> Tag:
        """Return the main content element (possibly empty, never None)."""
        for strategy in self.strategies:
            element = strategy(document)
            if element is not None:
                return element
        return document


# Book-chrome heading rules: each returns True when a heading must be ignored


def _is_empty(heading: Tag, text: str, book_title: str) -> bool:
    return not text


def _matches_book_title(heading: Tag, text: str, book_title: str) -> bool:
    return text == book_title


def _is_styled_as_book_title(heading: Tag, text: str, book_title: str) -> bool:
    return has_book_title_class(heading)


BOOK_CHROME_RULES: tuple[HeadingRule, ...] = (
    _is_empty,
    _matches_book_title,
    _is_styled_as_book_title,
)


def is_book_chrome_heading(
    heading: Tag, book_title: str, rules: Sequence[HeadingRule] = BOOK_CHROME_RULES
) -> bool:
    """Check if a heading is book chrome rather than the chapter's own title.

    A chapter whose title equals the book title is indistinguishable from the
    book-title heading and is treated as chrome.
    """
    text = heading_text(heading)
    return any(rule(heading, text, book_title) for rule in rules)


class TitleResolver:
    """Finds the chapter title among the page's top-level headings."""

    def __init__(self, rules: Sequence[HeadingRule] = BOOK_CHROME_RULES):
        self.rules = tuple(rules)

    def resolve(self, document: BeautifulSoup, book_title: str, fallback_title: str) -> str:
        """Return the first ``h1`` that is not book chrome, else ``fallback_title``."""
        for heading in document.find_all("h1"):
            if not is_book_chrome_heading(heading, book_title, self.rules):
                return heading_text(heading)
        return fallback_title


class MarkupCleaner:
    """Removes chrome and permalink noise from a content subtree in place."""

    def __init__(
        self,
        noise_selectors: Sequence[str] = NOISE_SELECTORS,
        rules: Sequence[HeadingRule] = BOOK_CHROME_RULES,
    ):
        self.noise_selectors = tuple(noise_selectors)
        self.rules = tuple(rules)

    def _remove_noise(self, content: Tag) -> None:
        for element in content.select(", ".join(self.noise_selectors)):
            # Nested matches are already gone with their ancestor
            if not element.decomposed:
                element.decompose()

    def _remove_book_chrome_headings(self, content: Tag, book_title: str) -> None:
        for heading in content.find_all("h1"):
            if is_book_chrome_heading(heading, book_title, self.rules):
                heading.decompose()

    @staticmethod
    def _remove_permalink_anchors(content: Tag) -> None:
        for anchor in content.select("a[href^='#']"):
            if anchor.get_text().strip() == "#":
                anchor.decompose()

    def clean(self, content: Tag, book_title: str) -> Tag:
        """Clean ``content`` in place and return it."""
        self._remove_noise(content)
        self._remove_book_chrome_headings(content, book_title)
        self._remove_permalink_anchors(content)
        return content


def select_main_content(document: BeautifulSoup) -> Tag:
    """Return the main content element of a chapter page."""
    return ContentSelector().select(document)


def resolve_chapter_title(document: BeautifulSoup, book_title: str, fallback_title: str) -> str:
    """Return the chapter's display title, or ``fallback_title`` if none qualifies."""
    return TitleResolver().resolve(document, book_title, fallback_title)


def clean(content: Tag, book_title: str) -> Tag:
    """Strip navigation, book-title headings and permalink anchors from ``content``."""
    return MarkupCleaner().clean(content, book_title)
