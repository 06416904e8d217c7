"""Chapter discovery on a Writebook index page."""

import logging
import re

from bs4 import BeautifulSoup, NavigableString
from bs4.element import Comment
from pydantic import ValidationError

from ..models import Chapter
from ..utils.urls import book_slug, origin_of, slug_to_title
from .html import BOOK_TITLE_CLASS, strip_anchor_mark


logger = logging.getLogger(__name__)

# /{book_id}/{book_slug}/{chapter_id}/{chapter_slug}
CHAPTER_LINK_PATTERN = re.compile(r"/\d+/[^/]+/(\d+)/([^/?#]+)")


def extract_book_title(document: BeautifulSoup, slug: str) -> str:
    """Extract the book title from the book-title heading.

    The heading often nests an author byline, so only its direct text nodes
    are used; the full text is the fallback when those are blank. Without a
    book-title heading the title is derived from the book slug.

    Args:
        document: Parsed index page
        slug: Book slug used when the page has no book-title heading

    Returns:
        Book title without a trailing ``#`` marker
    """
    heading = document.find(["h1", "h2", "h3", "h4", "h5", "h6"], class_=BOOK_TITLE_CLASS)
    if heading is None:
        title = slug_to_title(slug)
    else:
        title = "".join(
            str(child)
            for child in heading.children
            if isinstance(child, NavigableString) and not isinstance(child, Comment)
        ).strip()
        if not title:
            title = heading.get_text().strip()

    return strip_anchor_mark(title)


def _chapter_url(origin: str, href: str) -> str:
    return href if href.startswith(("http://", "https://")) else f"{origin}{href}"


def discover(
    index_document: BeautifulSoup, book_url: str, book_path: str
) -> tuple[str, list[Chapter]]:
    """Discover the book title and chapter list from the index page.

    Links are kept when they point below ``/{book_path}/`` and have the
    chapter shape; anything else (including malformed links) is skipped
    silently. The first link for a chapter id wins.

    Args:
        index_document: Parsed index page
        book_url: Absolute URL of the index page
        book_path: ``{book_id}/{book_slug}`` path of the book

    Returns:
        Tuple of (book_title, chapters sorted by numeric id)
    """
    origin = origin_of(book_url)
    book_title = extract_book_title(index_document, book_slug(book_url))
    self_href = f"/{book_path}"

    chapters: dict[str, Chapter] = {}
    for link in index_document.select("a[href]"):
        href = link["href"]
        if not isinstance(href, str) or f"/{book_path}/" not in href:
            continue
        if href.rstrip("/") in (self_href, f"{origin}{self_href}"):
            continue

        match = CHAPTER_LINK_PATTERN.search(href)
        if match is None:
            continue

        chapter_id, chapter_slug = match.groups()
        if chapter_id in chapters:
            continue

        try:
            chapters[chapter_id] = Chapter(
                id=chapter_id,
                slug=chapter_slug,
                title=slug_to_title(chapter_slug),
                url=_chapter_url(origin, href),
            )
        except ValidationError:
            logger.debug(f"Skipping malformed chapter link: {href}")

    ordered = sorted(chapters.values(), key=lambda chapter: chapter.sort_key)
    return book_title, ordered
