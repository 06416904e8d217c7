"""URL helpers for Writebook book and asset addresses.

A Writebook book lives at ``{origin}/{book_id}/{book_slug}`` and its chapters
at ``{origin}/{book_id}/{book_slug}/{chapter_id}/{chapter_slug}``. Asset
``src`` attributes are either absolute or origin-relative (``/u/...``), so
resolution only needs to handle those two forms.
"""

import re
from pathlib import PurePosixPath
from urllib.parse import urlparse

from .exceptions import InvalidBookURLError


DEFAULT_BOOK_SLUG = "book"

# Anything that looks like ``scheme:`` is left untouched (http, https, data, ...)
_ABSOLUTE_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def origin_of(url: str) -> str:
    """Return ``scheme://host`` for a URL, without path.

    Raises:
        InvalidBookURLError: If the URL has no scheme or host
    """
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise InvalidBookURLError(f"Not an absolute URL: {url!r}")
    return f"{parsed.scheme}://{parsed.netloc}"


def book_path(url: str) -> str:
    """Return the URL path without the origin and surrounding slashes.

    Example:
        >>> book_path("https://books.example.com/1/my-book")
        '1/my-book'
    """
    return urlparse(url).path.strip("/")


def book_slug(url: str) -> str:
    """Return the last path segment of the book path, or ``"book"``."""
    segments = [segment for segment in book_path(url).split("/") if segment]
    return segments[-1] if segments else DEFAULT_BOOK_SLUG


def resolve_asset_url(origin: str, src: str) -> str:
    """Resolve an image ``src`` against the book origin.

    Absolute URLs are returned unchanged, everything else is appended to the
    origin as-is (no ``..`` collapsing, no scheme-relative handling).
    """
    if _ABSOLUTE_SCHEME.match(src):
        return src
    return f"{origin}{src}"


def url_basename(url: str) -> str:
    """Return the last segment of a URL path (query and fragment ignored)."""
    return PurePosixPath(urlparse(url).path).name


def slug_to_title(slug: str) -> str:
    """Turn ``getting-started`` into ``Getting Started``."""
    return " ".join(word.capitalize() for word in slug.replace("-", " ").split())


def is_absolute_url(url: str) -> bool:
    """Check if URL is absolute (has a network location/domain)."""
    return bool(urlparse(url).netloc)
