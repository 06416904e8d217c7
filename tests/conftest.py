"""Shared pytest fixtures and configuration for writebook2md tests."""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
import respx

from writebook2md.models import WritebookConfig


BOOK_URL = "https://example.com/1/test-book"
BOOK_TITLE = "My Test Book"

CHAPTERS = [
    ("10", "introduction", "Introduction"),
    ("20", "getting-started", "Getting Started"),
    ("30", "advanced-topics", "Advanced Topics"),
]


def page(title: str, body: str) -> str:
    """Wrap a body fragment in a minimal HTML page."""
    return f"""<!DOCTYPE html>
<html>
<head><title>{title}</title></head>
<body>
{body}
</body>
</html>
"""


def book_title_heading() -> str:
    return f'<h1 class="txt-large--responsive">{BOOK_TITLE}</h1>'


@pytest.fixture
def book_url() -> str:
    """URL of the sample book index page."""
    return BOOK_URL


@pytest.fixture
def index_page_html() -> str:
    """Index page listing three chapters in order."""
    items = "\n".join(
        f'<li><a href="/1/test-book/{cid}/{slug}">{title}</a></li>' for cid, slug, title in CHAPTERS
    )
    return page(BOOK_TITLE, f"{book_title_heading()}\n<ul>\n{items}\n</ul>")


@pytest.fixture
def index_page_with_unordered_chapters() -> str:
    """Index page whose links are not in id order."""
    return page(
        BOOK_TITLE,
        f"""{book_title_heading()}
<ul>
  <li><a href="/1/test-book/30/chapter-c">Chapter C</a></li>
  <li><a href="/1/test-book/10/chapter-a">Chapter A</a></li>
  <li><a href="/1/test-book/20/chapter-b">Chapter B</a></li>
</ul>""",
    )


@pytest.fixture
def index_page_with_duplicate_links() -> str:
    """Index page linking the same chapter twice."""
    return page(
        BOOK_TITLE,
        f"""{book_title_heading()}
<ul>
  <li><a href="/1/test-book/10/introduction">Introduction</a></li>
  <li><a href="/1/test-book/10/introduction">Introduction Again</a></li>
  <li><a href="/1/test-book/20/getting-started">Getting Started</a></li>
</ul>""",
    )


@pytest.fixture
def chapter_page_html() -> Callable[[str, str], str]:
    """Factory for a chapter page with an h1 and one paragraph."""

    def _make(title: str, content: str) -> str:
        return page(
            title,
            f"""<article>
  <h1>{title}</h1>
  <p>{content}</p>
</article>
{book_title_heading()}""",
        )

    return _make


@pytest.fixture
def chapter_page_with_image() -> str:
    """Chapter page with an absolute image wrapped in a link to the original upload."""
    return page(
        "Introduction",
        f"""<article>
  <h1>Introduction</h1>
  <p>Welcome!</p>
  <a href="https://example.com/u/screenshot.png">
    <img src="https://example.com/images/screenshot.png" alt="Screenshot">
  </a>
</article>
{book_title_heading()}""",
    )


@pytest.fixture
def chapter_page_with_relative_image() -> str:
    """Chapter page with an origin-relative image."""
    return page(
        "Introduction",
        f"""<article>
  <h1>Introduction</h1>
  <p>Welcome!</p>
  <img src="/u/relative-image.png" alt="Relative">
</article>
{book_title_heading()}""",
    )


@pytest.fixture
def chapter_page_with_anchor_links() -> str:
    """Chapter page whose headings carry '#' permalink anchors."""
    return page(
        "Introduction",
        f"""<article>
  <h1>Introduction <a href="#introduction">#</a></h1>
  <p>Welcome!</p>
  <h2>Section One <a href="#section-one">#</a></h2>
  <p>Content here.</p>
</article>
{book_title_heading()}""",
    )


@pytest.fixture
def chapter_page_with_book_title_h1() -> str:
    """Chapter page rendering the book title heading before the article."""
    return page(
        "Introduction",
        f"""{book_title_heading()}
<article>
  <h1>Introduction</h1>
  <p>Welcome!</p>
</article>""",
    )


@pytest.fixture
def chapter_page_with_table() -> str:
    """Chapter page containing a table with inline code."""
    return page(
        "Introduction",
        f"""<article>
  <h1>Introduction</h1>
  <table>
    <tr><th>Hotkey</th><th>Function</th></tr>
    <tr><td><code>Ctrl+C</code></td><td>Copy</td></tr>
    <tr><td><code>Ctrl+V</code></td><td>Paste</td></tr>
  </table>
</article>
{book_title_heading()}""",
    )


@pytest.fixture
def chapter_page_with_code() -> str:
    """Chapter page with inline code."""
    return page(
        "Introduction",
        f"""<article>
  <h1>Introduction</h1>
  <p>Run this command: <code>echo hello</code></p>
</article>
{book_title_heading()}""",
    )


@pytest.fixture
def config(tmp_path) -> WritebookConfig:
    """Configuration writing below a temporary directory, without retries."""
    return WritebookConfig(output_dir=tmp_path / "output", max_retries=0, timeout=5)


@pytest.fixture
def output_dir(config) -> Path:
    """Directory the sample book is written to."""
    return config.output_dir / "test-book"


@pytest.fixture
def mock_site(index_page_html, chapter_page_html):
    """Mocked Writebook site serving the index and three plain chapters.

    Routes are named ``index`` and after the chapter slugs, so tests can swap
    a response with ``mock_site.routes["introduction"].mock(...)``.
    """
    with respx.mock(assert_all_called=False) as router:
        router.get(BOOK_URL, name="index").mock(
            return_value=httpx.Response(200, text=index_page_html)
        )
        for cid, slug, title in CHAPTERS:
            router.get(f"{BOOK_URL}/{cid}/{slug}", name=slug).mock(
                return_value=httpx.Response(200, text=chapter_page_html(title, f"{title} body."))
            )
        yield router


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on location."""
    for item in items:
        # Auto-mark integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        # Auto-mark unit tests
        elif "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
