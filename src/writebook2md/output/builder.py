"""
Markdown book builder - writes chapter files, images and the index page.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from ..models import Chapter


logger = logging.getLogger(__name__)

IMAGES_DIRNAME = "images"
INDEX_FILENAME = "index.md"


def _template_env() -> Environment:
    templates_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=False,
        trim_blocks=True,
        keep_trailing_newline=True,
    )


def build_toc(book_title: str, ordered_chapters: Iterable[Chapter]) -> str:
    """Render the book index: title, then a numbered chapter list.

    Args:
        book_title: Book title
        ordered_chapters: Chapters in final order

    Returns:
        Markdown table of contents
    """
    template = _template_env().get_template("index.md.j2")
    return template.render(book_title=book_title, chapters=list(ordered_chapters))


class MarkdownBookBuilder:
    """
    Writes a converted book to disk.

    Layout::

        {book_dir}/
            index.md
            {chapter.slug}.md
            images/{chapter_slug}-{basename}
    """

    def __init__(self, book_dir: Path):
        """
        Initialize the builder.

        Args:
            book_dir: Output directory of the book (``output/{book_slug}``)
        """
        self.book_dir = Path(book_dir)
        self.images_dir = self.book_dir / IMAGES_DIRNAME

    def create_structure(self) -> None:
        """Create the book and images directories if needed."""
        if self.book_dir.is_dir():
            logger.info(f"Book directory already exists: {self.book_dir}")
        self.images_dir.mkdir(parents=True, exist_ok=True)

    def chapter_path(self, chapter: Chapter) -> Path:
        return self.book_dir / chapter.filename

    def write_chapter(self, chapter: Chapter, markdown: str) -> Path:
        """Write (or overwrite) a chapter's Markdown file."""
        path = self.chapter_path(chapter)
        path.write_text(markdown, encoding="utf-8")
        logger.debug(f"Wrote {path}")
        return path

    def write_index(self, book_title: str, chapters: Iterable[Chapter]) -> Path:
        """Write ``index.md`` with the table of contents."""
        path = self.book_dir / INDEX_FILENAME
        path.write_text(build_toc(book_title, chapters), encoding="utf-8")
        return path
