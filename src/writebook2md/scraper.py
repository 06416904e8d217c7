"""Conversion pipeline: index page to a directory of Markdown chapters."""

import logging
from pathlib import Path

from .client import WritebookClient
from .display import EmojiLoggerAdapter, RichDisplay
from .markdown import to_markdown
from .models import BookContext, Chapter, ChapterResult, WritebookConfig
from .output import MarkdownBookBuilder
from .parser import (
    AssetLocalizer,
    clean,
    discover,
    parse_document,
    resolve_chapter_title,
    select_main_content,
)
from .utils.exceptions import WritebookError
from .utils.urls import book_path, origin_of


class WritebookScraper:
    """Converts one Writebook book into ``{output_dir}/{book_slug}/``.

    The run is strictly sequential: the index page is fetched and parsed,
    then each chapter is fetched, converted and written in chapter order,
    and ``index.md`` is written last.

    Example:
        scraper = WritebookScraper("https://books.example.com/1/my-book")
        output_dir = scraper.scrape()
    """

    def __init__(
        self,
        book_url: str,
        config: WritebookConfig | None = None,
        client: WritebookClient | None = None,
        display: RichDisplay | None = None,
    ):
        """Initialize the scraper.

        Args:
            book_url: Absolute URL of the book index page
            config: Application configuration (default: from environment)
            client: HTTP client to use; one is created (and closed) per run if omitted
            display: Console display (default: quiet)
        """
        origin_of(book_url)  # fail early on relative/garbage URLs
        self.book_url = book_url
        self.config = config or WritebookConfig()
        self.display = display or RichDisplay(quiet=True)
        self.logger = EmojiLoggerAdapter(logging.getLogger(__name__), {})
        self._client = client

        self.context: BookContext | None = None
        self.results: list[ChapterResult] = []

    def scrape(self) -> Path:
        """Run the whole conversion.

        Returns:
            Directory the book was written to

        Raises:
            NetworkError: If the index page cannot be fetched
            ParsingError: If the index page cannot be parsed
            WritebookError: On a chapter failure when ``on_chapter_error`` is "abort"
        """
        client = self._client or WritebookClient(self.config)
        try:
            context = self.fetch_chapters(client)

            builder = MarkdownBookBuilder(self.config.book_dir(context.book_slug))
            builder.create_structure()

            self.results = self.download_all_chapters(client, context, builder)
            self.context = context.with_chapters([result.chapter for result in self.results])

            written = [result.chapter for result in self.results if result.ok]
            builder.write_index(self.context.book_title, written)
        finally:
            if self._client is None:
                client.close()

        self.logger.debug(
            f"Wrote {len(written)} chapter(s) to {builder.book_dir}", extra={"emoji": "complete"}
        )
        self.display.done(builder.book_dir, failed=len(self.results) - len(written))
        return builder.book_dir

    def fetch_chapters(self, client: WritebookClient) -> BookContext:
        """Fetch the index page and discover the book title and chapters.

        Raises:
            NetworkError: If the index page cannot be fetched
            ParsingError: If the index page cannot be parsed
        """
        self.display.fetching(self.book_url)
        self.logger.debug(f"Fetching book index: {self.book_url}", extra={"emoji": "fetch"})

        _, body = client.fetch(self.book_url)
        document = parse_document(body)
        book_title, chapters = discover(document, self.book_url, book_path(self.book_url))

        context = BookContext.from_url(self.book_url, book_title, chapters)
        self.logger.debug(
            f"Found {len(chapters)} chapters in {book_title!r}", extra={"emoji": "book"}
        )
        self.display.book_info(context)
        return context

    def download_all_chapters(
        self,
        client: WritebookClient,
        context: BookContext,
        builder: MarkdownBookBuilder,
    ) -> list[ChapterResult]:
        """Convert every chapter in order, applying the chapter error policy."""
        results: list[ChapterResult] = []
        total = len(context.chapters)

        self.display.start_progress(total)
        try:
            for index, chapter in enumerate(context.chapters, start=1):
                self.display.chapter(index, total, chapter.title)
                try:
                    results.append(self.download_chapter(client, context, chapter, builder))
                except WritebookError as e:
                    if self.config.on_chapter_error == "abort":
                        raise
                    self.logger.error(f"Skipping chapter {chapter.id} ({chapter.slug}): {e}")
                    results.append(ChapterResult(chapter=chapter, error=str(e)))
                self.display.advance_chapters()
        finally:
            self.display.finish_progress()

        return results

    def download_chapter(
        self,
        client: WritebookClient,
        context: BookContext,
        chapter: Chapter,
        builder: MarkdownBookBuilder,
    ) -> ChapterResult:
        """Fetch, convert and write one chapter.

        Raises:
            NetworkError: If the chapter page cannot be fetched
            ParsingError: If the chapter page cannot be parsed
        """
        _, body = client.fetch(str(chapter.url))
        document = parse_document(body)

        content = select_main_content(document)
        chapter = chapter.with_title(
            resolve_chapter_title(document, context.book_title, chapter.title)
        )

        localizer = AssetLocalizer(context.origin, builder.images_dir, client.download_content)
        report = localizer.localize(content, chapter.slug)
        if report.failed:
            self.logger.warning(
                f"{len(report.failed)} image(s) left remote in {chapter.filename}",
                extra={"emoji": "images"},
            )

        clean(content, context.book_title)
        path = builder.write_chapter(chapter, to_markdown(content, chapter.title))

        return ChapterResult(
            chapter=chapter,
            markdown_path=path,
            images_localized=len(report.localized),
            images_failed=len(report.failed),
        )
