"""
Click-based CLI commands for writebook2md.

This module provides the command-line interface:
- ``download`` converts a book into Markdown files with local images
- ``chapters`` lists the chapters found on a book's index page
- ``version`` prints the installed version
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import click
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..client import WritebookClient
from ..display import RichDisplay, get_valid_log_levels, setup_rich_logger
from ..models import WritebookConfig
from ..scraper import WritebookScraper
from ..utils.exceptions import WritebookError


# Initialize Rich console for pretty output
console = Console()


# Custom Click types
class BookURLType(click.ParamType):
    """Custom Click type for validating book index URLs."""

    name = "book_url"

    def convert(self, value: str, param: click.Parameter | None, ctx: click.Context | None) -> str:
        """Validate that the value is an absolute http(s) URL with a book path."""
        parsed = urlparse(value)
        if parsed.scheme not in {"http", "https"} or not parsed.netloc:
            self.fail(f"{value!r} is not an absolute http(s) URL", param, ctx)
        if not parsed.path.strip("/"):
            self.fail(
                f"{value!r} has no book path (expected e.g. https://host/1/my-book)", param, ctx
            )
        return value


BOOK_URL = BookURLType()


def _log_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Shared --log-level/--log-file options."""
    func = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Also write log records to this file.",
    )(func)
    func = click.option(
        "--log-level",
        type=click.Choice(get_valid_log_levels(), case_sensitive=False),
        default="WARNING",
        show_default=True,
        help="Set the logging level for detailed output.",
    )(func)
    return func


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """
    writebook2md - Convert Writebook books into Markdown.

    Downloads a book's index page and every chapter it links to, localizes
    chapter images and writes one Markdown file per chapter plus an
    index.md table of contents.

    \b
    Examples:
      # Convert a book into ./output/my-book/
      writebook2md download https://books.example.com/1/my-book

      # Choose the output root
      writebook2md download https://books.example.com/1/my-book -o ~/notes

      # Only list the chapters
      writebook2md chapters https://books.example.com/1/my-book
    """
    # If no subcommand is given, show help
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit()


@cli.command()
@click.argument("book_url", type=BOOK_URL)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Root directory for converted books (book goes to OUTPUT_DIR/<book-slug>). "
    "Defaults to ./output or $WRITEBOOK_OUTPUT_DIR.",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    default=False,
    help="Abort the run when a chapter page cannot be fetched instead of skipping it.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress all output except errors.",
)
@_log_options
def download(
    book_url: str,
    output_dir: Path | None,
    fail_fast: bool,
    quiet: bool,
    log_level: str,
    log_file: Path | None,
) -> None:
    """
    Convert a book into Markdown files.

    BOOK_URL is the address of the book's index page.

    \b
    Output:
      OUTPUT_DIR/<book-slug>/index.md          table of contents
      OUTPUT_DIR/<book-slug>/<chapter>.md      one file per chapter
      OUTPUT_DIR/<book-slug>/images/           localized images
    """
    overrides: dict[str, object] = {"log_level": log_level, "log_file": log_file}
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if fail_fast:
        overrides["on_chapter_error"] = "abort"
    config = WritebookConfig(**overrides)

    setup_rich_logger("writebook2md", config.log_level, log_file=config.log_file)
    display = RichDisplay(quiet=quiet)

    try:
        WritebookScraper(book_url, config=config, display=display).scrape()
    except WritebookError as e:
        display.exit_with_error(str(e))


@cli.command()
@click.argument("book_url", type=BOOK_URL)
@_log_options
def chapters(book_url: str, log_level: str, log_file: Path | None) -> None:
    """
    List the chapters found on a book's index page.

    Nothing is written to disk; titles are the provisional ones derived
    from chapter slugs.
    """
    config = WritebookConfig(log_level=log_level, log_file=log_file)
    setup_rich_logger("writebook2md", config.log_level, log_file=config.log_file)
    display = RichDisplay()

    try:
        with WritebookClient(config) as client:
            scraper = WritebookScraper(book_url, config=config, client=client, display=display)
            context = scraper.fetch_chapters(client)
    except WritebookError as e:
        display.exit_with_error(str(e))

    display.chapter_table(context)


@cli.command()
def version() -> None:
    """Display the version of writebook2md."""
    console.print(f"[bold cyan]writebook2md[/bold cyan] version {escape(__version__)}")


# Entry point for the CLI
def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
