"""Rich-based display system for writebook2md."""

import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from ..models import BookContext
from .constants import EMOJI_MAP, PROGRESS_COLORS, STYLES


class RichDisplay:
    """
    Rich-based display system for writebook2md.

    Shows the progress lines of a conversion run ("Fetching book index",
    "Found N chapters", one line per chapter, final output location) and
    a chapter progress bar.
    """

    def __init__(self, quiet: bool = False, console: Console | None = None):
        """
        Initialize RichDisplay.

        Args:
            quiet: If True, suppress all output except errors
            console: Console to render to (default: stdout)
        """
        self.console = console or Console()
        self.quiet = quiet
        self.progress: Progress | None = None
        self.chapters_task: TaskID | None = None

    def out(self, message: str) -> None:
        """
        Display a regular message.

        Args:
            message: Message to display
        """
        if self.quiet:
            return
        self.console.print(message, markup=False, highlight=False)

    def fetching(self, url: str) -> None:
        """Announce the index page fetch."""
        self.out(f"{EMOJI_MAP['fetch']} Fetching book index: {url}")

    def book_info(self, context: BookContext) -> None:
        """
        Display book details in a Rich Table.

        Args:
            context: Book context built from the index page
        """
        if self.quiet:
            return

        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Field", style=STYLES["book_title"], no_wrap=True)
        table.add_column("Value", style=STYLES["book_info"])

        table.add_row(f"{EMOJI_MAP['book']} Title", escape(context.book_title))
        table.add_row("🔗 URL", escape(context.book_url))
        table.add_row(f"{EMOJI_MAP['chapters']} Chapters", str(len(context.chapters)))

        panel = Panel(
            table,
            title="[bold green]Book Information[/bold green]",
            border_style="green",
            padding=(1, 2),
        )
        self.console.print()
        self.console.print(panel)
        self.out(f"Found {len(context.chapters)} chapters")

    def chapter_table(self, context: BookContext) -> None:
        """Print the discovered chapters (id, slug, title)."""
        table = Table(title=escape(context.book_title), header_style=STYLES["book_title"])
        table.add_column("#", justify="right")
        table.add_column("ID", justify="right")
        table.add_column("Slug")
        table.add_column("Title")
        for index, chapter in enumerate(context.chapters, start=1):
            table.add_row(str(index), chapter.id, escape(chapter.slug), escape(chapter.title))
        self.console.print(table)

    def start_progress(self, chapters: int) -> None:
        """
        Initialize the chapter progress bar.

        Args:
            chapters: Total number of chapters
        """
        if self.quiet or chapters <= 0:
            return

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(
                complete_style=PROGRESS_COLORS["complete"],
                finished_style=PROGRESS_COLORS["finished"],
            ),
            TaskProgressColumn(),
            TextColumn("{task.completed}/{task.total}"),
            TimeRemainingColumn(),
            console=self.console,
            transient=True,
        )
        self.progress.start()
        self.chapters_task = self.progress.add_task(
            f"{EMOJI_MAP['chapters']} Chapters",
            total=chapters,
        )

    def chapter(self, index: int, total: int, title: str) -> None:
        """Announce the chapter being converted."""
        self.out(f"  [{index}/{total}] {title}")

    def advance_chapters(self, advance: int = 1) -> None:
        """Advance the chapter progress bar."""
        if self.progress is not None and self.chapters_task is not None:
            self.progress.advance(self.chapters_task, advance)

    def finish_progress(self) -> None:
        """Complete and cleanup progress display."""
        if self.progress is not None:
            self.progress.stop()
            self.progress = None
            self.chapters_task = None

    def error(self, message: str) -> None:
        """
        Display error message with Rich formatting.

        Args:
            message: Error message to display
        """
        self.console.print(f"[bold red]{EMOJI_MAP['error']} Error:[/bold red] {escape(message)}")

    def exit_with_error(self, message: str) -> None:
        """
        Display error and exit.

        Args:
            message: Error message to display before exiting
        """
        self.finish_progress()
        self.console.print(
            f"\n[bold red]{EMOJI_MAP['error']} Fatal Error:[/bold red] {escape(message)}\n"
        )
        sys.exit(1)

    def success(self, message: str) -> None:
        """
        Display success message.

        Args:
            message: Success message to display
        """
        if self.quiet:
            return
        self.console.print(f"[bold green]{EMOJI_MAP['success']} {escape(message)}[/bold green]")

    def done(self, output_dir: Path, failed: int = 0) -> None:
        """
        Display completion message.

        Args:
            output_dir: Directory the book was written to
            failed: Number of chapters that could not be converted
        """
        if failed:
            self.error(f"{failed} chapter(s) could not be converted, see the log for details")
        self.success(f"Done! Output saved to: {output_dir}")
