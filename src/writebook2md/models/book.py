"""Pydantic model for the per-run book context."""

from pydantic import BaseModel, ConfigDict, Field

from ..utils.urls import book_path, book_slug, origin_of
from .chapter import Chapter


class BookContext(BaseModel):
    """Everything known about the book being converted.

    The context is immutable: the book title is resolved once while reading
    the index page and every later stage receives it from here. Replacing
    the chapter list (after titles are resolved) yields a new context.
    """

    model_config = ConfigDict(frozen=True)

    book_url: str = Field(..., description="URL of the book index page")
    origin: str = Field(..., description="scheme://host of the book site")
    book_path: str = Field(..., description="'{book_id}/{book_slug}' path segment")
    book_slug: str = Field(..., description="Last path segment, used as output directory name")
    book_title: str = Field(..., description="Book title from the index page")
    chapters: tuple[Chapter, ...] = Field(default_factory=tuple)

    @classmethod
    def from_url(
        cls, book_url: str, book_title: str, chapters: list[Chapter] | None = None
    ) -> "BookContext":
        """Build a context, deriving origin, path and slug from ``book_url``."""
        return cls(
            book_url=book_url,
            origin=origin_of(book_url),
            book_path=book_path(book_url),
            book_slug=book_slug(book_url),
            book_title=book_title,
            chapters=tuple(chapters or ()),
        )

    def with_chapters(self, chapters: list[Chapter]) -> "BookContext":
        """Return a copy of the context owning ``chapters``."""
        return self.model_copy(update={"chapters": tuple(chapters)})
