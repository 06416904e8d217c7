"""Pydantic models for chapters and their localized assets."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class Chapter(BaseModel):
    """Single chapter of a Writebook book.

    Chapters are discovered on the index page with a title derived from their
    slug; once the chapter page is fetched, a copy carrying the real title
    replaces the provisional one (see ``with_title``).
    """

    model_config = ConfigDict(frozen=True)

    # Identification
    id: str = Field(..., description="Numeric chapter id, sort and de-duplication key")
    slug: str = Field(..., min_length=1, description="URL segment, filename stem and image prefix")

    # Content
    title: str = Field(..., description="Display title")
    url: HttpUrl = Field(..., description="Absolute chapter page URL")

    @field_validator("id")
    @classmethod
    def id_must_be_numeric(cls, v: str) -> str:
        """Reject ids that cannot be sorted numerically."""
        if not v.isdigit():
            raise ValueError(f"chapter id must be digits only, got {v!r}")
        return v

    @property
    def sort_key(self) -> int:
        """Numeric ordering key (``"9"`` sorts before ``"10"``)."""
        return int(self.id)

    @property
    def filename(self) -> str:
        """Output Markdown filename."""
        return f"{self.slug}.md"

    def with_title(self, title: str) -> "Chapter":
        """Return a copy of this chapter carrying the resolved page title."""
        return self.model_copy(update={"title": title})


class LocalAsset(BaseModel):
    """An image downloaded once and referenced through a relative path."""

    model_config = ConfigDict(frozen=True)

    remote_url: str
    local_filename: str
    local_path: Path

    @property
    def relative_src(self) -> str:
        """Path used in rewritten ``src``/``href`` attributes."""
        return f"images/{self.local_filename}"
