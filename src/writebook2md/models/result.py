"""Per-chapter processing outcome."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .chapter import Chapter


class ChapterResult(BaseModel):
    """What happened to a single chapter during a run."""

    model_config = ConfigDict(frozen=True)

    chapter: Chapter
    markdown_path: Path | None = None
    images_localized: int = Field(default=0, ge=0)
    images_failed: int = Field(default=0, ge=0)
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the chapter Markdown was written."""
        return self.error is None and self.markdown_path is not None
