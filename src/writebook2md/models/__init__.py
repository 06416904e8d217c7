"""Data models for writebook2md."""

from .book import BookContext
from .chapter import Chapter, LocalAsset
from .config import WritebookConfig
from .result import ChapterResult


__all__ = [
    "BookContext",
    "Chapter",
    "ChapterResult",
    "LocalAsset",
    "WritebookConfig",
]
