"""Convert Writebook web books into local Markdown trees with localized images."""

__version__ = "1.0.0"

from .models import BookContext, Chapter, WritebookConfig  # noqa: E402
from .scraper import WritebookScraper  # noqa: E402


__all__ = [
    "BookContext",
    "Chapter",
    "WritebookConfig",
    "WritebookScraper",
    "__version__",
]
