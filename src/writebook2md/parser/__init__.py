"""HTML discovery and content heuristics for writebook2md."""

from .directory import discover, extract_book_title
from .html import (
    ContentSelector,
    MarkupCleaner,
    TitleResolver,
    clean,
    parse_document,
    resolve_chapter_title,
    select_main_content,
)
from .images import AssetLocalizer, LocalizationReport, localize_images


__all__ = [
    "AssetLocalizer",
    "ContentSelector",
    "LocalizationReport",
    "MarkupCleaner",
    "TitleResolver",
    "clean",
    "discover",
    "extract_book_title",
    "localize_images",
    "parse_document",
    "resolve_chapter_title",
    "select_main_content",
]
