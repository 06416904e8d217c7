"""HTML to Markdown conversion and post-processing."""

import re

from bs4 import Tag
from markdownify import ATX, markdownify

from ..parser.images import ORIGINAL_ASSET_MARKER


# Textual cleanup applied after conversion, in this order
CLEANUP_PASSES: tuple[tuple[re.Pattern[str], str], ...] = (
    # Reduce runs of blank lines
    (re.compile(r"\n{3,}"), "\n\n"),
    # Blank out whitespace-only lines
    (re.compile(r"^\s+$", re.MULTILINE), ""),
    # [label]() -> label
    (re.compile(r"\[([^\]]+)\]\(\s*\)"), r"\1"),
    # Leftover heading permalinks
    (re.compile(r"\s*\[#\]\(#[^)]*\)"), ""),
    # Link targets still pointing at original uploads
    (re.compile(r"\]\(" + re.escape(ORIGINAL_ASSET_MARKER) + r"[^)]+\)"), ")"),
)


# Tags whose images markdownify would otherwise reduce to their alt text
IMAGE_KEEPING_TAGS = ["td", "th", "h1", "h2", "h3", "h4", "h5", "h6"]


def html_to_markdown(content: Tag) -> str:
    """Convert a content subtree with markdownify.

    Unknown tags keep their converted content; tables become pipe tables.
    Asterisks and underscores are left unescaped so headings keep the exact
    resolved title.
    """
    return markdownify(
        str(content),
        heading_style=ATX,
        bullets="-",
        escape_underscores=False,
        escape_asterisks=False,
        escape_misc=False,
        keep_inline_images_in=IMAGE_KEEPING_TAGS,
    )


def _collapse_duplicate_title(markdown: str, title: str) -> str:
    heading = f"# {title}"
    line = rf"[ \t]*{re.escape(heading)}[ \t]*"
    # A whole run of title lines collapses at once
    pattern = re.compile(rf"^{line}(?:\n+{line})+$", re.MULTILINE)
    return pattern.sub(lambda _: heading, markdown)


def clean_markdown(markdown: str, title: str) -> str:
    """Apply the cleanup passes and make the document start with ``# {title}``.

    Args:
        markdown: Raw converter output
        title: Resolved chapter title

    Returns:
        Markdown ending with exactly one newline
    """
    for pattern, replacement in CLEANUP_PASSES:
        markdown = pattern.sub(replacement, markdown)

    markdown = _collapse_duplicate_title(markdown, title).strip()

    if not markdown.startswith("# "):
        markdown = f"# {title}\n\n{markdown}" if markdown else f"# {title}"

    return markdown + "\n"


def to_markdown(content_node: Tag, title: str) -> str:
    """Convert a cleaned content subtree into the final chapter Markdown."""
    return clean_markdown(html_to_markdown(content_node), title)
