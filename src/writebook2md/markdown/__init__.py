"""Markdown generation for writebook2md."""

from .converter import clean_markdown, html_to_markdown, to_markdown


__all__ = ["clean_markdown", "html_to_markdown", "to_markdown"]
