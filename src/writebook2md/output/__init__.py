"""Output layout for converted books."""

from .builder import MarkdownBookBuilder, build_toc


__all__ = ["MarkdownBookBuilder", "build_toc"]
