"""
Rich-based display system for writebook2md.

This module provides terminal output using the Rich library, including
the chapter progress bar, book tables and logging setup.
"""

from .constants import EMOJI_MAP, STYLES
from .rich_display import RichDisplay
from .rich_logger import EmojiLoggerAdapter, get_valid_log_levels, setup_rich_logger


__all__ = [
    "EMOJI_MAP",
    "STYLES",
    "EmojiLoggerAdapter",
    "RichDisplay",
    "get_valid_log_levels",
    "setup_rich_logger",
]
