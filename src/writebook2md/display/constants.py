"""Constants for Rich display system."""

# Emoji mappings for log levels and operations
EMOJI_MAP = {
    "debug": "🔍",
    "info": "ℹ️",  # noqa: RUF001
    "success": "✓",
    "warning": "⚠️",
    "error": "✗",
    "critical": "🚨",
    "fetch": "📥",
    "book": "📚",
    "chapters": "📄",
    "images": "🖼️",
    "complete": "✓",
}

# Rich styles for book tables
STYLES = {
    "book_title": "bold cyan",
    "book_info": "white",
}

# Log format
LOG_FORMAT = "%(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "[%Y-%m-%d %H:%M:%S]"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Progress bar colors
PROGRESS_COLORS = {
    "complete": "green",
    "finished": "bright_green",
}
