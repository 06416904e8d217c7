"""Rich-based logger configuration for writebook2md."""

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from .constants import DATE_FORMAT, EMOJI_MAP, FILE_LOG_FORMAT, LOG_FORMAT, VALID_LOG_LEVELS


def get_valid_log_levels() -> list[str]:
    """Return a list of valid log level names."""
    return list(VALID_LOG_LEVELS)


def setup_rich_logger(
    name: str = "writebook2md",
    level: int | str = logging.INFO,
    show_time: bool = True,
    show_path: bool = False,
    log_file: Path | str | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """
    Set up a Rich-based logger with emoji support.

    Args:
        name: Logger name
        level: Logging level, as a number or a name such as "DEBUG"
        show_time: Show timestamp in logs
        show_path: Show file path in logs
        log_file: Optional file that receives the same records as plain text
        console: Console to log to (default: a new stderr console)

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    # Create Rich handler
    rich_handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=False,
    )
    rich_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Create logger
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()  # Clear any existing handlers
    logger.addHandler(rich_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


class EmojiLoggerAdapter(logging.LoggerAdapter[logging.Logger]):
    """
    Logger adapter that adds emojis to log messages.

    Usage:
        logger = setup_rich_logger("writebook2md")
        emoji_logger = EmojiLoggerAdapter(logger, {})
        emoji_logger.info("Fetching book index", extra={"emoji": "fetch"})
    """

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        """Log with the call level available to `process`."""
        super().log(level, msg, *args, levelno=level, **kwargs)

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        """Add emoji prefix to messages based on level or extra data."""
        levelno = kwargs.pop("levelno", self.logger.getEffectiveLevel())

        # Check for explicit emoji in extra
        extra = kwargs.get("extra", {})
        emoji_key = extra.pop("emoji", None) if isinstance(extra, dict) else None

        # Determine emoji
        if emoji_key and emoji_key in EMOJI_MAP:
            emoji = EMOJI_MAP[emoji_key]
        else:
            # Use level-based emoji
            if levelno >= logging.CRITICAL:
                emoji = EMOJI_MAP["critical"]
            elif levelno >= logging.ERROR:
                emoji = EMOJI_MAP["error"]
            elif levelno >= logging.WARNING:
                emoji = EMOJI_MAP["warning"]
            elif levelno >= logging.INFO:
                emoji = EMOJI_MAP["info"]
            else:
                emoji = EMOJI_MAP["debug"]

        return f"{emoji} {msg}", kwargs
